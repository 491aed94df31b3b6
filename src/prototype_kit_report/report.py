"""Report aggregation: turn inspections into classified, sorted groups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .models import ManifestDetails, ReportGroup, RepositorySummary, TrackedPackage
from .status import classify, sort_summaries


def summarise(
    details: ManifestDetails, package: TrackedPackage, latest: str
) -> RepositorySummary | None:
    """Return the report row for ``package`` or None if the manifest does not declare it."""
    declaration = details.declarations.get(package.key)
    if declaration is None:
        return None
    return RepositorySummary(
        repository=details.repository,
        declared=declaration.version,
        classification=classify(declaration.version, latest),
        companion_version=declaration.companion_version,
        last_committer=details.last_committer,
    )


def aggregate(
    packages: Iterable[TrackedPackage],
    latest: Mapping[str, str],
    inspections: Iterable[ManifestDetails],
) -> list[ReportGroup]:
    """Build one group per tracked package, in configuration order.

    The same classification and ordering rules apply to every package.
    """
    inspections = list(inspections)
    groups: list[ReportGroup] = []
    for package in packages:
        rows = [
            row
            for row in (summarise(details, package, latest[package.key]) for details in inspections)
            if row is not None
        ]
        groups.append(
            ReportGroup(
                package=package,
                latest=latest[package.key],
                entries=tuple(sort_summaries(rows)),
            )
        )
    return groups
