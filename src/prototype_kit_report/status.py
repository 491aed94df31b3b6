"""Classify declared kit versions against the latest release and order report rows."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Classification, RepositorySummary
from .parsers.semver import min_version, parse_version


def classify(declared: str, latest: str) -> Classification:
    """Compare the lowest version satisfying ``declared`` with ``latest``.

    Equal is up to date, the same major line is slightly outdated and anything
    else is outdated. Unresolvable input on either side is unknown.
    """
    resolved = min_version(declared)
    latest_version = parse_version(latest)
    if resolved is None or latest_version is None:
        return Classification.UNKNOWN
    if resolved == latest_version:
        return Classification.UP_TO_DATE
    if resolved.major == latest_version.major:
        return Classification.SLIGHTLY_OUTDATED
    return Classification.OUTDATED


def sort_summaries(summaries: Iterable[RepositorySummary]) -> list[RepositorySummary]:
    """Newest resolved version first; unresolvable rows trail in their original order."""
    resolvable: list[RepositorySummary] = []
    unresolvable: list[RepositorySummary] = []
    for summary in summaries:
        (unresolvable if summary.resolved is None else resolvable).append(summary)

    # list.sort is stable with reverse=True, so ties keep their input order
    resolvable.sort(key=lambda summary: summary.resolved, reverse=True)
    return resolvable + unresolvable
