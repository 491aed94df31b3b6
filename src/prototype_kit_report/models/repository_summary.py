"""Report row models."""

from __future__ import annotations

from dataclasses import dataclass

from packaging.version import Version

from ..parsers.semver import format_version, min_version
from .classification import Classification
from .repository import Repository
from .tracked_package import TrackedPackage


@dataclass(frozen=True)
class RepositorySummary:
    """One classified repository in a report group."""

    repository: Repository
    declared: str
    classification: Classification
    companion_version: str | None = None
    last_committer: str | None = None

    @property
    def resolved(self) -> Version | None:
        return min_version(self.declared)

    @property
    def display_version(self) -> str:
        """Resolved minimum version when there is one, else the declared text."""
        resolved = self.resolved
        if resolved is None:
            return self.declared
        return format_version(resolved)


@dataclass(frozen=True)
class ReportGroup:
    """Classified, sorted rows for one tracked package."""

    package: TrackedPackage
    latest: str
    entries: tuple[RepositorySummary, ...]

    @property
    def totals(self) -> dict[str, int]:
        counts = {classification.css_class: 0 for classification in Classification}
        for entry in self.entries:
            counts[entry.classification.css_class] += 1
        return counts
