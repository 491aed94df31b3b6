"""What a repository's package.json declares about the tracked kits."""

from __future__ import annotations

from dataclasses import dataclass, field

from .repository import Repository

_VALID_SOURCES = {"name", "dependency"}


@dataclass(frozen=True)
class KitDeclaration:
    """Declared version of one tracked kit plus its display-only companion version."""

    version: str
    companion_version: str | None = None
    source: str = "dependency"

    def __post_init__(self) -> None:
        if not self.version:
            raise ValueError("Declared version must be non-empty")
        if self.source not in _VALID_SOURCES:
            raise ValueError(f"Invalid declaration source: {self.source}")


@dataclass(frozen=True)
class ManifestDetails:
    """Inspection result for one repository, keyed by tracked package key."""

    repository: Repository
    package_name: str = ""
    declarations: dict[str, KitDeclaration] = field(default_factory=dict)
    last_committer: str | None = None
