"""Data models for the prototype kit version report."""

from __future__ import annotations

from .classification import Classification
from .manifest_details import KitDeclaration, ManifestDetails
from .repository import Repository
from .repository_summary import ReportGroup, RepositorySummary
from .tracked_package import (
    DEFAULT_PACKAGES,
    GOV_PROTOTYPE_KIT,
    NHS_PROTOTYPE_KIT,
    TrackedPackage,
)

__all__ = [
    "Classification",
    "DEFAULT_PACKAGES",
    "GOV_PROTOTYPE_KIT",
    "KitDeclaration",
    "ManifestDetails",
    "NHS_PROTOTYPE_KIT",
    "ReportGroup",
    "Repository",
    "RepositorySummary",
    "TrackedPackage",
]
