"""Tracked prototype kit model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TrackedPackage:
    """A prototype kit whose declared versions are checked against upstream."""

    key: str
    name: str
    title: str
    manifest_url: str
    companion: str | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Tracked package key must be non-empty")
        if not self.name:
            raise ValueError("Tracked package name must be non-empty")
        if not self.title:
            raise ValueError("Tracked package title must be non-empty")
        if not self.manifest_url.startswith(("http://", "https://")):
            raise ValueError(f"Tracked package '{self.key}' needs an http(s) manifest URL")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrackedPackage:
        return cls(
            key=data["key"],
            name=data["name"],
            title=data["title"],
            manifest_url=data["manifestUrl"],
            companion=data.get("companion"),
        )


NHS_PROTOTYPE_KIT = TrackedPackage(
    key="nhs",
    name="nhsuk-prototype-kit",
    title="NHS Prototype Kit",
    manifest_url="https://raw.githubusercontent.com/nhsuk/nhsuk-prototype-kit/main/package.json",
    companion="nhsuk-frontend",
)

GOV_PROTOTYPE_KIT = TrackedPackage(
    key="gov",
    name="govuk-prototype-kit",
    title="GOV.UK Prototype Kit",
    manifest_url="https://raw.githubusercontent.com/alphagov/govuk-prototype-kit/main/package.json",
    companion="govuk-frontend",
)

DEFAULT_PACKAGES = (NHS_PROTOTYPE_KIT, GOV_PROTOTYPE_KIT)
