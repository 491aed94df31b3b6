"""Repository descriptor returned by the organisation listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Repository:
    name: str
    default_branch: str = "main"
    archived: bool = False
    html_url: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Repository:
        return cls(
            name=str(data["name"]),
            default_branch=str(data.get("default_branch") or "main"),
            archived=bool(data.get("archived", False)),
            html_url=data.get("html_url"),
        )
