"""Freshness classification of a declared kit version."""

from __future__ import annotations

from enum import Enum


class Classification(Enum):
    """How far a repository's declared version lags behind the latest release."""

    UP_TO_DATE = ("uptodate", "✅ Up-To-Date")
    SLIGHTLY_OUTDATED = ("slightly-outdated", "⚠️ Slightly Outdated")
    OUTDATED = ("outdated", "❌ Outdated")
    UNKNOWN = ("unknown", "❓ Unknown")

    def __init__(self, css_class: str, label: str) -> None:
        self.css_class = css_class
        self.label = label
