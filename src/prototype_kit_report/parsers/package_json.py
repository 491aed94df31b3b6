"""Parse package.json documents and detect declared prototype kits."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from ..errors import ParseError
from ..models import KitDeclaration, TrackedPackage


def parse(text: str) -> dict[str, Any]:
    """Return the manifest as a dict; malformed JSON or a non-object raises ParseError."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise ParseError("package.json must contain a JSON object")
    return data


def dependencies(document: dict[str, Any]) -> dict[str, Any]:
    deps = document.get("dependencies")
    return deps if isinstance(deps, dict) else {}


def _string(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def find_kit_declarations(
    document: dict[str, Any], packages: Iterable[TrackedPackage]
) -> dict[str, KitDeclaration]:
    """Return declarations keyed by tracked package key.

    A manifest that *is* a kit (its ``name`` matches and it has a ``version``)
    declares that version; otherwise a ``dependencies`` entry for the kit is the
    declared range. Each kit is checked on its own, so a manifest can be one kit
    and depend on the other.
    """
    deps = dependencies(document)
    name = document.get("name")
    own_version = _string(document.get("version"))

    found: dict[str, KitDeclaration] = {}
    for package in packages:
        companion = _string(deps.get(package.companion)) if package.companion else None

        if name == package.name and own_version:
            found[package.key] = KitDeclaration(
                version=own_version, companion_version=companion, source="name"
            )
            continue

        declared = _string(deps.get(package.name))
        if declared:
            found[package.key] = KitDeclaration(
                version=declared, companion_version=companion, source="dependency"
            )

    return found
