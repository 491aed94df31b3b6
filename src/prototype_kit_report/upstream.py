"""Resolve the latest released version of each tracked kit from its upstream manifest."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from .errors import FetchError, ParseError
from .http import HttpClient, decode_json, is_success
from .models import TrackedPackage
from .parsers.package_json import dependencies
from .parsers.semver import format_version, min_version, parse_version


def extract_latest_version(document: Any, package: TrackedPackage) -> str:
    """Return the latest version declared by an upstream kit manifest."""
    if not isinstance(document, dict):
        raise ParseError(f"Upstream manifest for {package.name} is not a JSON object")

    # Compatibility shim: the upstream repositories were restructured so that
    # their package.json depends on the published kit instead of being it. When
    # the kit appears in its own dependencies, that range is the release.
    self_reference = dependencies(document).get(package.name)
    if self_reference is not None:
        resolved = min_version(self_reference)
        if resolved is None:
            raise ParseError(
                f"Upstream manifest for {package.name} depends on itself with "
                f"unresolvable range '{self_reference}'"
            )
        return format_version(resolved)

    version = parse_version(document.get("version"))
    if version is None:
        raise ParseError(f"Upstream manifest for {package.name} has no valid version field")
    return format_version(version)


def fetch_latest_version(client: HttpClient, package: TrackedPackage) -> str:
    url = package.manifest_url
    response = client.get(url)
    if not is_success(response):
        raise FetchError(
            f"Failed to fetch template version from {url}: HTTP {response.status_code}"
        )
    return extract_latest_version(decode_json(response, url), package)


def resolve_latest_versions(
    client: HttpClient, packages: Iterable[TrackedPackage]
) -> dict[str, str]:
    """Fetch every tracked kit's latest version concurrently.

    Returns a mapping keyed by ``TrackedPackage.key``. Any failure aborts the
    whole resolution: the first error in package order is re-raised.
    """
    packages = list(packages)
    with ThreadPoolExecutor(max_workers=max(len(packages), 1)) as executor:
        futures = [
            (package, executor.submit(fetch_latest_version, client, package))
            for package in packages
        ]
        return {package.key: future.result() for package, future in futures}
