"""Fetch a repository's package.json and record which tracked kits it declares."""

from __future__ import annotations

import sys

from .config import ReportConfig
from .errors import FetchError, ParseError
from .github import fetch_last_committer
from .http import HttpClient, is_success
from .models import ManifestDetails, Repository
from .parsers import package_json

MANIFEST_FILENAME = "package.json"


def raw_manifest_url(config: ReportConfig, repository: Repository) -> str:
    return (
        f"{config.raw_base}/{config.organization}/{repository.name}/"
        f"{repository.default_branch}/{MANIFEST_FILENAME}"
    )


def _warn(repository: Repository, message: str) -> None:
    print(f"WARNING: [{repository.name}] Skipped - {message}", file=sys.stderr)


def inspect_repository(
    client: HttpClient, config: ReportConfig, repository: Repository
) -> ManifestDetails | None:
    """Return the kits declared by ``repository`` or None when it declares none.

    A missing manifest is a silent omission; transport failures and malformed
    manifests are reported as warnings. Nothing here aborts the run.
    """
    url = raw_manifest_url(config, repository)
    try:
        response = client.get(url)
    except FetchError as exc:
        _warn(repository, str(exc))
        return None

    if not is_success(response):
        return None

    try:
        document = package_json.parse(response.text)
    except ParseError as exc:
        _warn(repository, str(exc))
        return None

    declarations = package_json.find_kit_declarations(document, config.packages)
    if not declarations:
        return None

    last_committer = None
    if config.include_committers:
        last_committer = fetch_last_committer(
            client, config.organization, repository, api_base=config.api_base
        )

    name = document.get("name")
    return ManifestDetails(
        repository=repository,
        package_name=name if isinstance(name, str) else "",
        declarations=declarations,
        last_committer=last_committer,
    )
