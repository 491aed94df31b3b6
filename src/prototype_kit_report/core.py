"""Core report entrypoint.

This module MUST NOT parse command line arguments or read the environment so it
can be driven by the CLI, the scheduled workflow and tests alike.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .config import ReportConfig
from .github import list_repositories
from .http import HttpClient
from .inspection import inspect_repository
from .models import ManifestDetails, ReportGroup, Repository
from .render import render_report, write_report
from .report import aggregate
from .upstream import resolve_latest_versions


@dataclass(frozen=True)
class ReportResult:
    output_path: Path
    latest: dict[str, str]
    groups: tuple[ReportGroup, ...]
    repositories_scanned: int


def build_client(config: ReportConfig) -> HttpClient:
    return HttpClient(config.token, timeout=config.timeout, user_agent=config.user_agent)


def inspect_all(
    client: HttpClient, config: ReportConfig, repositories: list[Repository]
) -> list[ManifestDetails]:
    """Inspect repositories on a thread pool; results come back in input order."""
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        results = executor.map(
            lambda repository: inspect_repository(client, config, repository), repositories
        )
        return [details for details in results if details is not None]


def run_report(
    config: ReportConfig,
    client: HttpClient | None = None,
    today: date | None = None,
) -> ReportResult:
    """Generate the version report and write it to ``config.output_path``.

    Failing to resolve an upstream version or to list repositories raises a
    ReportError; per-repository problems only drop that repository.
    """
    own_client = client is None
    client = client or build_client(config)
    try:
        latest = resolve_latest_versions(client, config.packages)
        repositories = list_repositories(
            client,
            config.organization,
            api_base=config.api_base,
            page_size=config.page_size,
        )
        inspections = inspect_all(client, config, repositories)
    finally:
        if own_client:
            client.close()

    groups = aggregate(config.packages, latest, inspections)
    html = render_report(groups, config.organization, today or date.today())
    output_path = write_report(config.output_path, html)

    return ReportResult(
        output_path=output_path,
        latest=latest,
        groups=tuple(groups),
        repositories_scanned=len(repositories),
    )
