"""GitHub REST helpers: organisation repository listing and last committer lookup."""

from __future__ import annotations

import sys
from collections.abc import Iterator

from .errors import ApiError, ApiShapeError, ReportError
from .http import HttpClient, decode_json, is_success
from .models import Repository

DEFAULT_PAGE_SIZE = 100


def iter_repositories(
    client: HttpClient,
    organization: str,
    *,
    api_base: str = "https://api.github.com",
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Iterator[Repository]:
    """Yield non-archived repositories of ``organization`` page by page.

    Pages are requested from 1 upwards; a page shorter than ``page_size`` is the
    last one. Any non-success response raises ApiError and a body that is not a
    JSON array raises ApiShapeError.
    """
    url = f"{api_base}/orgs/{organization}/repos"
    page = 1
    while True:
        response = client.get(
            url,
            params={"per_page": page_size, "page": page},
            authenticated=True,
        )
        if not is_success(response):
            raise ApiError(response.status_code, response.text)

        data = decode_json(response, url)
        if not isinstance(data, list):
            raise ApiShapeError("Expected array of repos but got non-array")

        for entry in data:
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            repository = Repository.from_api(entry)
            if repository.archived:
                continue
            yield repository

        if len(data) < page_size:
            return
        page += 1


def list_repositories(
    client: HttpClient,
    organization: str,
    *,
    api_base: str = "https://api.github.com",
    page_size: int = DEFAULT_PAGE_SIZE,
) -> list[Repository]:
    return list(
        iter_repositories(client, organization, api_base=api_base, page_size=page_size)
    )


def fetch_last_committer(
    client: HttpClient,
    organization: str,
    repository: Repository,
    *,
    api_base: str = "https://api.github.com",
) -> str | None:
    """Return the author of the newest commit on the repository's default branch.

    Prefers the git author name, then the GitHub login, then "Unknown". Returns
    None when the lookup fails; failures are reported as warnings only.
    """
    url = f"{api_base}/repos/{organization}/{repository.name}/commits"
    try:
        response = client.get(
            url,
            params={"sha": repository.default_branch, "per_page": 1},
            authenticated=True,
        )
        if not is_success(response):
            return None
        data = decode_json(response, url)
    except ReportError as exc:
        print(
            f"WARNING: [{repository.name}] Failed to get last committer: {exc}",
            file=sys.stderr,
        )
        return None

    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        return None

    commit = data[0]
    details = commit.get("commit") or {}
    author = (details.get("author") or {}) if isinstance(details, dict) else None
    user = commit.get("author") or {}
    if not all(isinstance(part, dict) for part in (details, author, user)):
        print(
            f"WARNING: [{repository.name}] Failed to get last committer: malformed commit payload",
            file=sys.stderr,
        )
        return None

    if author.get("name"):
        return str(author["name"])
    login = user.get("login")
    if login:
        return str(login)
    return "Unknown"
