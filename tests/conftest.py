from __future__ import annotations

import json
import threading
from typing import Any

import pytest

from prototype_kit_report.config import ReportConfig
from prototype_kit_report.http import HttpClient
from prototype_kit_report.models import GOV_PROTOTYPE_KIT, NHS_PROTOTYPE_KIT

RAW = "https://raw.githubusercontent.com"
API = "https://api.github.com"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)


class FakeSession:
    """Serve canned responses keyed by URL (plus query params when given).

    Unknown URLs answer 404. Values may be a FakeResponse, a list of them for
    paginated URLs keyed without params, or an exception instance to raise.
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[tuple[str, dict[str, Any] | None, dict[str, str]]] = []
        self._lock = threading.Lock()

    def add(self, url: str, response: Any) -> None:
        self.routes[url] = response

    def get(self, url, params=None, headers=None, timeout=None):
        with self._lock:
            self.calls.append((url, params, dict(headers or {})))
        key = url
        if params:
            key = url + "?" + "&".join(f"{k}={v}" for k, v in params.items())
        response = self.routes.get(key, self.routes.get(url))
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FakeResponse(404, text="404: Not Found")
        return response

    def urls(self) -> list[str]:
        return [url for url, _, _ in self.calls]


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> HttpClient:
    return HttpClient("test-token", session=session)


@pytest.fixture
def config(tmp_path) -> ReportConfig:
    return ReportConfig(
        token="test-token",
        organization="nhsbsa",
        output_path=tmp_path / "index.html",
        max_workers=2,
    )


def repo(name: str, archived: bool = False, branch: str = "main") -> dict[str, Any]:
    return {"name": name, "archived": archived, "default_branch": branch}


def manifest_url(name: str, branch: str = "main", org: str = "nhsbsa") -> str:
    return f"{RAW}/{org}/{name}/{branch}/package.json"


def repos_url(org: str = "nhsbsa", page: int = 1, per_page: int = 100) -> str:
    return f"{API}/orgs/{org}/repos?per_page={per_page}&page={page}"


def commits_url(name: str, branch: str = "main", org: str = "nhsbsa") -> str:
    return f"{API}/repos/{org}/{name}/commits?sha={branch}&per_page=1"


def upstream_routes(nhs: str = "4.3.0", gov: str = "13.2.0") -> dict[str, FakeResponse]:
    return {
        NHS_PROTOTYPE_KIT.manifest_url: FakeResponse(
            body={"name": "nhsuk-prototype-kit", "version": nhs}
        ),
        GOV_PROTOTYPE_KIT.manifest_url: FakeResponse(
            body={"name": "govuk-prototype-kit", "version": gov}
        ),
    }
