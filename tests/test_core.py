from __future__ import annotations

from datetime import date

import pytest
from conftest import FakeResponse, commits_url, manifest_url, repo, repos_url, upstream_routes

from prototype_kit_report.core import run_report
from prototype_kit_report.errors import ApiError, FetchError
from prototype_kit_report.models import Classification, NHS_PROTOTYPE_KIT


def _kit(version: str) -> FakeResponse:
    return FakeResponse(body={"name": "prototype", "dependencies": {"nhsuk-prototype-kit": version}})


def test_end_to_end_report(session, client, config):
    session.routes.update(upstream_routes(nhs="4.3.0", gov="13.2.0"))
    session.add(
        repos_url(page=1),
        FakeResponse(
            body=[
                repo("current"),
                repo("behind"),
                repo("ancient"),
                repo("no-manifest"),
                repo("retired", archived=True),
                repo("gov-kit", branch="master"),
            ]
        ),
    )
    session.add(manifest_url("current"), _kit("4.3.0"))
    session.add(manifest_url("behind"), _kit("4.1.0"))
    session.add(manifest_url("ancient"), _kit("3.9.0"))
    session.add(manifest_url("retired"), _kit("1.0.0"))
    session.add(
        manifest_url("gov-kit", branch="master"),
        FakeResponse(body={"dependencies": {"govuk-prototype-kit": "^13.2.0"}}),
    )
    session.add(commits_url("current"), FakeResponse(body=[{"commit": {"author": {"name": "Alex"}}}]))

    result = run_report(config, client=client, today=date(2026, 10, 19))

    nhs, gov = result.groups
    assert result.latest == {"nhs": "4.3.0", "gov": "13.2.0"}
    assert result.repositories_scanned == 5
    assert [(e.repository.name, e.classification) for e in nhs.entries] == [
        ("current", Classification.UP_TO_DATE),
        ("behind", Classification.SLIGHTLY_OUTDATED),
        ("ancient", Classification.OUTDATED),
    ]
    assert nhs.entries[0].last_committer == "Alex"
    assert [(e.repository.name, e.classification) for e in gov.entries] == [
        ("gov-kit", Classification.UP_TO_DATE)
    ]
    assert manifest_url("retired") not in session.urls()

    html = config.output_path.read_text(encoding="utf-8")
    assert result.output_path == config.output_path
    assert "no-manifest" not in html
    assert "Last Updated: 19 October 2026" in html


def test_upstream_failure_aborts_before_listing(session, client, config):
    session.routes.update(upstream_routes())
    session.add(NHS_PROTOTYPE_KIT.manifest_url, FakeResponse(404, text="404: Not Found"))

    with pytest.raises(FetchError):
        run_report(config, client=client)

    assert repos_url(page=1) not in session.urls()
    assert not config.output_path.exists()


def test_listing_failure_aborts_without_writing(session, client, config):
    session.routes.update(upstream_routes())
    session.add(repos_url(page=1), FakeResponse(403, text="rate limited"))

    with pytest.raises(ApiError):
        run_report(config, client=client)

    assert not config.output_path.exists()


def test_malformed_commit_payload_does_not_abort_the_run(session, client, config):
    session.routes.update(upstream_routes(nhs="4.3.0", gov="13.2.0"))
    session.add(repos_url(page=1), FakeResponse(body=[repo("kit")]))
    session.add(manifest_url("kit"), _kit("4.3.0"))
    session.add(commits_url("kit"), FakeResponse(body=[{"commit": {"author": "x"}}]))

    result = run_report(config, client=client, today=date(2026, 10, 19))

    [entry] = result.groups[0].entries
    assert entry.repository.name == "kit"
    assert entry.last_committer is None
    assert config.output_path.exists()
