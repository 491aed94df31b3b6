from __future__ import annotations

import pytest

from prototype_kit_report import cli
from prototype_kit_report.errors import ApiError


def test_missing_token_exits_non_zero(monkeypatch, capsys):
    monkeypatch.delenv("GH_TOKEN", raising=False)
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("KIT_REPORT_CONFIG", raising=False)

    assert cli.main([]) == 1
    assert capsys.readouterr().err.startswith("ERROR: Missing GitHub token")


def test_fatal_report_error_is_printed(monkeypatch, capsys):
    monkeypatch.setenv("GH_TOKEN", "t")
    monkeypatch.delenv("KIT_REPORT_CONFIG", raising=False)

    def fail(config):
        raise ApiError(500, "server error")

    monkeypatch.setattr(cli, "run_report", fail)

    assert cli.main([]) == 1
    assert "ERROR: GitHub API error (status 500): server error" in capsys.readouterr().err


def test_flags_are_passed_into_config(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("GH_TOKEN", "t")
    monkeypatch.delenv("KIT_REPORT_CONFIG", raising=False)
    seen = {}

    def fake_run(config):
        seen["config"] = config
        raise ApiError(401, "nope")

    monkeypatch.setattr(cli, "run_report", fake_run)

    cli.main(
        ["--org", "alphagov", "--output", str(tmp_path / "r.html"), "--no-committers", "--max-workers", "3"]
    )

    config = seen["config"]
    assert config.organization == "alphagov"
    assert config.output_path == tmp_path / "r.html"
    assert config.include_committers is False
    assert config.max_workers == 3


def test_unknown_flag_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--bogus"])
    assert excinfo.value.code == 2
