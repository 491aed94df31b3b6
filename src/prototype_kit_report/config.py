"""Configuration loader for report runs.

Every component receives a :class:`ReportConfig` explicitly; nothing reads the
environment at import time. Defaults describe the NHSBSA report. An optional
JSON settings file (path given directly or via ``KIT_REPORT_CONFIG``) can
override them and is validated against ``SETTINGS_SCHEMA`` with jsonschema.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .errors import ReportError
from .http import DEFAULT_TIMEOUT, USER_AGENT
from .models import DEFAULT_PACKAGES, TrackedPackage

CONFIG_PATH_ENV_VAR = "KIT_REPORT_CONFIG"
TOKEN_ENV_VARS = ("GH_TOKEN", "GITHUB_TOKEN")

DEFAULT_ORGANIZATION = "nhsbsa"
DEFAULT_OUTPUT = Path("index.html")

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "organization": {"type": "string", "minLength": 1},
        "outputPath": {"type": "string", "minLength": 1},
        "pageSize": {"type": "integer", "minimum": 1, "maximum": 100},
        "timeout": {"type": "number", "exclusiveMinimum": 0},
        "maxWorkers": {"type": "integer", "minimum": 1},
        "includeCommitters": {"type": "boolean"},
        "apiBase": {"type": "string", "pattern": "^https?://"},
        "rawBase": {"type": "string", "pattern": "^https?://"},
        "packages": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["key", "name", "title", "manifestUrl"],
                "properties": {
                    "key": {"type": "string", "minLength": 1},
                    "name": {"type": "string", "minLength": 1},
                    "title": {"type": "string", "minLength": 1},
                    "manifestUrl": {"type": "string", "pattern": "^https?://"},
                    "companion": {"type": ["string", "null"]},
                },
            },
        },
    },
}

_FIELD_NAMES = {
    "organization": "organization",
    "pageSize": "page_size",
    "timeout": "timeout",
    "maxWorkers": "max_workers",
    "includeCommitters": "include_committers",
    "apiBase": "api_base",
    "rawBase": "raw_base",
}


class ConfigError(ReportError):
    """Raised when the configuration cannot be loaded or is invalid."""


@dataclass(frozen=True)
class ReportConfig:
    """Settings for a single report run."""

    token: str
    organization: str = DEFAULT_ORGANIZATION
    output_path: Path = DEFAULT_OUTPUT
    packages: tuple[TrackedPackage, ...] = field(default=DEFAULT_PACKAGES)
    page_size: int = 100
    timeout: float = DEFAULT_TIMEOUT
    max_workers: int = 8
    include_committers: bool = True
    api_base: str = "https://api.github.com"
    raw_base: str = "https://raw.githubusercontent.com"
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigError(
                "Missing GitHub token: set " + " or ".join(TOKEN_ENV_VARS)
            )
        if not self.organization:
            raise ConfigError("Organization must be non-empty")
        if not self.packages:
            raise ConfigError("At least one tracked package is required")
        if not 1 <= self.page_size <= 100:
            raise ConfigError("page_size must be between 1 and 100")
        if self.max_workers < 1:
            raise ConfigError("max_workers must be at least 1")
        keys = [package.key for package in self.packages]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise ConfigError(f"Duplicate tracked package key(s): {', '.join(duplicates)}")


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _resolve_config_path(path: Path | str | None, environ: Mapping[str, str]) -> Path | None:
    """Resolve the settings file path.

    Priority:
    1. Explicit path argument
    2. KIT_REPORT_CONFIG environment variable
    3. No settings file (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings_file(path: Path) -> dict[str, Any]:
    """Read and validate a JSON settings file, returning ReportConfig keyword arguments."""
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        raise ConfigError(f"Invalid configuration file {path}:\n" + _format_errors(errors))

    values: dict[str, Any] = {}
    for key, field_name in _FIELD_NAMES.items():
        if key in data:
            values[field_name] = data[key]
    if "outputPath" in data:
        values["output_path"] = Path(data["outputPath"])
    if "packages" in data:
        try:
            values["packages"] = tuple(TrackedPackage.from_dict(p) for p in data["packages"])
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    return values


def _read_token(environ: Mapping[str, str]) -> str:
    for name in TOKEN_ENV_VARS:
        value = environ.get(name, "").strip()
        if value:
            return value
    return ""


def load_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ReportConfig:
    """Build a ReportConfig from defaults, an optional settings file, env and overrides.

    Args:
        path: Optional settings file. Falls back to KIT_REPORT_CONFIG.
        environ: Environment mapping, ``os.environ`` when omitted.
        overrides: ReportConfig fields; ``None`` values are ignored so CLI flags
            that were not given leave the file/default values in place.

    Raises:
        ConfigError: If the settings file is invalid or the token is missing.
    """
    environ = os.environ if environ is None else environ

    values: dict[str, Any] = {}
    config_path = _resolve_config_path(path, environ)
    if config_path is not None:
        values.update(load_settings_file(config_path))

    values["token"] = _read_token(environ)
    values.update({key: value for key, value in overrides.items() if value is not None})

    if "output_path" in values:
        values["output_path"] = Path(values["output_path"])

    try:
        return ReportConfig(**values)
    except TypeError as exc:
        raise ConfigError(f"Unknown configuration option: {exc}") from exc
