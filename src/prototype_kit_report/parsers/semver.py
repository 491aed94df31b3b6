"""npm-style semver range handling built atop packaging.version.

Supported expressions:
- exact versions (e.g., "1.2.3", "v1.2.3", "=1.2.3")
- partial and x-ranges ("1", "1.2", "1.x", "1.2.*", "*", "")
- caret ranges ^x.y.z and tilde ranges ~x.y.z / ~>x.y.z
- comparators >, >=, <, <=, = and space separated comparator sets
- hyphen ranges "1.2.3 - 2.3.4"
- unions joined by "||"

Only the lowest satisfying version is needed here, so each comparator set is
reduced to a lower bound and a list of upper bounds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from packaging.version import InvalidVersion, Version

_WILDCARDS = {"x", "X", "*"}

_PARTIAL = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*]))?"
    r"(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_COMPARATOR = re.compile(r"^(?P<op>\^|~>?|>=|<=|>|<|=)?(?P<version>.*)$")
_OPERATOR_SPACE = re.compile(r"(\^|~>?|>=|<=|>|<|=)\s+")
_HYPHEN = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")

ZERO = Version("0.0.0")


class RangeError(ValueError):
    """Raised when a range expression cannot be parsed."""


class NpmVersion(Version):
    """A Version that keeps the npm prerelease spelling it was parsed from."""

    def __init__(self, version: str, prerelease: str) -> None:
        super().__init__(version)
        self.npm_prerelease = prerelease


@dataclass(frozen=True)
class _Partial:
    major: int | None
    minor: int | None
    patch: int | None
    pre: str | None

    @property
    def complete(self) -> bool:
        return self.patch is not None


@dataclass(frozen=True)
class _Upper:
    version: Version
    inclusive: bool

    def admits(self, candidate: Version) -> bool:
        if self.inclusive:
            return candidate <= self.version
        return candidate < self.version


def _parse_version(v: str) -> Version:
    return Version(v)


def _next_major(major: int) -> Version:
    return Version(f"{major + 1}.0.0")


def _next_minor(major: int, minor: int) -> Version:
    return Version(f"{major}.{minor + 1}.0")


def _next_patch(major: int, minor: int, patch: int) -> Version:
    return Version(f"{major}.{minor}.{patch + 1}")


def _number(raw: str | None) -> int | None:
    if raw is None or raw in _WILDCARDS:
        return None
    return int(raw)


def _parse_partial(text: str) -> _Partial:
    match = _PARTIAL.match(text)
    if not match:
        raise RangeError(f"invalid version '{text}'")
    major = _number(match.group("major"))
    minor = _number(match.group("minor")) if major is not None else None
    patch = _number(match.group("patch")) if minor is not None else None
    return _Partial(major=major, minor=minor, patch=patch, pre=match.group("pre"))


def _concrete(partial: _Partial) -> Version:
    base = f"{partial.major or 0}.{partial.minor or 0}.{partial.patch or 0}"
    if partial.pre and partial.complete:
        try:
            version = NpmVersion(f"{base}-{partial.pre}", partial.pre)
        except InvalidVersion as exc:
            raise RangeError(f"unsupported prerelease '{partial.pre}'") from exc
        # "1.0.0-1" would otherwise parse as a post-release and sort after 1.0.0
        if version.post is not None:
            raise RangeError(f"unsupported prerelease '{partial.pre}'")
        return version
    return _parse_version(base)


def _bounds(op: str, partial: _Partial) -> tuple[Version | None, _Upper | None]:
    """Return the inclusive lower bound and the upper bound for one comparator."""
    if partial.major is None:
        return ZERO, None

    major = partial.major
    minor = partial.minor
    version = _concrete(partial)

    if op in ("", "="):
        if partial.complete:
            return version, _Upper(version, True)
        if minor is None:
            return version, _Upper(_next_major(major), False)
        return version, _Upper(_next_minor(major, minor), False)

    if op == ">=":
        return version, None

    if op == ">":
        if minor is None:
            return _next_major(major), None
        if not partial.complete:
            return _next_minor(major, minor), None
        if partial.pre:
            return Version(f"{major}.{minor}.{partial.patch}"), None
        return _next_patch(major, minor, partial.patch), None

    if op == "<":
        return None, _Upper(version, False)

    if op == "<=":
        if partial.complete:
            return None, _Upper(version, True)
        if minor is None:
            return None, _Upper(_next_major(major), False)
        return None, _Upper(_next_minor(major, minor), False)

    if op == "^":
        if major > 0 or minor is None:
            return version, _Upper(_next_major(major), False)
        if minor > 0 or not partial.complete:
            return version, _Upper(_next_minor(major, minor), False)
        return version, _Upper(_next_patch(major, minor, partial.patch), False)

    # tilde: ~ and ~>
    if minor is None:
        return version, _Upper(_next_major(major), False)
    return version, _Upper(_next_minor(major, minor), False)


def _comparators(expr: str) -> list[str]:
    hyphen = _HYPHEN.match(expr)
    if hyphen:
        return [f">={hyphen.group('low')}", f"<={hyphen.group('high')}"]
    return _OPERATOR_SPACE.sub(r"\1", expr).split()


def _set_minimum(expr: str) -> Version | None:
    lower = ZERO
    uppers: list[_Upper] = []
    for token in _comparators(expr):
        match = _COMPARATOR.match(token)
        if match is None:  # pragma: no cover - the pattern accepts any token
            raise RangeError(f"invalid comparator '{token}'")
        low, high = _bounds(match.group("op") or "", _parse_partial(match.group("version")))
        if low is not None and low > lower:
            lower = low
        if high is not None:
            uppers.append(high)

    if all(upper.admits(lower) for upper in uppers):
        return lower
    return None


def min_version(expr: object) -> Version | None:
    """Return the lowest version satisfying ``expr`` or None when there is none.

    Malformed expressions (dist-tags such as "latest", git URLs, ``file:``
    specifiers) resolve to None instead of raising.
    """
    if not isinstance(expr, str):
        return None

    candidates: list[Version] = []
    for alternative in expr.strip().split("||"):
        try:
            candidate = _set_minimum(alternative.strip())
        except (RangeError, InvalidVersion):
            return None
        if candidate is not None:
            candidates.append(candidate)

    if not candidates:
        return None
    return min(candidates)


def parse_version(value: object) -> Version | None:
    """Parse a concrete version such as "4.3.0" or "v4.3.0"; None when invalid."""
    if not isinstance(value, str):
        return None
    try:
        partial = _parse_partial(value.strip())
        if not partial.complete:
            return None
        return _concrete(partial)
    except (RangeError, InvalidVersion):
        return None


def format_version(version: Version) -> str:
    """Render a version the way npm would print it (``1.2.3`` or ``1.2.3-beta.1``)."""
    if version.pre is None and version.dev is None:
        return version.base_version
    if isinstance(version, NpmVersion):
        return f"{version.base_version}-{version.npm_prerelease}"
    suffix = str(version)[len(version.base_version):]
    return f"{version.base_version}-{suffix.lstrip('.-')}"
