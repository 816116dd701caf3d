"""Semantic version coercion and validation.

Release tags and user input arrive in many shapes (``v0.1.11``, ``1.7``,
``1.8.0-beta2``). Everything is funnelled through :func:`normalize_version`,
which coerces to a ``MAJOR.MINOR.PATCH`` triple and then validates it.

INVARIANT: A normalized version is always a strict ``MAJOR.MINOR.PATCH``
string with no prefix, pre-release, or build metadata.
"""

from __future__ import annotations

import re

from setup_kced.domain.errors import InvalidVersionError

MAX_SAFE_INTEGER = 2**53 - 1
MAX_COMPONENT_DIGITS = 16

_COERCE_RE = re.compile(
    r"(?:^|[^\d])"
    rf"(\d{{1,{MAX_COMPONENT_DIGITS}}})"
    rf"(?:\.(\d{{1,{MAX_COMPONENT_DIGITS}}}))?"
    rf"(?:\.(\d{{1,{MAX_COMPONENT_DIGITS}}}))?"
    r"(?:$|[^\d])"
)

_NUMERIC = r"0|[1-9]\d*"
_PRE_IDENT = rf"(?:{_NUMERIC}|\d*[a-zA-Z-][a-zA-Z0-9-]*)"
_STRICT_RE = re.compile(
    rf"^[v=]?\s*({_NUMERIC})\.({_NUMERIC})\.({_NUMERIC})"
    rf"(?:-({_PRE_IDENT}(?:\.{_PRE_IDENT})*))?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


def coerce(text: str | None) -> str | None:
    """Pull the first ``MAJOR[.MINOR[.PATCH]]`` run out of *text*.

    Missing components become ``0``; anything around the digits is dropped.

    Examples:
        >>> coerce("1.7")
        '1.7.0'
        >>> coerce("1.8.0-beta2")
        '1.8.0'
        >>> coerce("banana") is None
        True
    """
    if not text:
        return None
    match = _COERCE_RE.search(text)
    if match is None:
        return None
    major, minor, patch = (int(part or 0) for part in match.groups())
    return f"{major}.{minor}.{patch}"


def valid(text: str | None) -> str | None:
    """Return the cleaned version if *text* is strict semver, else None.

    Build metadata is dropped from the returned string, pre-release is kept.
    """
    if not text:
        return None
    match = _STRICT_RE.match(text.strip())
    if match is None:
        return None
    major, minor, patch, prerelease = match.groups()
    if any(int(part) > MAX_SAFE_INTEGER for part in (major, minor, patch)):
        return None
    version = f"{major}.{minor}.{patch}"
    if prerelease:
        version += f"-{prerelease}"
    return version


def strip_tag_prefix(tag: str) -> str:
    """Remove a single leading ``v`` from a release tag."""
    return tag[1:] if tag.startswith("v") else tag


def normalize_version(raw: str) -> str:
    """Coerce then validate *raw*.

    Raises:
        InvalidVersionError: If no valid version can be derived.
    """
    version = valid(coerce(raw))
    if not version:
        raise InvalidVersionError(raw)
    return version
