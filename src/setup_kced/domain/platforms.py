"""Map interpreter platform identifiers to release asset OS labels."""

from __future__ import annotations

import sys

OS_LABELS: dict[str, str] = {
    "win32": "windows",
    "darwin": "darwin",
}

DEFAULT_OS_LABEL = "linux"


def get_platform(platform: str) -> str:
    """Return the asset OS label for a ``sys.platform`` style identifier.

    Unknown identifiers (``linux``, ``freebsd13``, ...) fall back to ``linux``.
    """
    return OS_LABELS.get(platform, DEFAULT_OS_LABEL)


def current_platform() -> str:
    """OS label of the running interpreter."""
    return get_platform(sys.platform)
