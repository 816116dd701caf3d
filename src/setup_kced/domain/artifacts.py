"""Release asset naming — download URLs, cache keys, extraction folders.

Assets are published as
``<base>/<owner>/<repo>/releases/download/v<version>/<prefix>_<version>_<os>_<arch>.tar.gz``.
"""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_BASE_URL = "https://github.com"
DEFAULT_OWNER = "Kong"
DEFAULT_REPO = "go-apiops"
DEFAULT_ARCHIVE_PREFIX = "go-apiops"
DEFAULT_ARCH = "amd64"
ARCHIVE_SUFFIX = ".tar.gz"


class InstallPlan(BaseModel):
    """Everything needed to fetch and cache one tool build."""

    model_config = {"frozen": True}

    tool: str
    version: str
    os: str
    arch: str
    full_version: str
    url: str
    extract_folder: str


def full_version(version: str, os_label: str) -> str:
    """Cache key and log label, e.g. ``0.1.11-linux``."""
    return f"{version}-{os_label}"


def asset_name(
    version: str,
    os_label: str,
    *,
    archive_prefix: str = DEFAULT_ARCHIVE_PREFIX,
    arch: str = DEFAULT_ARCH,
) -> str:
    return f"{archive_prefix}_{version}_{os_label}_{arch}{ARCHIVE_SUFFIX}"


def download_url(
    version: str,
    os_label: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    owner: str = DEFAULT_OWNER,
    repo: str = DEFAULT_REPO,
    archive_prefix: str = DEFAULT_ARCHIVE_PREFIX,
    arch: str = DEFAULT_ARCH,
) -> str:
    """Build the release asset URL for *version* on *os_label*."""
    name = asset_name(version, os_label, archive_prefix=archive_prefix, arch=arch)
    return f"{base_url.rstrip('/')}/{owner}/{repo}/releases/download/v{version}/{name}"


def extract_folder_name(full: str, archive_prefix: str = DEFAULT_ARCHIVE_PREFIX) -> str:
    """Directory the archive is unpacked into before it is cached."""
    return f"{archive_prefix}_{full}"
