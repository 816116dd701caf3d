"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``setup-kced.toml`` only contains
overrides. An empty file (or none at all) installs kced from Kong/go-apiops.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from setup_kced.domain.artifacts import (
    DEFAULT_ARCH,
    DEFAULT_ARCHIVE_PREFIX,
    DEFAULT_BASE_URL,
    DEFAULT_OWNER,
    DEFAULT_REPO,
)


class ReleaseConfig(BaseModel):
    """[release] section — where the releases listing lives."""

    model_config = {"frozen": True}

    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    api_url: str = "https://api.github.com"


class ArtifactConfig(BaseModel):
    """[artifact] section — how release assets are named and cached."""

    model_config = {"frozen": True}

    tool: str = "kced"
    archive_prefix: str = DEFAULT_ARCHIVE_PREFIX
    base_url: str = DEFAULT_BASE_URL
    arch: str = DEFAULT_ARCH


class CacheConfig(BaseModel):
    """[cache] section.

    ``directory`` is only consulted when ``RUNNER_TOOL_CACHE`` is unset,
    i.e. outside a hosted runner.
    """

    model_config = {"frozen": True}

    directory: Path = Field(
        default_factory=lambda: Path.home() / ".cache" / "setup-kced" / "tool-cache"
    )


class HttpConfig(BaseModel):
    """[http] section."""

    model_config = {"frozen": True}

    timeout: float = 30.0
    user_agent: str = "setup-kced"

