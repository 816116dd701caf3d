"""Shared pytest fixtures and test doubles for setup-kced tests."""

from __future__ import annotations

import io
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from setup_kced.config.settings import SetupSettings
from setup_kced.infrastructure.runner import Runner
from setup_kced.infrastructure.tool_cache import ToolCache
from setup_kced.infrastructure.toolkit import Toolkit

_ISOLATED_PREFIXES = ("INPUT_", "SETUP_KCED_", "RUNNER_", "GITHUB_")


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip runner/action variables and run from an empty directory.

    ``PATH`` is re-set through monkeypatch so anything that prepends to it is
    undone after the test.
    """
    for key in list(os.environ):
        if key.startswith(_ISOLATED_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeReleases:
    """Records list_releases calls and returns a canned listing."""

    def __init__(self, releases: list[dict[str, Any]] | None = None) -> None:
        self.releases = releases if releases is not None else [{"tag_name": "v0.1.11"}]
        self.calls: list[tuple[str, str]] = []

    def list_releases(self, owner: str, repo: str) -> list[dict[str, Any]]:
        self.calls.append((owner, repo))
        return self.releases


class FakeDownloader:
    """Pretends to download and extract, producing a directory with a binary."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.downloads: list[str] = []
        self.extractions: list[tuple[Path, str]] = []

    def download_tool(self, url: str, dest: Path | None = None) -> Path:
        self.downloads.append(url)
        archive = self.root / "kced-downloaded"
        archive.parent.mkdir(parents=True, exist_ok=True)
        archive.write_bytes(b"archive")
        return archive

    def extract_tar(self, archive: Path, dest: str | Path) -> Path:
        self.extractions.append((archive, str(dest)))
        target = self.root / str(dest)
        target.mkdir(parents=True, exist_ok=True)
        (target / "kced").write_text("#!/bin/sh\n", encoding="utf-8")
        return target


class RecordingCache(ToolCache):
    """Real on-disk cache that also records cache_dir calls."""

    def __init__(self, root: Path) -> None:
        super().__init__(root)
        self.stored: list[tuple[Path, str, str, str]] = []

    def cache_dir(self, source: Path, tool: str, version: str, arch: str) -> Path:
        self.stored.append((source, tool, version, arch))
        return super().cache_dir(source, tool, version, arch)


class WrapperRecorder:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, original_name: str, *, runner: Runner) -> Path:
        self.calls.append(original_name)
        return Path("/wrapped") / original_name


@pytest.fixture
def make_toolkit(tmp_path: Path) -> Callable[..., Toolkit]:
    """Factory for a Toolkit wired to fakes under *tmp_path*.

    The runner writes to a StringIO exposed as ``toolkit.log`` and keeps its
    environment in a plain dict so PATH changes stay local. Pass
    *releases_client* to exercise a real client instead of the canned listing.
    """

    def factory(
        *,
        releases: list[dict[str, Any]] | None = None,
        releases_client: Any = None,
        settings: SetupSettings | None = None,
        environ: dict[str, str] | None = None,
    ) -> Toolkit:
        log = io.StringIO()
        env = {"PATH": "/usr/bin"} if environ is None else environ
        toolkit = Toolkit(
            settings or SetupSettings(),
            runner=Runner(env, stream=log),
            releases=releases_client or FakeReleases(releases),  # type: ignore[arg-type]
            downloader=FakeDownloader(tmp_path / "temp"),  # type: ignore[arg-type]
            cache=RecordingCache(tmp_path / "toolcache"),
            wrapper_factory=WrapperRecorder(),
        )
        toolkit.log = log  # type: ignore[attr-defined]
        return toolkit

    return factory


def seed_cache(root: Path, tool: str, version: str, arch: str = "amd64") -> Path:
    """Create a complete tool cache entry and return its directory."""
    entry = root / tool / version / arch
    entry.mkdir(parents=True)
    (entry / tool).write_text("#!/bin/sh\n", encoding="utf-8")
    (root / tool / version / f"{arch}.complete").write_text("", encoding="utf-8")
    return entry
