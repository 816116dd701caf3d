"""InstallService — resolve, fetch, cache and publish the kced binary.

Pipeline: RESOLVE → PLAN → CACHE LOOKUP → (DOWNLOAD → EXTRACT → CACHE) → PATH
→ WRAP

INVARIANT: An explicit version never touches the releases listing.
INVARIANT: A cache hit performs no download, extraction or cache write.
"""

from __future__ import annotations

import logging
import sys

from setup_kced.domain.artifacts import (
    InstallPlan,
    download_url,
    extract_folder_name,
    full_version,
)
from setup_kced.domain.errors import NoReleasesError, SetupKcedError
from setup_kced.domain.platforms import get_platform
from setup_kced.domain.versions import normalize_version, strip_tag_prefix
from setup_kced.infrastructure.github import ReleasesApiError
from setup_kced.services.base import BaseService
from setup_kced.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class InstallService(BaseService):
    """Installs one tool build per call."""

    def _latest_tag(self) -> str:
        release = self.settings.release
        releases = self._toolkit.releases.list_releases(release.owner, release.repo)
        if not releases:
            raise NoReleasesError(release.owner, release.repo)
        latest = releases[0]
        if not isinstance(latest, dict):
            msg = f"Unexpected releases payload for {release.owner}/{release.repo}"
            raise ReleasesApiError(msg)
        tag = str(latest.get("tag_name") or "")
        logger.debug("Latest release of %s/%s is %s", release.owner, release.repo, tag)
        return strip_tag_prefix(tag)

    def _resolve(self, requested: str | None) -> tuple[str, bool]:
        """Return ``(version, from_latest)``."""
        raw = self.settings.kced_version if requested is None else requested
        raw = raw.strip()
        from_latest = not raw
        if from_latest:
            raw = self._latest_tag()
        return normalize_version(raw), from_latest

    def resolve_version(self, requested: str | None = None) -> ServiceResult:
        """Resolve *requested* (default: the configured input) to a full version.

        An empty request resolves to the newest release.
        """
        op = "resolve"
        try:
            version, from_latest = self._resolve(requested)
        except SetupKcedError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"version": version, "source": "latest" if from_latest else "input"},
        )

    def plan(self, version: str, os_label: str) -> InstallPlan:
        """Describe where *version* for *os_label* comes from and is cached as."""
        artifact = self.settings.artifact
        full = full_version(version, os_label)
        return InstallPlan(
            tool=artifact.tool,
            version=version,
            os=os_label,
            arch=artifact.arch,
            full_version=full,
            url=download_url(
                version,
                os_label,
                base_url=artifact.base_url,
                owner=self.settings.release.owner,
                repo=self.settings.release.repo,
                archive_prefix=artifact.archive_prefix,
                arch=artifact.arch,
            ),
            extract_folder=extract_folder_name(full, artifact.archive_prefix),
        )

    def install(
        self,
        requested: str | None = None,
        *,
        wrapper: bool | None = None,
        platform: str | None = None,
    ) -> ServiceResult:
        """Make the tool available on PATH, downloading it on a cache miss.

        Args:
            requested: Version to install; None uses the configured input,
                empty means the newest release.
            wrapper: Install the output wrapper; None uses the configured input.
            platform: ``sys.platform`` style identifier; defaults to the
                running interpreter's.
        """
        op = "install"
        toolkit = self._toolkit
        use_wrapper = self.settings.wrapper if wrapper is None else wrapper

        try:
            version, from_latest = self._resolve(requested)
            plan = self.plan(version, get_platform(platform or sys.platform))
            toolkit.runner.info(f"Installing {plan.tool} version {plan.full_version}")

            directory = toolkit.cache.find(plan.tool, plan.full_version, plan.arch)
            cached = directory is not None
            if directory is None:
                archive = toolkit.downloader.download_tool(plan.url)
                extracted = toolkit.downloader.extract_tar(archive, plan.extract_folder)
                directory = toolkit.cache.cache_dir(
                    extracted, plan.tool, plan.full_version, plan.arch
                )

            toolkit.runner.add_path(directory)
            shim = toolkit.create_wrapper(plan.tool) if use_wrapper else None
        except SetupKcedError as exc:
            return ServiceResult.failure(op, exc)
        except OSError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="IO_FAILED", message=str(exc)),
            )

        logger.debug("Installed %s at %s (cached=%s)", plan.full_version, directory, cached)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "tool": plan.tool,
                "version": plan.version,
                "full_version": plan.full_version,
                "os": plan.os,
                "source": "latest" if from_latest else "input",
                "cached": cached,
                "path": str(directory),
                "url": plan.url,
                "wrapper": str(shim) if shim else None,
            },
        )

    def list_cached(self) -> ServiceResult:
        """List cached builds of the tool for the configured arch."""
        artifact = self.settings.artifact
        versions = self._toolkit.cache.find_all_versions(artifact.tool, artifact.arch)
        return ServiceResult(
            ok=True,
            op="cached",
            data={
                "tool": artifact.tool,
                "root": str(self._toolkit.cache.root),
                "count": len(versions),
                "versions": versions,
            },
        )
