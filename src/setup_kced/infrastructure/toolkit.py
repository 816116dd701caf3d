"""Toolkit — the collaborators one install run talks to.

Bundles the runner adapter, releases client, downloader and tool cache built
from :class:`~setup_kced.config.settings.SetupSettings`. Services receive a
Toolkit at construction time; tests pass fakes for any collaborator.

Off a runner the downloader works in a private temp directory that
:meth:`Toolkit.close` removes.
"""

from __future__ import annotations

import tempfile
from collections.abc import Callable
from contextlib import ExitStack
from pathlib import Path
from typing import TYPE_CHECKING

from setup_kced.infrastructure.downloads import Downloader, runner_temp
from setup_kced.infrastructure.github import ReleasesClient
from setup_kced.infrastructure.runner import Runner
from setup_kced.infrastructure.tool_cache import ToolCache, cache_root
from setup_kced.infrastructure.wrapper import create_wrapper

if TYPE_CHECKING:
    from setup_kced.config.settings import SetupSettings

WrapperFactory = Callable[..., Path]


class Toolkit:
    """External services for one invocation, created lazily.

    Attributes:
        settings: The frozen settings the collaborators are derived from.
    """

    def __init__(
        self,
        settings: SetupSettings,
        *,
        runner: Runner | None = None,
        releases: ReleasesClient | None = None,
        downloader: Downloader | None = None,
        cache: ToolCache | None = None,
        wrapper_factory: WrapperFactory | None = None,
    ) -> None:
        self.settings = settings
        self.runner = runner or Runner()
        self._releases = releases
        self._downloader = downloader
        self._cache = cache
        self._wrapper_factory = wrapper_factory or create_wrapper
        self._cleanup = ExitStack()

    @property
    def releases(self) -> ReleasesClient:
        if self._releases is None:
            self._releases = ReleasesClient(
                self.settings.release.api_url,
                self.settings.token.get_secret_value(),
                timeout=self.settings.http.timeout,
                user_agent=self.settings.http.user_agent,
            )
        return self._releases

    @property
    def downloader(self) -> Downloader:
        if self._downloader is None:
            temp_dir = runner_temp(self.runner.environ)
            if temp_dir is None:
                scratch = tempfile.TemporaryDirectory(prefix="setup-kced-")
                temp_dir = Path(self._cleanup.enter_context(scratch))
            self._downloader = Downloader(
                temp_dir,
                timeout=self.settings.http.timeout,
                user_agent=self.settings.http.user_agent,
            )
        return self._downloader

    @property
    def cache(self) -> ToolCache:
        if self._cache is None:
            self._cache = ToolCache(cache_root(self.settings.cache.directory, self.runner.environ))
        return self._cache

    def create_wrapper(self, original_name: str) -> Path:
        return self._wrapper_factory(original_name, runner=self.runner)

    def close(self) -> None:
        """Remove scratch space created for this invocation."""
        self._cleanup.close()
