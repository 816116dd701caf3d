"""Local tool cache in the hosted-runner layout.

``<root>/<tool>/<version>/<arch>/`` holds the files; a sibling
``<arch>.complete`` marker is written last.

INVARIANT: An entry without its marker is incomplete and never returned by
:meth:`ToolCache.find`; :meth:`ToolCache.cache_dir` overwrites it.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

MARKER_SUFFIX = ".complete"


def cache_root(default: Path, environ: Mapping[str, str] | None = None) -> Path:
    """``RUNNER_TOOL_CACHE`` when the runner sets it, else *default*."""
    env = os.environ if environ is None else environ
    root = env.get("RUNNER_TOOL_CACHE")
    return Path(root) if root else default


class ToolCache:
    def __init__(self, root: Path) -> None:
        self.root = root

    def _entry(self, tool: str, version: str, arch: str) -> Path:
        return self.root / tool / version / arch

    def _marker(self, tool: str, version: str, arch: str) -> Path:
        return self.root / tool / version / f"{arch}{MARKER_SUFFIX}"

    def find(self, tool: str, version: str, arch: str) -> Path | None:
        """Cached directory for an exact *version*, or None on a miss."""
        entry = self._entry(tool, version, arch)
        if entry.is_dir() and self._marker(tool, version, arch).is_file():
            logger.debug("Found %s %s (%s) in tool cache", tool, version, arch)
            return entry
        logger.debug("%s %s (%s) not in tool cache", tool, version, arch)
        return None

    def cache_dir(self, source: Path, tool: str, version: str, arch: str) -> Path:
        """Copy *source* into the cache and mark the entry complete."""
        if not source.is_dir():
            raise NotADirectoryError(f"Tool cache source is not a directory: {source}")

        entry = self._entry(tool, version, arch)
        marker = self._marker(tool, version, arch)
        marker.unlink(missing_ok=True)
        if entry.exists():
            shutil.rmtree(entry)

        logger.debug("Caching %s into %s", source, entry)
        shutil.copytree(source, entry)
        marker.write_text("", encoding="utf-8")
        return entry

    def find_all_versions(self, tool: str, arch: str) -> list[str]:
        """All complete versions of *tool* for *arch*, sorted."""
        tool_dir = self.root / tool
        if not tool_dir.is_dir():
            return []
        return sorted(
            child.name
            for child in tool_dir.iterdir()
            if child.is_dir() and self.find(tool, child.name, arch) is not None
        )
