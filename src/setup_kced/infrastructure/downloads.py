"""Stream release assets to disk and unpack them.

Downloads land in the runner temp directory (``RUNNER_TEMP``) under a random
name. Writes are atomic (*.part -> final), so an interrupted transfer never
leaves a truncated archive behind.
"""

from __future__ import annotations

import logging
import os
import tarfile
import urllib.error
import urllib.request
import uuid
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from setup_kced.domain.errors import SetupKcedError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class DownloadError(SetupKcedError):
    code = "DOWNLOAD_FAILED"

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ArchiveError(SetupKcedError):
    code = "EXTRACT_FAILED"


def runner_temp(environ: Mapping[str, str] | None = None) -> Path | None:
    """The runner's scratch directory (``RUNNER_TEMP``), or None off a runner.

    The runner empties ``RUNNER_TEMP`` after the job. Off a runner the caller
    provides, and removes, its own scratch directory.
    """
    env = os.environ if environ is None else environ
    temp = env.get("RUNNER_TEMP")
    return Path(temp) if temp else None


class Downloader:
    """Fetch and unpack release archives.

    Args:
        temp_dir: Where downloads and relative extraction targets go.
        opener: ``urlopen``-compatible callable, injectable for tests.
    """

    def __init__(
        self,
        temp_dir: Path,
        *,
        timeout: float = 30.0,
        user_agent: str = "setup-kced",
        opener: Callable[..., Any] | None = None,
    ) -> None:
        self.temp_dir = temp_dir
        self.timeout = timeout
        self.user_agent = user_agent
        self._opener = opener or urllib.request.urlopen

    def download_tool(self, url: str, dest: Path | None = None) -> Path:
        """Download *url* to *dest* (default: a random name in the temp dir).

        Raises:
            DownloadError: On HTTP or transport failure.
        """
        dest = dest or self.temp_dir / str(uuid.uuid4())
        dest.parent.mkdir(parents=True, exist_ok=True)
        tmp = dest.with_name(dest.name + ".part")

        logger.debug("Downloading %s to %s", url, dest)
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
        try:
            with self._opener(req, timeout=self.timeout) as resp:  # nosec B310
                with tmp.open("wb") as fh:
                    for chunk in iter(lambda: resp.read(CHUNK_SIZE), b""):
                        fh.write(chunk)
        except urllib.error.HTTPError as exc:
            tmp.unlink(missing_ok=True)
            msg = f"Unexpected HTTP response: {exc.code} while downloading {url}"
            raise DownloadError(msg, status=exc.code) from exc
        except (urllib.error.URLError, OSError) as exc:
            tmp.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {exc}") from exc

        os.replace(tmp, dest)
        return dest

    def extract_tar(self, archive: Path, dest: str | Path) -> Path:
        """Extract a gzip tarball into *dest*.

        Relative destinations resolve under the temp dir. Members that would
        land outside *dest* (absolute paths, ``..``, links) are rejected.

        Raises:
            ArchiveError: If the archive is unreadable or unsafe.
        """
        target = Path(dest)
        if not target.is_absolute():
            target = self.temp_dir / target
        target.mkdir(parents=True, exist_ok=True)

        logger.debug("Extracting %s into %s", archive, target)
        try:
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(target, filter="data")
        except (tarfile.TarError, OSError) as exc:
            raise ArchiveError(f"Failed to extract {archive}: {exc}") from exc
        return target
