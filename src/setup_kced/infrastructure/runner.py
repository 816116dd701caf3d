"""GitHub Actions runner protocol — workflow commands and file commands.

Everything the job log or later steps see goes through :class:`Runner`:

- ``info``/``error`` write lines (and ``::cmd::`` workflow commands) to
  stdout, which the runner parses. Inputs are read by
  :mod:`setup_kced.config.settings`.
- ``add_path``/``set_output`` append to the ``GITHUB_PATH`` /
  ``GITHUB_OUTPUT`` files when the runner provides them, falling back to the
  legacy ``::add-path::`` / ``::set-output`` commands otherwise.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import MutableMapping
from pathlib import Path
from typing import TextIO

from setup_kced.domain.errors import SetupKcedError

logger = logging.getLogger(__name__)


class InputError(SetupKcedError):
    """A value cannot be passed to the runner safely."""

    code = "INVALID_INPUT"


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


class Runner:
    """Adapter over the runner's environment and stdout.

    Args:
        environ: Environment holding ``PATH`` and the file-command
            variables. Defaults to :data:`os.environ`.
        stream: Where workflow commands are written. Defaults to the
            *current* ``sys.stdout`` at write time.
        err: Default to ``sys.stderr`` instead, keeping stdout clean for
            machine-readable output. The runner parses both streams.
    """

    def __init__(
        self,
        environ: MutableMapping[str, str] | None = None,
        stream: TextIO | None = None,
        *,
        err: bool = False,
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self._stream = stream
        self._err = err

    # ------------------------------------------------------------------
    # Log lines and workflow commands
    # ------------------------------------------------------------------

    def _write(self, line: str) -> None:
        stream = self._stream or (sys.stderr if self._err else sys.stdout)
        stream.write(line + os.linesep)
        stream.flush()

    def issue_command(self, command: str, message: str = "", **properties: str) -> None:
        """Write ``::command key=value,...::message``."""
        line = f"::{command}"
        if properties:
            line += " " + ",".join(f"{k}={escape_property(v)}" for k, v in properties.items())
        self._write(f"{line}::{escape_data(message)}")

    def info(self, message: str) -> None:
        self._write(message)

    def error(self, message: str) -> None:
        self.issue_command("error", message)

    def set_failed(self, message: str) -> None:
        """Annotate the step as failed. The caller owns the non-zero exit."""
        self.error(message)

    # ------------------------------------------------------------------
    # Environment mutation
    # ------------------------------------------------------------------

    def _append_file_command(self, env_key: str, content: str) -> bool:
        target = self.environ.get(env_key)
        if not target:
            return False
        with Path(target).open("a", encoding="utf-8") as fh:
            fh.write(content + os.linesep)
        return True

    def add_path(self, path: str | os.PathLike[str]) -> None:
        """Prepend *path* to PATH for this process and all later steps."""
        entry = os.fspath(path)
        if not self._append_file_command("GITHUB_PATH", entry):
            self.issue_command("add-path", entry)
        current = self.environ.get("PATH", "")
        self.environ["PATH"] = f"{entry}{os.pathsep}{current}" if current else entry
        logger.debug("Added %s to PATH", entry)

    def set_output(self, name: str, value: str) -> None:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        if delimiter in name or delimiter in value:
            raise InputError(f"Unexpected input: output delimiter collides with {name!r}")
        content = f"{name}<<{delimiter}{os.linesep}{value}{os.linesep}{delimiter}"
        if not self._append_file_command("GITHUB_OUTPUT", content):
            self._write("")
            self.issue_command("set-output", value, name=name)
