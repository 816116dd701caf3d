"""Output-capturing wrapper for an installed tool.

:func:`create_wrapper` puts a shim with the tool's name ahead of the real
binary on PATH. The shim re-enters this module (``python -m
setup_kced.infrastructure.wrapper <original> <args...>``), which runs the real
binary, passes its output through, and records ``stdout``, ``stderr`` and
``exitcode`` as step outputs so later steps can inspect them.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

from setup_kced.domain.errors import SetupKcedError
from setup_kced.infrastructure.runner import Runner

logger = logging.getLogger(__name__)

SHIM_MODULE = "setup_kced.infrastructure.wrapper"


class WrapperError(SetupKcedError):
    code = "WRAPPER_FAILED"


def _render_shim(original: Path, *, windows: bool) -> str:
    python = sys.executable
    if windows:
        return f'@echo off\r\n"{python}" -m {SHIM_MODULE} "{original}" %*\r\n'
    return f'#!/bin/sh\nexec "{python}" -m {SHIM_MODULE} "{original}" "$@"\n'


def create_wrapper(
    original_name: str,
    *,
    runner: Runner,
    directory: Path | None = None,
) -> Path:
    """Install a shim for *original_name* and put it first on PATH.

    Without *directory* the shim goes in a new directory under
    ``RUNNER_TEMP``, which the runner clears after the job. Off a runner that
    directory is created under the system temp dir and left in place, since
    the returned shim is only useful while it exists.

    Returns the shim path.

    Raises:
        WrapperError: If *original_name* cannot be found on PATH.
    """
    original = shutil.which(original_name, path=runner.environ.get("PATH"))
    if original is None:
        raise WrapperError(f"Unable to locate executable file: {original_name}")

    windows = sys.platform == "win32"
    if directory is None:
        base = runner.environ.get("RUNNER_TEMP") or None
        directory = Path(tempfile.mkdtemp(prefix=f"{original_name}-wrapper-", dir=base))
    directory.mkdir(parents=True, exist_ok=True)

    shim = directory / (f"{original_name}.cmd" if windows else original_name)
    shim.write_text(_render_shim(Path(original), windows=windows), encoding="utf-8")
    shim.chmod(shim.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    runner.add_path(directory)
    logger.debug("Wrapped %s with %s", original, shim)
    return shim


def run_wrapped(original: str, args: Sequence[str], *, runner: Runner) -> int:
    """Run *original* with *args*, echo its output and record it as step outputs."""
    proc = subprocess.run([original, *args], capture_output=True, check=False)

    sys.stdout.buffer.write(proc.stdout)
    sys.stdout.flush()
    sys.stderr.buffer.write(proc.stderr)
    sys.stderr.flush()

    runner.set_output("stdout", proc.stdout.decode("utf-8", errors="replace"))
    runner.set_output("stderr", proc.stderr.decode("utf-8", errors="replace"))
    runner.set_output("exitcode", str(proc.returncode))
    return proc.returncode


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(f"usage: python -m {SHIM_MODULE} <executable> [args...]", file=sys.stderr)
        return 2
    original, rest = args[0], args[1:]
    if not os.path.exists(original):
        print(f"Wrapped executable not found: {original}", file=sys.stderr)
        return 127
    return run_wrapped(original, rest, runner=Runner())


if __name__ == "__main__":
    raise SystemExit(main())
