"""structlog configuration for setup-kced.

Diagnostics only. The progress lines and ``::error::`` annotations a CI log
shows are written by :mod:`setup_kced.infrastructure.runner`.

Renderers:
- ``--log-json``: one JSON object per line on stderr
- otherwise: structlog's console renderer on stderr, colored on a TTY

Debug output is enabled by ``-v`` or by re-running a job with debug logging,
which sets ``RUNNER_DEBUG=1``.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

import structlog

PACKAGE_LOGGER = "setup_kced"


def runner_debug(environ: Mapping[str, str] | None = None) -> bool:
    """True when the runner asked for step debug logging."""
    env = os.environ if environ is None else environ
    return env.get("RUNNER_DEBUG") == "1"


def _build_renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Safe to call repeatedly; the root handler is replaced, not stacked.

    Args:
        verbose: DEBUG for the package logger. WARNING otherwise, unless
            ``RUNNER_DEBUG`` is set in *environ*.
        log_json: JSON lines instead of console output.
        environ: Environment consulted for ``RUNNER_DEBUG``.
    """
    debug = verbose or runner_debug(environ)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _build_renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if debug else logging.WARNING)
