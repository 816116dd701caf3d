"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from setup_kced.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from setup_kced.services.result import ServiceResult

Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Install prints the published path, resolve prints the version, so the
    output can be captured straight into a shell variable.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "install":
        return str(result.data.get("path", ""))
    if result.op == "resolve":
        return str(result.data.get("version", ""))
    if result.op == "cached":
        return "\n".join(result.data.get("versions", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="setup.ok")
    op = Text(f"  {result.op}", style="setup.op")
    console.print(label, op)


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="setup.key")
    console.print(k, Text(str(value), style=style))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="setup.error")
    op = Text(f"  {result.op}", style="setup.op")
    console.print(label, op, Text(" — "), msg)

    if verbose and err:
        console.print(Text(f"  code: {err.code}", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_install(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    _field(console, "version", d.get("full_version", ""), "setup.version")
    if d.get("cached"):
        _field(console, "cache", "hit", "setup.hit")
    else:
        _field(console, "cache", "miss (downloaded)", "setup.miss")
    _field(console, "path", d.get("path", ""), "setup.path")
    if d.get("wrapper"):
        _field(console, "wrapper", d["wrapper"], "setup.path")
    if verbose:
        _field(console, "source", d.get("source", ""))
        _field(console, "url", d.get("url", ""))


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "version", result.data.get("version", ""), "setup.version")
    _field(console, "source", result.data.get("source", ""))


def _render_cached(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    if verbose:
        _field(console, "root", d.get("root", ""), "setup.path")
    versions = d.get("versions", [])
    if not versions:
        console.print(f"  no cached {d.get('tool', 'tool')} builds")
        return
    for version in versions:
        console.print(Text(f"  {version}", style="setup.version"))


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            value = json.dumps(value, separators=(",", ":"))
        _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "install": _render_install,
    "resolve": _render_resolve,
    "cached": _render_cached,
}
