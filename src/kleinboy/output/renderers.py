"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`;
unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.text import Text

from kleinboy.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from kleinboy.services.result import ServiceResult

    Renderer = Callable[[ServiceResult, Console], None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
        if verbose and result.data.get("ordered_articles"):
            _render_order(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output: image paths for the image report, status otherwise."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "list_images":
        return "\n".join(result.data.get("images", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text.assemble(("OK", "kb.ok"), "  ", (result.op, "kb.op")))


def _field(console: Console, key: str, value: Any) -> None:
    style = "kb.path" if key in ("path", "outputs") else "kb.count" if key.endswith("count") else ""
    console.print(Text.assemble((f"  {key}: ", "kb.key"), (str(value), style)))


def _render_warnings(console: Console, result: ServiceResult) -> None:
    for warning in result.warnings:
        console.print(Text.assemble(("  WARNING ", "kb.warning"), warning))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text.assemble(("ERROR", "kb.error"), "  ", (result.op, "kb.op"), f" — {msg}"))
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_build(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    _field(console, "article_count", result.data.get("article_count", 0))
    _field(console, "tag_count", result.data.get("tag_count", 0))
    for output in result.data.get("outputs", []):
        _field(console, "path", output)
    _render_warnings(console, result)


def _render_order(result: ServiceResult, console: Console) -> None:
    console.print(Text("  order:", style="dim"))
    for position, path in enumerate(result.data["ordered_articles"], start=1):
        console.print(Text(f"    {position:>3}. {path}"))


def _render_images(result: ServiceResult, console: Console) -> None:
    for image in result.data.get("images", []):
        console.print(Text(image), soft_wrap=True)


def _render_generic(result: ServiceResult, console: Console) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    _render_warnings(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "build": _render_build,
    "list_images": _render_images,
}
