"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from msgrules.output.console import create_console, get_output, style_for_origin

if TYPE_CHECKING:
    from rich.console import Console

    from msgrules.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(
    result: ServiceResult, *, verbose: bool = False, width: int | None = None
) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console(width=width)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "rules.ok"), (f"  {result.op}", "rules.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="rules.key")
    if key == "origin":
        v = Text(str(value), style=style_for_origin(str(value)))
    elif key == "title":
        v = Text(str(value), style="rules.title")
    else:
        v = Text(str(value))
    console.print(Text.assemble(k, v))


def _mark(flag: bool, *, prohibited: bool = False) -> Text:
    if not flag:
        return Text("")
    if prohibited:
        return Text("yes", style="rules.prohibited")
    return Text("yes", style="rules.required")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including the telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    console.print(Text.assemble(prefix, (f"{duration:>8.2f}ms", style), f"  {name}"))
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    line = Text.assemble(("ERROR", "rules.error"), (f"  {result.op}", "rules.op"), " — ", msg)
    console.print(line)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Rule renderers ────────────────────────────────────────────────────


def _render_rule(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render classify / classify_message results."""
    _status_line(console, result)
    d = result.data
    for key in ("message", "unit", "origin", "kind"):
        if key in d:
            _field(console, key, d[key])
    _field(console, "obligations", ", ".join(d.get("obligations", [])))
    if d.get("guidance"):
        console.print()
        console.print(Text(f"  {d['guidance']}"))
    if verbose:
        _render_meta(console, result)


def _render_rules_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the full origin x kind table."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Origin", no_wrap=True)
    table.add_column("Kind", no_wrap=True)
    table.add_column("Assert result", justify="center")
    table.add_column("Assert effects", justify="center")
    table.add_column("Expect call", justify="center")
    table.add_column("Prohibited", justify="center")
    if verbose:
        table.add_column("Guidance", style="dim")

    for item in result.data.get("items", []):
        origin = str(item.get("origin", ""))
        row: list[Any] = [
            Text(origin, style=style_for_origin(origin)),
            str(item.get("kind", "")),
            _mark(bool(item.get("must_assert_return_value"))),
            _mark(bool(item.get("must_assert_side_effects"))),
            _mark(bool(item.get("must_expect_call"))),
            _mark(bool(item.get("prohibited")), prohibited=True),
        ]
        if verbose:
            row.append(str(item.get("guidance", "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} rules")
    if verbose:
        _render_meta(console, result)


# ── Deck renderers ────────────────────────────────────────────────────


def _render_deck_outline(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "path", d.get("path", ""))
    for key, value in (d.get("front_matter") or {}).items():
        _field(console, key, value)
    console.print()

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right")
    table.add_column("Title", style="rules.title")
    table.add_column("Header", style="dim")
    table.add_column("Code", justify="right")
    for item in d.get("items", []):
        table.add_row(
            str(item.get("index", "")),
            Text(str(item.get("title", ""))),
            Text(str(item.get("header", ""))),
            str(item.get("code_blocks", 0)),
        )
    console.print(table)
    console.print(f"\n{d.get('count', 0)} slides")
    if verbose:
        _render_meta(console, result)


def _render_deck_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    title = Text(f"{d.get('index', '?')} — {d.get('title') or 'Untitled'}")
    console.print(Panel(Markdown(d.get("body", "")), title=title, border_style="dim", expand=False))
    directives = d.get("directives") or {}
    if directives:
        console.print(Text("  directives:", style="dim"))
        for k, v in directives.items():
            console.print(Text(f"    {k}: {v}"))
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ─────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


_OP_RENDERERS: dict[str, Any] = {
    "classify": _render_rule,
    "classify_message": _render_rule,
    "rules": _render_rules_table,
    "deck_outline": _render_deck_outline,
    "deck_show": _render_deck_show,
}
