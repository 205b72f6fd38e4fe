"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console backed by StringIO; renderers are
picked by ``result.op`` in :func:`render_result`, and unknown ops fall back
to a key-value listing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from calpack.output.console import create_console, get_output

if TYPE_CHECKING:
    from collections.abc import Callable

    from rich.console import Console

    from calpack.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a string, plain text when there is no terminal."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Bare values for ``--quiet``, one per line, suitable for scripts."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    match result.op:
        case "pack":
            return str(d["index"])
        case "convert":
            return str(d["target"]["text"])
        case "compare":
            return str(d["comparison"])
        case "range":
            return "\n".join(item["text"] for item in d["items"])
        case "domains":
            return "\n".join(item["label"] for item in d["items"])
        case "weekday":
            return str(d["day_of_week"])
        case "rank":
            return "" if d["day"] is None else str(d["day"])
        case _:
            return str(d.get("text", f"OK: {result.op}"))


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cal.ok"), Text(f"  {result.op}", style="cal.op"), sep="")


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="cal.key")
    if key == "index" or key.endswith("_index"):
        v = Text(str(value), style="cal.index")
    elif key == "domain":
        v = Text(str(value), style="cal.domain")
    elif key in ("text", "day"):
        v = Text(str(value), style="cal.time")
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _time_text(time: dict[str, Any]) -> Text:
    text = Text(time["text"], style="cal.time")
    text.append(f"  {time['domain']}", style="cal.domain")
    text.append(f" #{time['index']}", style="cal.index")
    return text


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="cal.error"),
        Text(f"  {result.op}{code}", style="cal.op"),
        f": {msg}",
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Operation renderers ───────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_time(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render pack, weekday and eval results."""
    _status_line(console, result)
    d = result.data
    for key in ("domain", "text", "index", "offset", "day_of_week", "expression"):
        if key in d and d[key] is not None:
            _field(console, key, d[key])
    if verbose and "input" in d:
        _field(console, "input", d["input"])


def _render_unpack(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("domain", "index", "text"):
        _field(console, key, d[key])
    if verbose:
        for key, value in d["parts"].items():
            _field(console, key, value)


def _render_convert(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    console.print(Text("  from: ", style="cal.key"), _time_text(result.data["source"]))
    console.print(Text("  to:   ", style="cal.key"), _time_text(result.data["target"]))


def _render_compare(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    console.print(Text("  ", style="cal.key"), _time_text(d["a"]))
    console.print(Text(f"  is {d['relation']}", style="bold"))
    console.print(Text("  ", style="cal.key"), _time_text(d["b"]))


def _render_range(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "domain", d["domain"])
    _field(console, "range", d["range"])
    _field(console, "size", d["size"])
    if d["items"]:
        table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
        table.add_column("Index", style="cal.index", justify="right", no_wrap=True)
        table.add_column("Time", style="cal.time", no_wrap=True)
        for item in d["items"]:
            table.add_row(str(item["index"]), item["text"])
        console.print()
        console.print(table)


def _render_rank(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "text", d["text"])
    _field(console, "rank", f"{d['weekday']}#{d['rank']} of {d['unit'].lower()}")
    if d["day"] is not None:
        _field(console, "day", d["day"])


def _render_domains(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Label", style="cal.domain", no_wrap=True)
    table.add_column("Unit")
    table.add_column("Origin", justify="right")
    table.add_column("Pattern")
    table.add_column("Sub-period")
    if verbose:
        table.add_column("Min", style="dim")
        table.add_column("Max", style="dim")

    for item in result.data["items"]:
        row = [
            item["label"],
            item["unit"],
            str(item["origin"]),
            item["base_pattern"] or "",
            item["sub_pattern"] or "",
        ]
        if verbose:
            row += [item["min"], item["max"]]
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{result.data['count']} domains")


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "pack": _render_time,
    "weekday": _render_time,
    "eval": _render_time,
    "unpack": _render_unpack,
    "convert": _render_convert,
    "compare": _render_compare,
    "range": _render_range,
    "rank": _render_rank,
    "domains": _render_domains,
}
