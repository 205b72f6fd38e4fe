"""Command: list the times of a range."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calpack.commands._base import CalpackCommand, adjust_option

if TYPE_CHECKING:
    from calpack.commands._context import AppContext
    from calpack.time.resolution import Adjustment


@click.command(
    "range",
    cls=CalpackCommand,
    examples="""\
  calpack range daily 2005-03-01 2005-03-07
  calpack range workweek 2005-03-05 2005-03-13 --adjust up
  calpack range datetime "2005-03-01 00:00:00" "2005-03-02 00:00:00" --limit 10""",
)
@click.argument("domain")
@click.argument("first")
@click.argument("last")
@adjust_option
@click.option("--limit", type=click.IntRange(min=0), default=100, show_default=True, help="Maximum times listed.")
@click.pass_obj
def range_cmd(
    app: AppContext,
    domain: str,
    first: str,
    last: str,
    adjust: Adjustment | None,
    limit: int,
) -> None:
    """List the times of DOMAIN from FIRST to LAST.

    With --adjust up, bounds that do not exist widen the range to the
    nearest outer times; with down they shrink it.
    """
    app.emit(app.time_service.range(domain, first, last, adjust, limit=limit))
