"""Command: resolve a day expression."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calpack.commands._base import CalpackCommand, adjust_option

if TYPE_CHECKING:
    from calpack.commands._context import AppContext
    from calpack.time.resolution import Adjustment


@click.command(
    "eval",
    cls=CalpackCommand,
    examples="""\
  calpack eval today
  calpack eval today-1 --domain workweek --adjust down
  calpack eval 2005-03-01+3 --domain workweek""",
)
@click.argument("expression")
@click.option("-d", "--domain", default=None, help="Domain to resolve in (default from config).")
@adjust_option
@click.pass_obj
def eval_cmd(app: AppContext, expression: str, domain: str | None, adjust: Adjustment | None) -> None:
    """Resolve EXPRESSION, such as today-5 or 2005-03-01+2, in a domain."""
    app.emit(app.time_service.eval(expression, domain, adjust))
