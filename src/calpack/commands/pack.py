"""Commands: pack a time into its index, and unpack an index."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calpack.commands._base import CalpackCommand, adjust_option

if TYPE_CHECKING:
    from calpack.commands._context import AppContext
    from calpack.time.resolution import Adjustment


@click.command(
    cls=CalpackCommand,
    examples="""\
  calpack pack daily 2000-01-01
  calpack pack workweek 2005-06-04 --adjust up
  calpack pack datetime "2004-02-29 14:00:12+02:00"
  calpack -q pack systemtime 1970-01-01""",
)
@click.argument("domain")
@click.argument("text")
@adjust_option
@click.pass_obj
def pack(app: AppContext, domain: str, text: str, adjust: Adjustment | None) -> None:
    """Pack TEXT into its index in DOMAIN."""
    app.emit(app.time_service.pack(domain, text, adjust))


@click.command(
    cls=CalpackCommand,
    examples="""\
  calpack unpack daily 730485
  calpack -v unpack datetime 0""",
)
@click.argument("domain")
@click.argument("index", type=int)
@click.pass_obj
def unpack(app: AppContext, domain: str, index: int) -> None:
    """Format INDEX of DOMAIN as a calendar time."""
    app.emit(app.time_service.unpack(domain, index))
