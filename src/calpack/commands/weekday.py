"""Commands: day of week and ranked weekdays."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calpack.commands._base import CalpackCommand
from calpack.time.resolution import Resolution

if TYPE_CHECKING:
    from calpack.commands._context import AppContext


@click.command(
    cls=CalpackCommand,
    examples="""\
  calpack weekday daily 2006-06-21
  calpack -q weekday datetime '1970-01-01 12:00:00'""",
)
@click.argument("domain")
@click.argument("text")
@click.pass_obj
def weekday(app: AppContext, domain: str, text: str) -> None:
    """Print the day of week of TEXT in DOMAIN."""
    app.emit(app.time_service.weekday(domain, text))


@click.command(
    cls=CalpackCommand,
    examples="""\
  calpack rank monthly 2009-03 --unit month Fri 3
  calpack rank daily 2006-07-01 --unit year -- Fri -1
  calpack rank daily 2003-10-01 --unit month Wed 5""",
)
@click.argument("domain")
@click.argument("text")
@click.argument("weekday_name", metavar="WEEKDAY")
@click.argument("rank_number", metavar="RANK", type=int)
@click.option(
    "--unit",
    type=click.Choice([Resolution.MONTH.value, Resolution.YEAR.value], case_sensitive=False),
    default=Resolution.MONTH.value,
    show_default=True,
    help="Period in which weekdays are ranked.",
)
@click.pass_obj
def rank(app: AppContext, domain: str, text: str, weekday_name: str, rank_number: int, unit: str) -> None:
    """Find the RANK-th WEEKDAY of the month or year of TEXT in DOMAIN.

    Negative ranks count from the end of the period: -1 is the last one.
    Put them after "--" so they are not read as options.
    """
    app.emit(app.time_service.rank(domain, text, Resolution(unit.upper()), weekday_name, rank_number))
