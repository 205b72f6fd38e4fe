"""Commands: move a time between domains, and compare two times."""

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
  calpack convert datetime workweek "2009-06-01 12:34:12"
  calpack convert monthly thirdfriday 2005-02 --adjust up
  calpack convert daily weekly 2005-06-01 --adjust down""",
)
@click.argument("source")
@click.argument("target")
@click.argument("text")
@adjust_option
@click.pass_obj
def convert(app: AppContext, source: str, target: str, text: str, adjust: Adjustment | None) -> None:
    """Read TEXT in SOURCE and convert it to TARGET."""
    app.emit(app.time_service.convert(source, target, text, adjust))


@click.command(
    cls=CalpackCommand,
    examples="""\
  calpack compare daily 2005-01-01 yearly 2005
  calpack -q compare daily 2005-06-06 workweek 2005-06-04 --adjust up""",
)
@click.argument("domain_a")
@click.argument("text_a")
@click.argument("domain_b")
@click.argument("text_b")
@adjust_option
@click.pass_obj
def compare(
    app: AppContext,
    domain_a: str,
    text_a: str,
    domain_b: str,
    text_b: str,
    adjust: Adjustment | None,
) -> None:
    """Tell whether TEXT_A in DOMAIN_A is before, equal to or after TEXT_B in DOMAIN_B."""
    app.emit(app.time_service.compare(domain_a, text_a, domain_b, text_b, adjust))
