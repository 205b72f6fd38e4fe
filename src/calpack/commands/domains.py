"""Command: list registered domains."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from calpack.commands._base import CalpackCommand

if TYPE_CHECKING:
    from calpack.commands._context import AppContext


@click.command(
    cls=CalpackCommand,
    examples="""\
  calpack domains
  calpack -v domains
  calpack --json domains""",
)
@click.pass_obj
def domains(app: AppContext) -> None:
    """List the built-in domains and those declared in calpack.toml."""
    app.emit(app.time_service.domains())
