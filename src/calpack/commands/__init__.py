"""Subcommand modules for calpack.

:func:`register_commands` imports them on call so the root module stays
cheap to import.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every standalone command to the root group."""
    from calpack.commands.convert import compare, convert
    from calpack.commands.domains import domains
    from calpack.commands.eval_cmd import eval_cmd
    from calpack.commands.pack import pack, unpack
    from calpack.commands.range_cmd import range_cmd
    from calpack.commands.weekday import rank, weekday

    cli.add_command(pack)
    cli.add_command(unpack)
    cli.add_command(convert)
    cli.add_command(compare)
    cli.add_command(range_cmd)
    cli.add_command(weekday)
    cli.add_command(rank)
    cli.add_command(domains)
    cli.add_command(eval_cmd)
