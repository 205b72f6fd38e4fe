"""Click base classes and shared options.

:class:`CalpackCommand` and :class:`CalpackGroup` accept an ``examples``
text shown by an eager ``--examples`` flag, which keeps ``--help`` short.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

from calpack.time.resolution import Adjustment

F = TypeVar("F", bound=Callable[..., Any])


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class CalpackCommand(click.Command):
    """Click Command with an optional ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class CalpackGroup(click.Group):
    """Click Group whose subcommands default to :class:`CalpackCommand`."""

    command_class = CalpackCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def _to_adjustment(_ctx: click.Context, _param: click.Parameter, value: str | None) -> Adjustment | None:
    return None if value is None else Adjustment(value.upper())


def adjust_option(func: F) -> F:
    """``--adjust`` flag; unset means the configured default."""
    return click.option(
        "-a",
        "--adjust",
        type=click.Choice([a.value for a in Adjustment], case_sensitive=False),
        default=None,
        callback=_to_adjustment,
        help="Move to the nearest existing time UP or DOWN when the input does not exist.",
    )(func)
