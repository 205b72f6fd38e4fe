"""Symbolic day expressions such as ``today-5``, ``end-2+1`` or ``2005-03-01+3``.

Grammar::

    expression := (today | start | end | YYYY-MM-DD) ({+|-}integer)*

A literal date is a daily date; its offsets are applied in the domain it
is parsed in.  ``start`` and ``end`` stand for the bounds of a
:class:`~calpack.time.range.Range` and can only be resolved against one.
``today`` offsets are applied in the daily domain when the target domain
is finer than a day (so ``today-1`` in a domain of seconds is yesterday,
not one second ago), and in the target domain otherwise.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from enum import StrEnum

from calpack.errors import InvalidArgumentError, ParseError
from calpack.time.domain import TimeDomain
from calpack.time.index import TimeIndex
from calpack.time.parts import TimeParts
from calpack.time.range import Range
from calpack.time.registry import default_registry
from calpack.time.resolution import Adjustment, Resolution

_OFFSETS = re.compile(r"(?:[+-]\d+)*")
_OFFSET = re.compile(r"[+-]\d+")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def now(domain: TimeDomain, *, clock: Clock = utc_now) -> TimeIndex:
    """Current time in *domain*, adjusted downward when it does not exist there."""
    current = clock().astimezone(UTC)
    parts = TimeParts(
        year=current.year,
        month=current.month,
        day=current.day,
        hour=current.hour,
        minute=current.minute,
        second=current.second,
        fraction=current.microsecond * 1000,
    )
    system = default_registry().lookup("systemtime").time(parts)
    return system.convert(domain, Adjustment.DOWN)


def _parse_offsets(text: str) -> int | None:
    if not _OFFSETS.fullmatch(text):
        return None
    return sum(int(item) for item in _OFFSET.findall(text))


class ExpressionKind(StrEnum):
    LITERAL = "literal"
    TODAY = "today"
    START = "start"
    END = "end"


@dataclass(frozen=True)
class DayExpression:
    """A parsed day expression.  Literal expressions hold their time with offsets applied."""

    kind: ExpressionKind
    offset: int = 0
    time: TimeIndex | None = None
    adjust: Adjustment = Adjustment.NONE
    clock: Clock = utc_now

    @classmethod
    def parse(
        cls,
        text: str,
        domain: TimeDomain,
        adjust: Adjustment = Adjustment.NONE,
        *,
        clock: Clock = utc_now,
    ) -> DayExpression:
        """Parse *text*; literal dates are read in *domain*."""
        expr = text.strip()
        lowered = expr.lower()
        for kind in (ExpressionKind.TODAY, ExpressionKind.START, ExpressionKind.END):
            if lowered.startswith(kind.value):
                offset = _parse_offsets(lowered[len(kind.value) :])
                if offset is None:
                    msg = f"Invalid offset in day expression {text!r}"
                    raise ParseError(msg)
                return cls(kind, offset=offset, adjust=adjust, clock=clock)

        date, modifier = expr[:10], expr[10:]
        offset = _parse_offsets(modifier)
        if offset is None:
            # Not an offset, maybe a time of day in a finer domain.
            time = domain.time(expr, adjust)
            offset = 0
        else:
            time = domain.time(date, adjust)
        return cls(ExpressionKind.LITERAL, time=time.add(offset) if offset else time, adjust=adjust, clock=clock)

    def incremented(self, increment: int) -> DayExpression:
        """The expression moved by *increment* steps without resolving it."""
        if increment == 0:
            return self
        if self.time is not None:
            return replace(self, time=self.time.add(increment))
        return replace(self, offset=self.offset + increment)

    def needs_context(self) -> bool:
        return self.kind in (ExpressionKind.START, ExpressionKind.END)

    def resolve(self, context: TimeDomain | Range) -> TimeIndex | None:
        """Resolve against a domain, or against a range for ``start`` and ``end``.

        Returns None for ``start``/``end`` of an empty range.
        """
        if isinstance(context, Range):
            if self.kind is ExpressionKind.START:
                return self._shift(context.first)
            if self.kind is ExpressionKind.END:
                return self._shift(context.last)
            return self.resolve(context.domain)
        if self.kind is ExpressionKind.LITERAL:
            assert self.time is not None
            return self.time.convert(context, self.adjust)
        if self.kind is ExpressionKind.TODAY:
            if context.resolution.finer_than(Resolution.DAY):
                today = now(default_registry().lookup("daily"), clock=self.clock)
                return self._shift(today).convert(context, Adjustment.DOWN)
            return self._shift(now(context, clock=self.clock))
        msg = f"Day expression {self} needs a range to resolve"
        raise InvalidArgumentError(msg)

    def _shift(self, time: TimeIndex | None) -> TimeIndex | None:
        if time is None or self.offset == 0:
            return time
        return time.add(self.offset)

    def __str__(self) -> str:
        if self.time is not None:
            return str(self.time)
        if self.offset > 0:
            return f"{self.kind.value}+{self.offset}"
        if self.offset < 0:
            return f"{self.kind.value}{self.offset}"
        return self.kind.value
