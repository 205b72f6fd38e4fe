"""Sub-period patterns: admissible finer positions inside each base period.

A sub-period pattern turns a base-period index into a denser index where
each base period holds ``size`` consecutive positions.  Two families:

- :class:`SimpleSubPeriodPattern` keeps a fixed sorted table of positions,
  e.g. days 10 and 20 of every month, or 10:00 and 15:00 of every day.
- :class:`DayRankingSubPeriodPattern` keeps weekday ranks such as the
  third Friday of every month; the actual days depend on the period.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_left
from collections.abc import Sequence
from dataclasses import dataclass

from calpack.errors import (
    InvalidArgumentError,
    TimeOverflowError,
    UnreachableTimeError,
    UnsupportedPairingError,
    bug,
)
from calpack.time import tools
from calpack.time.parts import TimeParts
from calpack.time.resolution import Adjustment, DayOfWeek, Resolution

# Supported (base unit, sub unit) pairings and the inclusive range of positions.
_SIMPLE_PAIRINGS: dict[tuple[Resolution, Resolution], tuple[int, int]] = {
    (Resolution.YEAR, Resolution.MONTH): (1, 12),
    (Resolution.MONTH, Resolution.DAY): (1, 28),
    (Resolution.DAY, Resolution.SEC): (0, tools.SECONDS_PER_DAY - 1),
}


def _offset(time: int, increment: int) -> int:
    total = tools.checked_add(time, increment)
    if total is None:
        msg = f"Adding sub-period {increment} to {time} overflows"
        raise TimeOverflowError(msg)
    return total


def _scale(time: int, size: int) -> int:
    scaled = time * size
    if scaled > tools.INT64_MAX:
        msg = f"Index {time} times sub-period size {size} overflows"
        raise TimeOverflowError(msg)
    return scaled


class SubPeriodPattern(ABC):
    """Contract shared by all sub-period patterns."""

    @property
    @abstractmethod
    def base_unit(self) -> Resolution:
        """Unit of the base periods."""
        ...

    @property
    @abstractmethod
    def sub_unit(self) -> Resolution:
        """Unit of the positions, which is the resolution of the domain."""
        ...

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of positions in every base period."""
        ...

    @abstractmethod
    def adjust_for_sub_period(self, time: int, adjust: Adjustment, parts: TimeParts) -> int:
        """Scale a base-period index and add the position requested by *parts*."""
        ...

    @abstractmethod
    def fill_in_sub_period(self, position: int, parts: TimeParts) -> TimeParts:
        """Write position *position* back into the parts of its base period."""
        ...


class SimpleSubPeriodPattern(SubPeriodPattern):
    """Fixed, strictly increasing table of positions.

    Positions are month numbers (YEAR base), day numbers up to 28 (MONTH
    base) or seconds into the day (DAY base).
    """

    def __init__(self, base_unit: Resolution, sub_unit: Resolution, positions: Sequence[int]) -> None:
        bounds = _SIMPLE_PAIRINGS.get((base_unit, sub_unit))
        if bounds is None:
            msg = f"Sub period {sub_unit} is not supported within base period {base_unit}"
            raise UnsupportedPairingError(msg)
        if not positions:
            msg = "Sub-period positions must not be empty"
            raise InvalidArgumentError(msg)
        low, high = bounds
        previous: int | None = None
        for position in positions:
            if not low <= position <= high:
                msg = f"Sub-period position {position} outside [{low}, {high}]"
                raise InvalidArgumentError(msg)
            if previous is not None and position <= previous:
                msg = f"Sub-period positions must be strictly increasing: {list(positions)}"
                raise InvalidArgumentError(msg)
            previous = position
        self._base_unit = base_unit
        self._sub_unit = sub_unit
        self._positions = tuple(positions)

    @property
    def base_unit(self) -> Resolution:
        return self._base_unit

    @property
    def sub_unit(self) -> Resolution:
        return self._sub_unit

    @property
    def size(self) -> int:
        return len(self._positions)

    @property
    def positions(self) -> tuple[int, ...]:
        return self._positions

    def _requested(self, parts: TimeParts) -> int:
        match (self._base_unit, self._sub_unit):
            case (Resolution.YEAR, Resolution.MONTH):
                return parts.month
            case (Resolution.MONTH, Resolution.DAY):
                return parts.day
            case (Resolution.DAY, Resolution.SEC):
                return parts.hour * 3600 + parts.minute * 60 + parts.second
            case _:
                raise bug(f"pairing {self._base_unit}/{self._sub_unit}")

    def adjust_for_sub_period(self, time: int, adjust: Adjustment, parts: TimeParts) -> int:
        time = _scale(time, self.size)
        requested = self._requested(parts)
        i = bisect_left(self._positions, requested)
        if i < self.size and self._positions[i] == requested:
            return _offset(time, i)
        match adjust:
            case Adjustment.UP:
                # i == size is the first position of the next base period
                return _offset(time, i)
            case Adjustment.DOWN:
                # i - 1 == -1 is the last position of the previous base period
                return _offset(time, i - 1)
            case Adjustment.NONE:
                msg = f"Sub period {requested} is not one of {list(self._positions)}"
                raise UnreachableTimeError(msg)
            case _:
                raise bug(adjust)

    def fill_in_sub_period(self, position: int, parts: TimeParts) -> TimeParts:
        value = self._positions[position]
        match (self._base_unit, self._sub_unit):
            case (Resolution.YEAR, Resolution.MONTH):
                return parts.with_fields(month=value)
            case (Resolution.MONTH, Resolution.DAY):
                return parts.with_fields(day=value)
            case (Resolution.DAY, Resolution.SEC):
                hour, minute, second = tools.seconds_to_hms(value)
                return parts.with_fields(hour=hour, minute=minute, second=second)
            case _:
                raise bug(f"pairing {self._base_unit}/{self._sub_unit}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleSubPeriodPattern):
            return NotImplemented
        return (
            self._base_unit == other._base_unit
            and self._sub_unit == other._sub_unit
            and self._positions == other._positions
        )

    def __hash__(self) -> int:
        return hash((self._base_unit, self._sub_unit, self._positions))

    def __str__(self) -> str:
        return f"{self._sub_unit}{list(self._positions)}"

    def __repr__(self) -> str:
        return f"SimpleSubPeriodPattern({self._base_unit!s}, {self._sub_unit!s}, {list(self._positions)})"


@dataclass(frozen=True)
class DayByNameAndRank:
    """The *rank*-th *weekday* of a period; negative ranks count from the end."""

    weekday: DayOfWeek
    rank: int

    @classmethod
    def parse(cls, text: str) -> DayByNameAndRank:
        """Parse ``Fri#3`` or ``Mon#-1``."""
        name, sep, rank = text.partition("#")
        if not sep:
            msg = f"Expected WEEKDAY#RANK, got {text!r}"
            raise InvalidArgumentError(msg)
        try:
            number = int(rank)
        except ValueError:
            msg = f"Rank is not an integer in {text!r}"
            raise InvalidArgumentError(msg) from None
        return cls(DayOfWeek.parse(name), number)

    def __str__(self) -> str:
        return f"{self.weekday}#{self.rank}"


class DayRankingSubPeriodPattern(SubPeriodPattern):
    """Days chosen by weekday rank within each month or year.

    Ranks must be listed in chronological order: positive ranks first in
    increasing order, then negative ranks.  A rank equal to the maximum
    (5 in a month, 53 in a year) is rejected because such a day does not
    exist in every period.
    """

    def __init__(self, base_unit: Resolution, ranks: Sequence[DayByNameAndRank]) -> None:
        if base_unit not in (Resolution.YEAR, Resolution.MONTH):
            msg = f"Day ranking requires a YEAR or MONTH base period, not {base_unit}"
            raise UnsupportedPairingError(msg)
        if not ranks:
            msg = "Day ranks must not be empty"
            raise InvalidArgumentError(msg)
        self._base_unit = base_unit
        self._ranks = tuple(ranks)
        self._validate_ranks()

    def _validate_ranks(self) -> None:
        limit = tools.max_rank(0 if self._base_unit is Resolution.YEAR else 1)
        previous = -limit - 2
        in_use = [False] * limit
        for item in self._ranks:
            r = item.rank
            if r <= -limit or r >= limit or r == 0:
                msg = f"Rank {r} outside [{-limit + 1}, {limit - 1}] (0 excluded)"
                raise InvalidArgumentError(msg)
            if r > 0:
                if r <= previous:
                    msg = f"Ranks are not in chronological order: {self}"
                    raise InvalidArgumentError(msg)
                if in_use[r - 1]:
                    msg = f"Duplicate rank {r}"
                    raise InvalidArgumentError(msg)
                in_use[r - 1] = True
                previous = r
            else:
                # A negative rank may land on either of two front-counted ranks.
                virtual_late = limit + 1 + r
                virtual_early = limit + r
                if virtual_late <= previous:
                    msg = f"Ranks are not in chronological order: {self}"
                    raise InvalidArgumentError(msg)
                if in_use[virtual_late - 1] or in_use[virtual_early - 1]:
                    msg = f"Rank {r} may coincide with rank {virtual_early} or {virtual_late}"
                    raise InvalidArgumentError(msg)
                in_use[virtual_late - 1] = True
                in_use[virtual_early - 1] = True
                previous = virtual_late

    @property
    def base_unit(self) -> Resolution:
        return self._base_unit

    @property
    def sub_unit(self) -> Resolution:
        return Resolution.DAY

    @property
    def size(self) -> int:
        return len(self._ranks)

    @property
    def ranks(self) -> tuple[DayByNameAndRank, ...]:
        return self._ranks

    def adjust_for_sub_period(self, time: int, adjust: Adjustment, parts: TimeParts) -> int:
        time = _scale(time, self.size)
        year, month, day = parts.year, parts.month, parts.day
        if self._base_unit is Resolution.YEAR:
            day += tools.days_to_month(year, month)
            month = 0
        last = self.size - 1
        for i, item in enumerate(self._ranks):
            rank_day = tools.day_by_rank(year, month, item.weekday, item.rank)
            if rank_day == day:
                return _offset(time, i)
            if rank_day < day and i < last:
                continue
            if adjust is Adjustment.NONE:
                msg = f"{year:04d}-{parts.month:02d}-{parts.day:02d} is not one of {self}"
                raise UnreachableTimeError(msg)
            if rank_day < day:
                return _offset(time, self.size if adjust is Adjustment.UP else i)
            return _offset(time, i if adjust is Adjustment.UP else i - 1)
        raise bug("day ranking loop fell through")

    def fill_in_sub_period(self, position: int, parts: TimeParts) -> TimeParts:
        item = self._ranks[position]
        if self._base_unit is Resolution.YEAR:
            year_day = tools.day_by_rank(parts.year, 0, item.weekday, item.rank)
            if year_day == 0:
                raise bug(f"{item} missing in {parts.year}")
            month, day = tools.month_and_day(parts.year, year_day)
            return parts.with_fields(month=month, day=day)
        day = tools.day_by_rank(parts.year, parts.month, item.weekday, item.rank)
        if day == 0:
            raise bug(f"{item} missing in {parts.year}-{parts.month:02d}")
        return parts.with_fields(day=day)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayRankingSubPeriodPattern):
            return NotImplemented
        return self._base_unit == other._base_unit and self._ranks == other._ranks

    def __hash__(self) -> int:
        return hash((self._base_unit, self._ranks))

    def __str__(self) -> str:
        return "[" + ", ".join(str(r) for r in self._ranks) + "]"

    def __repr__(self) -> str:
        return f"DayRankingSubPeriodPattern({self._base_unit!s}, {self})"
