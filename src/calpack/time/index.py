"""Immutable points in time: a domain and an index within it."""

from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING

from calpack.errors import DomainMismatchError, InvalidArgumentError, TimeOverflowError, UnsupportedPairingError
from calpack.time import tools
from calpack.time.resolution import Adjustment, DayOfWeek, Resolution

if TYPE_CHECKING:
    from calpack.time.domain import TimeDomain
    from calpack.time.parts import TimeParts


class TimeIndex:
    """A time in a :class:`~calpack.time.domain.TimeDomain`.

    Equality and hashing use the domain and the index.  Ordering works
    across domains: values of different domains are compared after
    conversion to a pattern-free domain at the finer resolution.

    Calendar parts are computed on first use and kept.
    """

    def __init__(self, domain: TimeDomain, index: int) -> None:
        self._domain = domain
        self._index = domain.valid(index)

    @property
    def domain(self) -> TimeDomain:
        return self._domain

    @property
    def index(self) -> int:
        return self._index

    def as_index(self) -> int:
        return self._index

    def as_offset(self) -> int:
        """Distance from the domain origin; must fit in a signed 32-bit integer."""
        offset = self._index - self._domain.origin
        if not tools.INT32_MIN <= offset <= tools.INT32_MAX:
            msg = f"Offset {offset} of {self} does not fit in 32 bits"
            raise TimeOverflowError(msg)
        return offset

    @cached_property
    def parts(self) -> TimeParts:
        return self._domain.unpack(self._index)

    @property
    def year(self) -> int:
        return self.parts.year

    @property
    def month(self) -> int:
        return self.parts.month

    @property
    def day(self) -> int:
        return self.parts.day

    @property
    def hour(self) -> int:
        return self.parts.hour

    @property
    def minute(self) -> int:
        return self.parts.minute

    @property
    def second(self) -> int:
        return self.parts.second

    @property
    def fraction(self) -> int:
        return self.parts.fraction

    # --- Arithmetic ---

    def add(self, increment: int) -> TimeIndex:
        total = tools.checked_add(self._index, increment)
        if total is None:
            msg = f"{self} + {increment} overflows"
            raise TimeOverflowError(msg)
        return TimeIndex(self._domain, total)

    def sub(self, other: TimeIndex) -> int:
        """Number of steps from *other* to this time, in the same domain."""
        if other.domain != self._domain:
            msg = f"Cannot subtract {other} ({other.domain.label}) from {self} ({self._domain.label})"
            raise DomainMismatchError(msg)
        diff = tools.checked_add(self._index, -other.index)
        if diff is None:
            msg = f"{self} - {other} overflows"
            raise TimeOverflowError(msg)
        return diff

    def __add__(self, increment: int) -> TimeIndex:
        if not isinstance(increment, int):
            return NotImplemented
        return self.add(increment)

    def __radd__(self, increment: int) -> TimeIndex:
        return self.__add__(increment)

    def __sub__(self, other: int | TimeIndex) -> TimeIndex | int:
        if isinstance(other, TimeIndex):
            return self.sub(other)
        if isinstance(other, int):
            return self.add(-other)
        return NotImplemented

    # --- Conversion ---

    def convert(self, domain: TimeDomain, adjust: Adjustment = Adjustment.NONE) -> TimeIndex:
        """This time in another domain, adjusted as requested when it does not exist there."""
        if domain == self._domain:
            return self
        return domain.time(self.parts, adjust)

    def day_of_week(self) -> DayOfWeek:
        return self._domain.day_of_week(self._index)

    def day_by_rank(self, base_unit: Resolution, weekday: DayOfWeek, rank: int) -> TimeIndex | None:
        """The *rank*-th *weekday* of the month or year of this time, as a daily time.

        Returns None when the period has no such day.
        """
        from calpack.time.domain import unrestricted_domain

        year = self.parts.year
        match base_unit:
            case Resolution.MONTH:
                if self._domain.resolution.coarser_than(Resolution.MONTH):
                    msg = f"{self} has no month"
                    raise UnsupportedPairingError(msg)
                day = tools.day_by_rank(year, self.parts.month, weekday, rank)
                if day == 0:
                    return None
                month = self.parts.month
            case Resolution.YEAR:
                year_day = tools.day_by_rank(year, 0, weekday, rank)
                if year_day == 0:
                    return None
                month, day = tools.month_and_day(year, year_day)
            case _:
                msg = f"Day by rank requires a MONTH or YEAR period, not {base_unit}"
                raise InvalidArgumentError(msg)
        return unrestricted_domain(Resolution.DAY).from_components(year, month, day)

    def base_period_start(self) -> TimeIndex:
        start = self._domain.base_period_start(self._index)
        return self if start == self._index else TimeIndex(self._domain, start)

    # --- Comparison ---

    def compare(self, other: TimeIndex) -> int:
        """Return -1, 0 or 1; works across domains."""
        from calpack.time.domain import unrestricted_domain

        if other.domain == self._domain:
            return (self._index > other.index) - (self._index < other.index)
        order = self._domain.resolution.compare(other.domain.resolution)
        if order == 0:
            canonical = unrestricted_domain(self._domain.resolution)
            return self._canonical(canonical).compare(other._canonical(canonical))
        if order < 0:
            return self._canonical(unrestricted_domain(other.domain.resolution)).compare(other)
        return self.compare(other._canonical(unrestricted_domain(self._domain.resolution)))

    def _canonical(self, domain: TimeDomain) -> TimeIndex:
        # A pattern-free domain contains every point of a coarser or equal resolution.
        return self.convert(domain, Adjustment.NONE)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeIndex):
            return NotImplemented
        return self._index == other._index and self._domain == other._domain

    def __lt__(self, other: TimeIndex) -> bool:
        if not isinstance(other, TimeIndex):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: TimeIndex) -> bool:
        if not isinstance(other, TimeIndex):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: TimeIndex) -> bool:
        if not isinstance(other, TimeIndex):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: TimeIndex) -> bool:
        if not isinstance(other, TimeIndex):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        return hash((self._domain, self._index))

    def __str__(self) -> str:
        return self._domain.external_format.format(self._domain.resolution, self.parts)

    def __repr__(self) -> str:
        return f"TimeIndex({self._domain.label}, {self._index}, {str(self)!r})"
