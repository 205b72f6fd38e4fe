"""Immutable closed intervals of times within one domain."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from calpack.errors import DomainMismatchError, TimeOverflowError
from calpack.time import tools
from calpack.time.index import TimeIndex
from calpack.time.resolution import Adjustment

if TYPE_CHECKING:
    from calpack.time.domain import TimeDomain

# Adjustments applied to (first, last) so that UP widens and DOWN narrows.
_BOUND_ADJUSTMENTS: dict[Adjustment, tuple[Adjustment, Adjustment]] = {
    Adjustment.NONE: (Adjustment.NONE, Adjustment.NONE),
    Adjustment.UP: (Adjustment.DOWN, Adjustment.UP),
    Adjustment.DOWN: (Adjustment.UP, Adjustment.DOWN),
}


class Range:
    """Times ``first`` to ``last`` inclusive in a single domain.

    A range with ``first > last`` is empty; all empty ranges of a domain
    are stored as ``first=0, last=-1`` and compare equal.
    """

    __slots__ = ("_domain", "_first", "_last")

    def __init__(self, domain: TimeDomain, first: int = 0, last: int = -1) -> None:
        if first > last:
            first, last = 0, -1
        else:
            domain.valid(first)
            domain.valid(last)
        self._domain = domain
        self._first = first
        self._last = last

    @classmethod
    def between(cls, first: TimeIndex, last: TimeIndex) -> Range:
        """Range from two times of the same domain."""
        if first.domain != last.domain:
            msg = f"Range bounds {first} and {last} are in different domains"
            raise DomainMismatchError(msg)
        return cls(first.domain, first.index, last.index)

    @classmethod
    def parse(
        cls,
        domain: TimeDomain,
        first: str,
        last: str,
        adjust: Adjustment = Adjustment.NONE,
    ) -> Range:
        """Range from two texts.  UP includes the nearest outer times, DOWN the nearest inner ones."""
        first_adjust, last_adjust = _BOUND_ADJUSTMENTS[adjust]
        return cls.between(domain.time(first, first_adjust), domain.time(last, last_adjust))

    @property
    def domain(self) -> TimeDomain:
        return self._domain

    @property
    def first_index(self) -> int:
        return self._first

    @property
    def last_index(self) -> int:
        return self._last

    @property
    def first(self) -> TimeIndex | None:
        return None if self.is_empty() else TimeIndex(self._domain, self._first)

    @property
    def last(self) -> TimeIndex | None:
        return None if self.is_empty() else TimeIndex(self._domain, self._last)

    def is_empty(self) -> bool:
        return self._first > self._last

    @property
    def size(self) -> int:
        return self._last - self._first + 1

    def size_as_int(self) -> int:
        """Size of the range, which must fit in a signed 32-bit integer."""
        size = self.size
        if size > tools.INT32_MAX:
            msg = f"Range {self} has {size} elements, too many for 32 bits"
            raise TimeOverflowError(msg)
        return size

    def _check_domain(self, domain: TimeDomain) -> None:
        if domain != self._domain:
            msg = f"Domain {domain.label} differs from range domain {self._domain.label}"
            raise DomainMismatchError(msg)

    def contains(self, item: int | TimeIndex | Range) -> bool:
        """True if *item* lies in the range.  An empty range lies in every range."""
        if isinstance(item, Range):
            self._check_domain(item.domain)
            if item.is_empty():
                return True
            return not self.is_empty() and self._first <= item._first and item._last <= self._last
        if isinstance(item, TimeIndex):
            self._check_domain(item.domain)
            item = item.index
        return self._first <= item <= self._last

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, (int, TimeIndex, Range)):
            return False
        return self.contains(item)

    def union(self, other: Range) -> Range:
        """Smallest range covering both, gaps included."""
        self._check_domain(other.domain)
        if other.is_empty():
            return self
        if self.is_empty():
            return other
        return Range(self._domain, min(self._first, other._first), max(self._last, other._last))

    def intersection(self, other: Range) -> Range:
        self._check_domain(other.domain)
        return Range(self._domain, max(self._first, other._first), min(self._last, other._last))

    def convert(self, domain: TimeDomain, adjust: Adjustment = Adjustment.NONE) -> Range:
        """The range in another domain, bounds adjusted like :meth:`parse`."""
        if self.is_empty():
            return Range(domain)
        if domain == self._domain:
            return self
        first_adjust, last_adjust = _BOUND_ADJUSTMENTS[adjust]
        first = TimeIndex(self._domain, self._first).convert(domain, first_adjust)
        last = TimeIndex(self._domain, self._last).convert(domain, last_adjust)
        return Range(domain, first.index, last.index)

    def __iter__(self) -> Iterator[TimeIndex]:
        for index in range(self._first, self._last + 1):
            yield TimeIndex(self._domain, index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self._domain == other._domain and self._first == other._first and self._last == other._last

    def __hash__(self) -> int:
        return hash((self._domain, self._first, self._last))

    def __str__(self) -> str:
        if self.is_empty():
            return "[]"
        return f"[{self.first}, {self.last}]"

    def __repr__(self) -> str:
        return f"Range({self._domain.label}, {self})"

