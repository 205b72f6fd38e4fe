"""Time units, adjustment policies and days of the week.

All three are closed enums.  :class:`Resolution` members are ordered from
the coarsest (``YEAR``) to the finest (``NSEC``); use :meth:`Resolution.compare`
or the ``finer_than``/``coarser_than`` helpers rather than string ordering.
"""

from __future__ import annotations

from enum import StrEnum

from calpack.errors import InvalidArgumentError


class Resolution(StrEnum):
    """Unit of a time index, coarse to fine."""

    YEAR = "YEAR"
    MONTH = "MONTH"
    DAY = "DAY"
    HOUR = "HOUR"
    MIN = "MIN"
    SEC = "SEC"
    MSEC = "MSEC"
    USEC = "USEC"
    NSEC = "NSEC"

    @property
    def precision(self) -> int:
        """Position in the coarse-to-fine order (YEAR is 0)."""
        return _RESOLUTION_ORDER.index(self)

    def compare(self, other: Resolution) -> int:
        """Return -1, 0 or 1 when *self* is coarser than, equal to or finer than *other*."""
        diff = self.precision - other.precision
        return (diff > 0) - (diff < 0)

    def finer_than(self, other: Resolution) -> bool:
        return self.precision > other.precision

    def coarser_than(self, other: Resolution) -> bool:
        return self.precision < other.precision


_RESOLUTION_ORDER: tuple[Resolution, ...] = tuple(Resolution)


class Adjustment(StrEnum):
    """Policy for resolving a requested point that does not exist in a domain."""

    NONE = "NONE"
    UP = "UP"
    DOWN = "DOWN"


class DayOfWeek(StrEnum):
    """Days of the week, Sunday first."""

    SUN = "Sun"
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"

    @property
    def number(self) -> int:
        """Zero-based position, Sunday is 0."""
        return _WEEKDAY_ORDER.index(self)

    @classmethod
    def from_number(cls, number: int) -> DayOfWeek:
        return _WEEKDAY_ORDER[number % 7]

    @classmethod
    def parse(cls, text: str) -> DayOfWeek:
        """Accept ``Fri``, ``FRI``, ``friday`` and similar spellings."""
        key = text.strip()[:3].capitalize()
        try:
            return cls(key)
        except ValueError:
            msg = f"Unknown day of week: {text!r}"
            raise InvalidArgumentError(msg) from None


_WEEKDAY_ORDER: tuple[DayOfWeek, ...] = tuple(DayOfWeek)
