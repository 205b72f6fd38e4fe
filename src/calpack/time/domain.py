"""Realized time domains: packing calendar parts into dense indices and back.

A :class:`TimeDomain` composes the raw calendar index of
:mod:`calpack.time.tools` with an optional base-period :class:`Cycle` and an
optional sub-period pattern.  Domains compare equal when their
definitions do (label excluded) and are the factories of
:class:`~calpack.time.index.TimeIndex` values.
"""

from __future__ import annotations

import logging
from functools import cache

from calpack.errors import CalpackError, OutOfRangeError, TimeOverflowError, UnsupportedPairingError, bug
from calpack.time import tools
from calpack.time.cycle import Cycle
from calpack.time.definition import DomainDefinition
from calpack.time.external import DEFAULT_FORMAT, ExternalFormat
from calpack.time.index import TimeIndex
from calpack.time.parts import TimeParts
from calpack.time.resolution import Adjustment, DayOfWeek, Resolution
from calpack.time.subperiod import SubPeriodPattern

logger = logging.getLogger(__name__)


def find_max_index(base_pattern: Cycle | None, sub_pattern: SubPeriodPattern | None) -> int:
    """Largest index of a domain with the given patterns.

    With a sub-period pattern the trailing positions of the last,
    incomplete base period are not addressable.
    """
    max_index = tools.INT64_MAX
    if sub_pattern is not None:
        max_index //= sub_pattern.size
    if base_pattern is None:
        return max_index
    for i in range(base_pattern.length):
        try:
            return base_pattern.compress(max_index - i)
        except CalpackError:
            continue
    raise bug(f"no ON position below {max_index} in cycle {base_pattern}")


class TimeDomain:
    """A calendar in which times are packed into non-negative integers."""

    def __init__(self, definition: DomainDefinition, external_format: ExternalFormat = DEFAULT_FORMAT) -> None:
        if definition.base_pattern is not None and not definition.base_pattern.effective:
            definition = DomainDefinition(
                base_unit=definition.base_unit,
                origin=definition.origin,
                sub_pattern=definition.sub_pattern,
                label=definition.label,
            )
        self._definition = definition
        self._format = external_format
        self._min_index = 0
        self._max_index = find_max_index(definition.base_pattern, definition.sub_pattern)
        self._hash = hash(definition.key)
        logger.debug("Created domain %s (max index %d)", definition, self._max_index)

    # --- Definition ---

    @property
    def definition(self) -> DomainDefinition:
        return self._definition

    @property
    def label(self) -> str | None:
        return self._definition.label

    @property
    def base_unit(self) -> Resolution:
        return self._definition.base_unit

    @property
    def origin(self) -> int:
        return self._definition.origin

    @property
    def base_pattern(self) -> Cycle | None:
        return self._definition.base_pattern

    @property
    def sub_pattern(self) -> SubPeriodPattern | None:
        return self._definition.sub_pattern

    @property
    def resolution(self) -> Resolution:
        return self._definition.resolution

    @property
    def external_format(self) -> ExternalFormat:
        return self._format

    @property
    def min_index(self) -> int:
        return self._min_index

    @property
    def max_index(self) -> int:
        return self._max_index

    def compare_resolution(self, unit: Resolution) -> int:
        """-1, 0 or 1 when this domain is coarser than, as fine as, or finer than *unit*."""
        return self.resolution.compare(unit)

    def similar(self, definition: DomainDefinition) -> bool:
        """True when *definition* describes this domain, whatever its label."""
        pattern = definition.base_pattern
        if pattern is not None and not pattern.effective:
            pattern = None
        return (definition.base_unit, definition.origin, pattern, definition.sub_pattern) == self._definition.key

    # --- Packing ---

    def valid(self, t: int) -> int:
        """Return *t* if it lies within the domain bounds, else raise OutOfRangeError."""
        if t < self._min_index or t > self._max_index:
            msg = f"Index {t} outside [{self._min_index}, {self._max_index}] in domain {self.label}"
            raise OutOfRangeError(msg)
        return t

    def _step(self, t: int, adjust: Adjustment) -> int:
        stepped = t + 1 if adjust is Adjustment.UP else t - 1
        if stepped > tools.INT64_MAX:
            msg = f"Adjusting {t} upward overflows"
            raise TimeOverflowError(msg)
        if stepped < 0:
            msg = f"Adjusting {t} downward goes below 0"
            raise OutOfRangeError(msg)
        return stepped

    def _compress(self, raw: int, adjust: Adjustment) -> int:
        pattern = self.base_pattern
        if pattern is None:
            return self.valid(raw)
        if raw < 0:
            msg = f"Index {raw} is negative"
            raise OutOfRangeError(msg)
        if raw > tools.INT64_MAX:
            msg = f"Index {raw} does not fit in 64 bits"
            raise OutOfRangeError(msg)
        if adjust is Adjustment.NONE:
            return pattern.compress(raw)
        t = raw
        # Every window of one cycle length holds an ON point, so this ends quickly.
        while not pattern.pattern[t % pattern.length]:
            t = self._step(t, adjust)
        if t != raw:
            logger.debug("Adjusted %s raw index %d to %d in domain %s", adjust, raw, t, self.label)
        return pattern.compress(t)

    def pack(self, parts: TimeParts, adjust: Adjustment = Adjustment.NONE) -> int:
        """Return the index of *parts*, adjusted as requested when they do not exist."""
        raw = tools.raw_index(self.base_unit, parts)
        sub = self.sub_pattern
        if sub is None:
            t = self._compress(raw, adjust)
        else:
            # Adjustments apply to the sub period only.
            t = self._compress(raw, Adjustment.NONE)
            t = sub.adjust_for_sub_period(t, adjust, parts)
        return self.valid(t)

    def unpack(self, t: int) -> TimeParts:
        """Return the calendar parts of index *t*."""
        sub = self.sub_pattern
        position = 0
        if sub is not None:
            t, position = divmod(t, sub.size)
        if self.base_pattern is not None:
            t = self.base_pattern.expand(t)
        parts = tools.decompose(self.base_unit, t)
        if sub is not None:
            parts = sub.fill_in_sub_period(position, parts)
        return parts

    def day_of_week(self, t: int) -> DayOfWeek:
        if self.sub_pattern is not None:
            if self.resolution.coarser_than(Resolution.DAY):
                msg = f"Day of week is undefined in domain {self.label} at resolution {self.resolution}"
                raise UnsupportedPairingError(msg)
            return tools.unit_day_of_week(Resolution.DAY, tools.raw_index(Resolution.DAY, self.unpack(t)))
        if self.base_pattern is not None:
            t = self.base_pattern.expand(t)
        return tools.unit_day_of_week(self.resolution, t)

    def base_period_start(self, t: int) -> int:
        """Index of the first sub period in the base period of *t*."""
        if self.sub_pattern is None:
            return t
        size = self.sub_pattern.size
        return (t // size) * size

    # --- Time values ---

    def time(self, value: int | str | TimeParts, adjust: Adjustment = Adjustment.NONE) -> TimeIndex:
        """Build a time from an index, a text or calendar parts.

        Indices must already exist in the domain; *adjust* only applies to
        text and parts.
        """
        if isinstance(value, bool):
            msg = "A time index must be an int, not a bool"
            raise TypeError(msg)
        if isinstance(value, int):
            return TimeIndex(self, value)
        if isinstance(value, str):
            parts = self._format.scan(value)
            try:
                return TimeIndex(self, self.pack(parts, adjust))
            except CalpackError as exc:
                msg = f"{value!r} in domain {self.label}: {exc.message}"
                raise type(exc)(msg) from exc
        return TimeIndex(self, self.pack(value, adjust))

    def from_components(
        self,
        year: int,
        month: int = 1,
        day: int = 1,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        fraction: int = 0,
        *,
        adjust: Adjustment = Adjustment.NONE,
    ) -> TimeIndex:
        parts = TimeParts(year, month, day, hour, minute, second, fraction)
        return self.time(parts, adjust)

    def time_from_offset(self, offset: int) -> TimeIndex:
        """Time at *offset* units from the origin of the domain."""
        return TimeIndex(self, offset + self.origin)

    def min_time(self, offset_compatible: bool = False) -> TimeIndex:
        if offset_compatible:
            return TimeIndex(self, max(self.origin, self._min_index))
        return TimeIndex(self, self._min_index)

    def max_time(self, offset_compatible: bool = False) -> TimeIndex:
        if offset_compatible:
            return TimeIndex(self, min(tools.INT32_MAX + self.origin, self._max_index))
        return TimeIndex(self, self._max_index)

    def format(self, t: int) -> str:
        return self._format.format(self.resolution, self.unpack(t))

    # --- Identity ---

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TimeDomain):
            return NotImplemented
        return self._hash == other._hash and self._definition == other._definition

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return str(self._definition)

    def __repr__(self) -> str:
        return f"TimeDomain({self._definition})"


@cache
def unrestricted_domain(resolution: Resolution) -> TimeDomain:
    """Pattern-free domain with origin 0 at *resolution*, used to compare across domains."""
    return TimeDomain(DomainDefinition(base_unit=resolution, label=resolution.lower()))
