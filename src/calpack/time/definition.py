"""Immutable declaration of a time domain."""

from __future__ import annotations

from dataclasses import dataclass, field

from calpack.errors import InvalidArgumentError
from calpack.time.cycle import Cycle
from calpack.time.resolution import Resolution
from calpack.time.subperiod import SubPeriodPattern
from calpack.time.tools import INT64_MAX, INT64_MIN


@dataclass(frozen=True)
class DomainDefinition:
    """Base unit, origin and optional patterns of a domain.

    The label is informative only: two definitions describe the same
    domain when everything but the label is equal.
    """

    base_unit: Resolution
    origin: int = 0
    base_pattern: Cycle | None = None
    sub_pattern: SubPeriodPattern | None = None
    label: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not INT64_MIN <= self.origin <= INT64_MAX:
            msg = f"Origin {self.origin} is not a 64-bit integer"
            raise InvalidArgumentError(msg)
        if self.sub_pattern is not None and self.sub_pattern.base_unit != self.base_unit:
            msg = (
                f"Sub-period pattern based on {self.sub_pattern.base_unit} "
                f"does not fit base unit {self.base_unit}"
            )
            raise InvalidArgumentError(msg)

    @property
    def resolution(self) -> Resolution:
        """Sub unit when a sub-period pattern is present, else the base unit."""
        if self.sub_pattern is not None:
            return self.sub_pattern.sub_unit
        return self.base_unit

    @property
    def key(self) -> tuple[Resolution, int, Cycle | None, SubPeriodPattern | None]:
        """Identity of the domain, label excluded."""
        return (self.base_unit, self.origin, self.base_pattern, self.sub_pattern)

    def __str__(self) -> str:
        return (
            f"L={self.label} O={self.origin} U={self.base_unit} "
            f"P={self.base_pattern} S={self.sub_pattern}"
        )
