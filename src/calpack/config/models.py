"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, calpack.toml only contains
overrides.  Custom domains are declared one table per label::

    [domains.fortnight]
    unit = "DAY"
    cycle = "10000000000000"

    [domains.midmonth]
    unit = "MONTH"
    sub_unit = "DAY"
    positions = [15]

    [domains.lastfriday]
    unit = "MONTH"
    ranks = ["Fri#-1"]
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from calpack.time.cycle import Cycle
from calpack.time.definition import DomainDefinition
from calpack.time.resolution import Adjustment, Resolution
from calpack.time.subperiod import (
    DayByNameAndRank,
    DayRankingSubPeriodPattern,
    SimpleSubPeriodPattern,
    SubPeriodPattern,
)


class FormatConfig(BaseModel):
    """[format] section."""

    model_config = {"frozen": True}

    use_t_separator: bool = False


class DefaultsConfig(BaseModel):
    """[defaults] section."""

    model_config = {"frozen": True}

    domain: str = "daily"
    adjust: Adjustment = Adjustment.NONE


class DomainConfig(BaseModel):
    """One [domains.<label>] table."""

    model_config = {"frozen": True}

    unit: Resolution
    origin: int = 0
    cycle: str | None = None
    sub_unit: Resolution | None = None
    positions: list[int] = Field(default_factory=list)
    ranks: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_sub_period(self) -> DomainConfig:
        if self.ranks and (self.sub_unit is not None or self.positions):
            msg = "use either ranks or sub_unit/positions, not both"
            raise ValueError(msg)
        if (self.sub_unit is None) != (not self.positions):
            msg = "sub_unit and positions go together"
            raise ValueError(msg)
        return self

    def sub_pattern(self) -> SubPeriodPattern | None:
        if self.ranks:
            return DayRankingSubPeriodPattern(self.unit, [DayByNameAndRank.parse(r) for r in self.ranks])
        if self.sub_unit is not None:
            return SimpleSubPeriodPattern(self.unit, self.sub_unit, self.positions)
        return None

    def to_definition(self, label: str) -> DomainDefinition:
        """Build the domain definition; calendar errors surface as CalpackError."""
        return DomainDefinition(
            base_unit=self.unit,
            origin=self.origin,
            base_pattern=Cycle.parse(self.cycle) if self.cycle else None,
            sub_pattern=self.sub_pattern(),
            label=label,
        )
