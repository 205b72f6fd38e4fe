"""Time engine: calendar math, patterns, domains, time indices and ranges.

This layer depends only on the standard library.  It must never import
from services, commands, output or config.
"""

from calpack.time.cycle import Cycle
from calpack.time.definition import DomainDefinition
from calpack.time.domain import TimeDomain
from calpack.time.index import TimeIndex
from calpack.time.parts import TimeParts, TimeZoneOffset
from calpack.time.range import Range
from calpack.time.registry import DomainRegistry, default_registry
from calpack.time.resolution import Adjustment, DayOfWeek, Resolution
from calpack.time.subperiod import (
    DayByNameAndRank,
    DayRankingSubPeriodPattern,
    SimpleSubPeriodPattern,
    SubPeriodPattern,
)

__all__ = [
    "Adjustment",
    "Cycle",
    "DayByNameAndRank",
    "DayOfWeek",
    "DayRankingSubPeriodPattern",
    "DomainDefinition",
    "DomainRegistry",
    "Range",
    "Resolution",
    "SimpleSubPeriodPattern",
    "SubPeriodPattern",
    "TimeDomain",
    "TimeIndex",
    "TimeParts",
    "TimeZoneOffset",
    "default_registry",
]
