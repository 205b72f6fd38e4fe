"""Built-in domains.

========== ====== ======================== ===========================
label      unit   origin                   patterns
========== ====== ======================== ===========================
yearly     YEAR   0                        none
monthly    MONTH  0                        none
daily      DAY    0                        none
weekly     DAY    0                        Thursdays
workweek   DAY    0                        Monday to Friday
datetime   SEC    2000-01-01 00:00:00      none
systemtime MSEC   1970-01-01 00:00:00.000  none
thirdfriday MONTH 0                       third Friday of the month
========== ====== ======================== ===========================

Day 0 (0000-01-01) is a Saturday, so weekly cycles start on Saturday.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from calpack.time import tools
from calpack.time.cycle import Cycle
from calpack.time.resolution import DayOfWeek, Resolution
from calpack.time.subperiod import DayByNameAndRank, DayRankingSubPeriodPattern

if TYPE_CHECKING:
    from calpack.time.registry import DomainRegistry

DAYS_TO_20000101 = tools.ymd_to_day_count(2000, 1, 1)
DAYS_TO_19700101 = tools.ymd_to_day_count(1970, 1, 1)

#           Sat    Sun    Mon    Tue    Wed    Thu    Fri
THURSDAYS = Cycle((False, False, False, False, False, True, False))
WORKDAYS = Cycle((False, False, True, True, True, True, True))

THIRD_FRIDAY = DayRankingSubPeriodPattern(Resolution.MONTH, [DayByNameAndRank(DayOfWeek.FRI, 3)])


def register_builtins(registry: DomainRegistry) -> None:
    registry.register("yearly", Resolution.YEAR)
    registry.register("monthly", Resolution.MONTH)
    registry.register("daily", Resolution.DAY)
    registry.register("weekly", Resolution.DAY, base_pattern=THURSDAYS)
    registry.register("workweek", Resolution.DAY, base_pattern=WORKDAYS)
    registry.register("datetime", Resolution.SEC, origin=DAYS_TO_20000101 * tools.SECONDS_PER_DAY)
    registry.register("systemtime", Resolution.MSEC, origin=DAYS_TO_19700101 * tools.SECONDS_PER_DAY * 1000)
    registry.register("thirdfriday", Resolution.MONTH, sub_pattern=THIRD_FRIDAY)
