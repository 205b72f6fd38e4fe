"""Sweeps over whole index and calendar ranges for the packing guarantees."""

from __future__ import annotations

import pytest

from calpack.time import tools
from calpack.time.cycle import Cycle
from calpack.time.definition import DomainDefinition
from calpack.time.domain import TimeDomain, unrestricted_domain
from calpack.time.external import scan
from calpack.time.index import TimeIndex
from calpack.time.parts import TimeParts
from calpack.time.resolution import Adjustment, Resolution
from calpack.time.subperiod import (
    DayByNameAndRank,
    DayRankingSubPeriodPattern,
    SimpleSubPeriodPattern,
    SubPeriodPattern,
)


def _domain(unit: Resolution, *, cycle: str | None = None, sub: SubPeriodPattern | None = None) -> TimeDomain:
    pattern = Cycle.parse(cycle) if cycle else None
    return TimeDomain(DomainDefinition(unit, base_pattern=pattern, sub_pattern=sub))


def _ranks(unit: Resolution, *ranks: str) -> DayRankingSubPeriodPattern:
    return DayRankingSubPeriodPattern(unit, [DayByNameAndRank.parse(r) for r in ranks])


PATTERNED = {
    "workweek": _domain(Resolution.DAY, cycle="0011111"),
    "thursdays": _domain(Resolution.DAY, cycle="0000010"),
    "month_days": _domain(Resolution.MONTH, sub=SimpleSubPeriodPattern(Resolution.MONTH, Resolution.DAY, [10, 20])),
    "quarter_months": _domain(Resolution.YEAR, sub=SimpleSubPeriodPattern(Resolution.YEAR, Resolution.MONTH, [3, 9])),
    "day_seconds": _domain(Resolution.DAY, sub=SimpleSubPeriodPattern(Resolution.DAY, Resolution.SEC, [36000, 54000])),
    "third_friday": _domain(Resolution.MONTH, sub=_ranks(Resolution.MONTH, "Fri#3")),
    "last_friday_of_year": _domain(Resolution.YEAR, sub=_ranks(Resolution.YEAR, "Fri#-1")),
}

DAY_RESOLUTION = ["workweek", "thursdays", "month_days", "third_friday", "last_friday_of_year"]


@pytest.mark.parametrize("label", list(PATTERNED))
def test_round_trip(label: str) -> None:
    domain = PATTERNED[label]
    indices = [*range(400), *(domain.max_index - k for k in range(5))]
    for index in indices:
        assert domain.pack(domain.unpack(index), Adjustment.NONE) == index, index


@pytest.mark.parametrize("label", DAY_RESOLUTION)
def test_adjustment_is_nearest(label: str, daily: TimeDomain) -> None:
    domain = PATTERNED[label]
    first = daily.time("2005-01-01").index
    for index in range(first, first + 730):
        request = TimeIndex(daily, index)
        up = domain.time(request.parts, Adjustment.UP)
        assert up >= request
        if up.index > 0:
            assert up - 1 < request
        down = domain.time(request.parts, Adjustment.DOWN)
        assert down <= request
        if down.index < domain.max_index:
            assert down + 1 > request


def test_first_day_of_every_year(daily: TimeDomain) -> None:
    previous: TimeIndex | None = None
    for year in range(10000):
        parts = TimeParts(year, 1, 1)
        t = daily.time(parts)
        text = str(t)
        assert text == f"{year:04d}-01-01"
        assert scan(text) == parts
        assert daily.time(text) == t
        assert t.parts == parts
        if previous is not None:
            assert t - previous == tools.days_in_year(year - 1)
        previous = t


def test_usec_max_reparses() -> None:
    usec = unrestricted_domain(Resolution.USEC)
    text = str(usec.time(tools.INT64_MAX))
    assert usec.time(text).index == tools.INT64_MAX
