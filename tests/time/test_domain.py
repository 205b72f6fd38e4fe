"""Tests for TimeDomain packing, bounds and patterns."""

from __future__ import annotations

import pytest

from calpack.errors import (
    InvalidArgumentError,
    OutOfRangeError,
    ParseError,
    UnreachableTimeError,
)
from calpack.time import tools
from calpack.time.cycle import Cycle
from calpack.time.definition import DomainDefinition
from calpack.time.domain import TimeDomain, find_max_index, unrestricted_domain
from calpack.time.parts import TimeParts
from calpack.time.registry import DomainRegistry
from calpack.time.resolution import Adjustment, DayOfWeek, Resolution
from calpack.time.subperiod import SimpleSubPeriodPattern

SECONDS = SimpleSubPeriodPattern(Resolution.DAY, Resolution.SEC, [36000, 54000, 64800])
MONTH_DAYS = SimpleSubPeriodPattern(Resolution.MONTH, Resolution.DAY, [10, 20])


class TestDefinition:
    def test_str(self) -> None:
        definition = DomainDefinition(
            Resolution.YEAR,
            base_pattern=Cycle.parse("1000"),
            sub_pattern=SimpleSubPeriodPattern(Resolution.YEAR, Resolution.MONTH, [3, 9]),
            label="abc",
        )
        assert str(definition) == "L=abc O=0 U=YEAR P=1000 S=MONTH[3, 9]"
        assert definition.resolution is Resolution.MONTH

    def test_sub_pattern_must_match_base_unit(self) -> None:
        with pytest.raises(InvalidArgumentError):
            DomainDefinition(Resolution.DAY, sub_pattern=MONTH_DAYS)

    def test_origin_must_fit_64_bits(self) -> None:
        with pytest.raises(InvalidArgumentError):
            DomainDefinition(Resolution.DAY, origin=2**63)

    def test_label_ignored_by_equality(self) -> None:
        assert DomainDefinition(Resolution.DAY, label="a") == DomainDefinition(Resolution.DAY, label="b")


class TestBounds:
    def test_daily_bounds(self, daily: TimeDomain) -> None:
        assert daily.min_index == 0
        assert daily.max_index == tools.INT64_MAX
        assert str(daily.time(0)) == "0000-01-01"
        assert str(daily.max_time()) == "+25252734927766554-07-27"

    def test_workweek_bounds(self, workweek: TimeDomain) -> None:
        assert workweek.max_index == 6588122883467697004
        assert str(workweek.max_time()) == "+25252734927766554-07-26"
        assert str(workweek.min_time()) == "0000-01-03"

    def test_usec_max(self) -> None:
        usec = unrestricted_domain(Resolution.USEC)
        assert str(usec.time(tools.INT64_MAX)) == "+292277-01-09 04:00:54.775807"

    def test_find_max_index_with_sub_pattern(self) -> None:
        assert find_max_index(None, MONTH_DAYS) == tools.INT64_MAX // 2

    def test_out_of_range(self, daily: TimeDomain) -> None:
        with pytest.raises(OutOfRangeError):
            daily.time(-1)
        with pytest.raises(OutOfRangeError):
            daily.valid(tools.INT64_MAX + 1)

    def test_offset_compatible_bounds(self, daily: TimeDomain, datetime_domain: TimeDomain) -> None:
        assert daily.max_time(offset_compatible=True).index == tools.INT32_MAX
        assert daily.min_time(offset_compatible=True).index == 0
        assert datetime_domain.min_time(offset_compatible=True).as_offset() == 0
        assert str(datetime_domain.min_time(offset_compatible=True)) == "2000-01-01 00:00:00"
        assert datetime_domain.max_time(offset_compatible=True).as_offset() == tools.INT32_MAX


class TestPacking:
    def test_known_index(self, daily: TimeDomain) -> None:
        assert daily.time("2000-01-01").index == 730485

    def test_round_trip(self, datetime_domain: TimeDomain) -> None:
        t = datetime_domain.time("2009-06-01 12:34:12")
        assert datetime_domain.time(t.index) == t
        assert datetime_domain.unpack(t.index) == TimeParts(2009, 6, 1, 12, 34, 12)

    def test_bool_rejected(self, daily: TimeDomain) -> None:
        with pytest.raises(TypeError):
            daily.time(True)

    def test_from_components(self, daily: TimeDomain) -> None:
        assert str(daily.from_components(2005, 6, 2)) == "2005-06-02"

    def test_midnight_24(self, datetime_domain: TimeDomain) -> None:
        assert str(datetime_domain.time("2004-02-29 24:00:00")) == "2004-03-01 00:00:00"

    def test_leap_second(self, datetime_domain: TimeDomain) -> None:
        t = datetime_domain.time("2008-12-31 23:59:60")
        assert str(t) == "2008-12-31 23:59:59"
        assert str(t + 1) == "2009-01-01 00:00:00"

    def test_leap_second_wrong_day(self, datetime_domain: TimeDomain) -> None:
        with pytest.raises(InvalidArgumentError):
            datetime_domain.time("2008-10-31 23:59:60")

    def test_offsets(self) -> None:
        msec = unrestricted_domain(Resolution.MSEC)
        hour = unrestricted_domain(Resolution.HOUR)
        usec = unrestricted_domain(Resolution.USEC)
        sec = unrestricted_domain(Resolution.SEC)
        assert str(msec.time("20040229T140012,5-0200")) == "2004-02-29 16:00:12.500"
        assert str(hour.time("2004-02-29 14:00:12.500+02:30")) == "2004-02-29 11"
        assert str(hour.time("2004-02-29 14:00-02:30")) == "2004-02-29 16"
        assert str(usec.time("1937-01-01 00-00:19:32.13")) == "1937-01-01 00:19:32.130000"
        assert str(sec.time("2004-02-29 14-02:15:20")) == "2004-02-29 16:15:20"
        assert str(sec.time("2004-02-29T+02:15:20")) == "2004-02-28 21:44:40"

    def test_invalid_offset(self, datetime_domain: TimeDomain) -> None:
        with pytest.raises(InvalidArgumentError):
            datetime_domain.time("2004-02-29 14:00+12:70:60")

    def test_parse_error_propagates(self, daily: TimeDomain) -> None:
        with pytest.raises(ParseError):
            daily.time("2010.03.31")

    def test_error_names_input_and_domain(self, workweek: TimeDomain) -> None:
        with pytest.raises(UnreachableTimeError, match="2005-06-04.*workweek") as info:
            workweek.time("2005-06-04")
        assert isinstance(info.value.__cause__, UnreachableTimeError)


class TestCycles:
    def test_weekly_adjustments(self, registry: DomainRegistry) -> None:
        weekly = registry.lookup("weekly")
        assert str(weekly.time("2005-06-01", Adjustment.UP)) == "2005-06-02"
        assert str(weekly.time("2005-06-01", Adjustment.DOWN)) == "2005-05-26"

    def test_workweek_step(self, workweek: TimeDomain) -> None:
        assert str(workweek.time("2008-03-20") + 3) == "2008-03-25"

    def test_year_cycle_with_sub_pattern(self) -> None:
        domain = TimeDomain(
            DomainDefinition(
                Resolution.YEAR,
                base_pattern=Cycle.parse("1000"),
                sub_pattern=SimpleSubPeriodPattern(Resolution.YEAR, Resolution.MONTH, [3, 9]),
            )
        )
        t = domain.time("2000", Adjustment.UP)
        assert str(t) == "2000-03"
        assert str(t + 3) == "2004-09"

    def test_cycle_with_origin(self) -> None:
        domain = TimeDomain(DomainDefinition(Resolution.YEAR, origin=2, base_pattern=Cycle.parse("0010")))
        with pytest.raises(UnreachableTimeError):
            domain.time("1996")
        t = domain.time("1998")
        assert t.as_offset() == t.index - 2

    def test_ineffective_cycle_dropped(self) -> None:
        domain = TimeDomain(DomainDefinition(Resolution.DAY, base_pattern=Cycle.parse("11")))
        assert domain.base_pattern is None
        assert domain == TimeDomain(DomainDefinition(Resolution.DAY))


class TestSubPeriods:
    def test_month_days(self) -> None:
        domain = TimeDomain(DomainDefinition(Resolution.MONTH, sub_pattern=MONTH_DAYS))
        assert domain.resolution is Resolution.DAY
        assert str(domain.time("2005-06-05", Adjustment.UP)) == "2005-06-10"
        assert str(domain.time("2005-06-25", Adjustment.DOWN)) == "2005-06-20"
        assert str(domain.time("2005-06-25", Adjustment.UP)) == "2005-07-10"
        assert str(domain.time("2005-06-05", Adjustment.DOWN)) == "2005-05-20"

    def test_seconds_of_day(self) -> None:
        domain = TimeDomain(DomainDefinition(Resolution.DAY, sub_pattern=SECONDS))
        assert str(domain.time("2005-06-01 11:00:00", Adjustment.UP)) == "2005-06-01 15:00:00"
        assert str(domain.time("2005-06-01 11:00:00", Adjustment.DOWN)) == "2005-06-01 10:00:00"
        assert str(domain.time("2005-06-01 19:00:00", Adjustment.UP)) == "2005-06-02 10:00:00"
        assert str(domain.time("2005-06-01 09:00:00", Adjustment.DOWN)) == "2005-05-31 18:00:00"

    def test_base_cycle_not_adjusted_with_sub_pattern(self, workweek: TimeDomain) -> None:
        domain = TimeDomain(
            DomainDefinition(
                Resolution.DAY,
                base_pattern=workweek.base_pattern,
                sub_pattern=SimpleSubPeriodPattern(Resolution.DAY, Resolution.SEC, [36000, 54000, 63000]),
            )
        )
        with pytest.raises(UnreachableTimeError):
            domain.time("2005-05-01", Adjustment.UP)

    def test_base_period_start(self) -> None:
        domain = TimeDomain(DomainDefinition(Resolution.DAY, sub_pattern=SECONDS))
        t = domain.time("2005-06-01 18:00:00")
        assert str(t.base_period_start()) == "2005-06-01 10:00:00"


class TestDayOfWeek:
    def test_workweek_starts_monday(self, workweek: TimeDomain) -> None:
        assert workweek.day_of_week(0) is DayOfWeek.MON

    def test_third_friday(self, registry: DomainRegistry) -> None:
        thirdfriday = registry.lookup("thirdfriday")
        assert thirdfriday.time("2005-02-18").day_of_week() is DayOfWeek.FRI


class TestIdentity:
    def test_equal_definitions(self, daily: TimeDomain) -> None:
        assert daily == TimeDomain(DomainDefinition(Resolution.DAY))
        assert hash(daily) == hash(TimeDomain(DomainDefinition(Resolution.DAY)))

    def test_similar(self, daily: TimeDomain, workweek: TimeDomain) -> None:
        assert daily.similar(DomainDefinition(Resolution.DAY, label="other"))
        assert not workweek.similar(DomainDefinition(Resolution.DAY))

    def test_compare_resolution(self, daily: TimeDomain) -> None:
        assert daily.compare_resolution(Resolution.YEAR) == 1
        assert daily.compare_resolution(Resolution.DAY) == 0
        assert daily.compare_resolution(Resolution.SEC) == -1
