"""Tests for Range."""

from __future__ import annotations

import pytest

from calpack.errors import DomainMismatchError, TimeOverflowError
from calpack.time.domain import TimeDomain
from calpack.time.range import Range
from calpack.time.registry import DomainRegistry
from calpack.time.resolution import Adjustment


def _range(domain: TimeDomain, first: str, last: str) -> Range:
    return Range.parse(domain, first, last)


class TestSize:
    def test_two_days(self, daily: TimeDomain) -> None:
        assert _range(daily, "2005-03-06", "2005-03-07").size == 2

    def test_single_day(self, daily: TimeDomain) -> None:
        r = _range(daily, "2005-03-06", "2005-03-06")
        assert r.size == 1
        assert r.first == r.last

    def test_reversed_is_empty(self, daily: TimeDomain) -> None:
        r = _range(daily, "2005-03-07", "2005-03-06")
        assert r.is_empty()
        assert r.size == 0
        assert r.first is None
        assert str(r) == "[]"
        assert r == Range(daily)

    def test_size_as_int_overflow(self, registry: DomainRegistry) -> None:
        r = _range(registry.lookup("systemtime"), "1900-01-01", "2099-12-31")
        with pytest.raises(TimeOverflowError):
            r.size_as_int()

    def test_years(self, registry: DomainRegistry) -> None:
        r = Range.parse(registry.lookup("yearly"), "1900", "2099", Adjustment.DOWN)
        assert r.size_as_int() == 200


class TestAdjustedBounds:
    def test_up_widens(self, workweek: TimeDomain) -> None:
        r = Range.parse(workweek, "2005-03-05", "2005-03-13", Adjustment.UP)
        assert str(r) == "[2005-03-04, 2005-03-14]"

    def test_down_narrows(self, workweek: TimeDomain) -> None:
        r = Range.parse(workweek, "2005-03-05", "2005-03-13", Adjustment.DOWN)
        assert str(r) == "[2005-03-07, 2005-03-11]"
        assert r.size == 5

    def test_convert(self, daily: TimeDomain, workweek: TimeDomain) -> None:
        r = _range(daily, "2005-03-05", "2005-03-13")
        assert str(r.convert(workweek, Adjustment.UP)) == "[2005-03-04, 2005-03-14]"
        assert str(r.convert(workweek, Adjustment.DOWN)) == "[2005-03-07, 2005-03-11]"

    def test_convert_empty(self, daily: TimeDomain, workweek: TimeDomain) -> None:
        assert Range(daily).convert(workweek) == Range(workweek)


class TestSetOperations:
    def test_intersection(self, daily: TimeDomain) -> None:
        a = _range(daily, "2005-03-01", "2005-03-07")
        b = _range(daily, "2005-03-03", "2005-03-15")
        assert str(a.intersection(b)) == "[2005-03-03, 2005-03-07]"

    def test_union(self, daily: TimeDomain) -> None:
        a = _range(daily, "2005-03-01", "2005-03-07")
        b = _range(daily, "2005-03-03", "2005-03-15")
        assert str(a.union(b)) == "[2005-03-01, 2005-03-15]"
        assert a.union(Range(daily)) == a

    def test_disjoint(self, daily: TimeDomain) -> None:
        a = _range(daily, "2005-03-01", "2005-03-02")
        b = _range(daily, "2005-03-05", "2005-03-06")
        assert str(a.intersection(b)) == "[]"

    def test_domain_mismatch(self, daily: TimeDomain, datetime_domain: TimeDomain) -> None:
        a = _range(daily, "2005-03-01", "2005-03-02")
        b = _range(datetime_domain, "2005-03-01 00:00:00", "2005-03-02 00:00:00")
        with pytest.raises(DomainMismatchError):
            a.intersection(b)

    def test_between_domain_mismatch(self, daily: TimeDomain, workweek: TimeDomain) -> None:
        with pytest.raises(DomainMismatchError):
            Range.between(daily.time("2005-03-01"), workweek.time("2005-03-02"))


class TestContains:
    def test_members(self, daily: TimeDomain) -> None:
        r = _range(daily, "2005-03-01", "2005-03-07")
        assert daily.time("2005-03-04") in r
        assert daily.time("2005-03-08") not in r
        assert r.first_index in r
        assert "2005-03-04" not in r

    def test_sub_range(self, daily: TimeDomain) -> None:
        r = _range(daily, "2005-03-01", "2005-03-07")
        assert _range(daily, "2005-03-02", "2005-03-03") in r
        assert _range(daily, "2005-03-02", "2005-03-09") not in r

    def test_empty_in_empty(self, daily: TimeDomain) -> None:
        assert Range(daily) in Range(daily)

    def test_time_of_other_domain(self, daily: TimeDomain, workweek: TimeDomain) -> None:
        r = _range(daily, "2005-03-01", "2005-03-07")
        with pytest.raises(DomainMismatchError):
            r.contains(workweek.time("2005-03-02"))


class TestIteration:
    def test_iterates_in_order(self, daily: TimeDomain) -> None:
        r = _range(daily, "2005-02-27", "2005-03-02")
        assert [str(t) for t in r] == ["2005-02-27", "2005-02-28", "2005-03-01", "2005-03-02"]

    def test_iterates_up_to_domain_end(self, daily: TimeDomain) -> None:
        last = daily.max_time()
        r = Range.between(last - 24, last)
        assert sum(1 for _ in r) == 25

    def test_empty(self, daily: TimeDomain) -> None:
        assert list(Range(daily)) == []
