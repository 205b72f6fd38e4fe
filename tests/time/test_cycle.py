"""Tests for base-period cycles."""

from __future__ import annotations

import pytest

from calpack.errors import InvalidArgumentError, UnreachableTimeError
from calpack.time.cycle import Cycle

# Day 0 is a Saturday.
WORKDAYS = Cycle((False, False, True, True, True, True, True))


class TestConstruction:
    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Cycle(())

    def test_all_off_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Cycle((False, False))

    def test_parse(self) -> None:
        assert Cycle.parse("0011111") == WORKDAYS
        assert Cycle.parse("F,F,T,T,T,T,T") == WORKDAYS

    def test_parse_invalid(self) -> None:
        with pytest.raises(InvalidArgumentError):
            Cycle.parse("01x")

    def test_lengths(self) -> None:
        assert WORKDAYS.length == 7
        assert WORKDAYS.compressed_length == 5

    def test_effective(self) -> None:
        assert WORKDAYS.effective
        assert not Cycle((True, True)).effective

    def test_str_and_repr(self) -> None:
        assert str(WORKDAYS) == "0011111"
        assert repr(WORKDAYS) == "Cycle.parse('0011111')"

    def test_hash_follows_pattern(self) -> None:
        assert hash(Cycle.parse("0011111")) == hash(WORKDAYS)


class TestCompress:
    def test_first_monday(self) -> None:
        assert WORKDAYS.compress(2) == 0
        assert WORKDAYS.expand(0) == 2

    def test_next_week(self) -> None:
        assert WORKDAYS.compress(9) == 5
        assert WORKDAYS.expand(5) == 9

    def test_off_position_unreachable(self) -> None:
        with pytest.raises(UnreachableTimeError):
            WORKDAYS.compress(7)

    def test_negative_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            WORKDAYS.compress(-1)
        with pytest.raises(InvalidArgumentError):
            WORKDAYS.expand(-1)

    def test_inverse_over_several_cycles(self) -> None:
        for t in range(40):
            assert WORKDAYS.compress(WORKDAYS.expand(t)) == t
