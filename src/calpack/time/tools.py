"""Proleptic Gregorian calendar arithmetic on plain integers.

Everything here is a pure function.  Day counts start at January 1 of
year 0 (day 0), which is a Saturday.  Year 0 is a leap year.  Years are
unbounded; callers that need 64-bit semantics check the results against
:data:`INT64_MAX` themselves.
"""

from __future__ import annotations

from bisect import bisect_left

from calpack.errors import InvalidArgumentError, UnsupportedPairingError, bug
from calpack.time.parts import TimeParts, TimeZoneOffset
from calpack.time.resolution import DayOfWeek, Resolution

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)
INT32_MAX = 2**31 - 1
INT32_MIN = -(2**31)

DAYS_IN_400_YEARS = 365 * 303 + 366 * 97

NANOS_PER_SECOND = 1_000_000_000
SECONDS_PER_DAY = 24 * 60 * 60

_DAYS_TO_MONTH_COMMON = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
_DAYS_TO_MONTH_LEAP = (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335)

# Number of units per day, for resolutions of DAY and finer.
UNITS_PER_DAY: dict[Resolution, int] = {
    Resolution.DAY: 1,
    Resolution.HOUR: 24,
    Resolution.MIN: 24 * 60,
    Resolution.SEC: SECONDS_PER_DAY,
    Resolution.MSEC: SECONDS_PER_DAY * 1_000,
    Resolution.USEC: SECONDS_PER_DAY * 1_000_000,
    Resolution.NSEC: SECONDS_PER_DAY * NANOS_PER_SECOND,
}

# Nanoseconds per unit, for resolutions of SEC and finer.
_NANOS_PER_UNIT: dict[Resolution, int] = {
    Resolution.SEC: NANOS_PER_SECOND,
    Resolution.MSEC: 1_000_000,
    Resolution.USEC: 1_000,
    Resolution.NSEC: 1,
}


def is_leap(year: int) -> bool:
    if year < 0:
        msg = f"Year must not be negative: {year}"
        raise InvalidArgumentError(msg)
    return year % 4 == 0 and year % 100 != 0 or year % 400 == 0


def leap_years(year: int) -> int:
    """Return the number of leap years strictly before *year*, counting year 0."""
    if year < 0:
        msg = f"Year must not be negative: {year}"
        raise InvalidArgumentError(msg)
    if year == 0:
        return 0
    year -= 1
    return 1 + year // 4 - year // 100 + year // 400


def _days_to_month_table(year: int) -> tuple[int, ...]:
    return _DAYS_TO_MONTH_LEAP if is_leap(year) else _DAYS_TO_MONTH_COMMON


def days_to_month(year: int, month: int) -> int:
    """Return the number of days in *year* before the first of *month*."""
    return _days_to_month_table(year)[month - 1]


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    table = _days_to_month_table(year)
    return table[month] - table[month - 1]


def days_in_year(year: int) -> int:
    return 366 if is_leap(year) else 365


def month_and_day(year: int, day_of_year: int) -> tuple[int, int]:
    """Convert a 1-based day of the year into ``(month, day)``."""
    table = _days_to_month_table(year)
    i = bisect_left(table, day_of_year - 1)
    if i < len(table) and table[i] == day_of_year - 1:
        return i + 1, 1
    return i, day_of_year - table[i - 1]


def day_count_to_ymd(days: int) -> tuple[int, int, int]:
    """Convert a day count since 0000-01-01 into ``(year, month, day)``."""
    if days < 0:
        msg = f"Day count must not be negative: {days}"
        raise InvalidArgumentError(msg)
    blocks, remainder = divmod(days, DAYS_IN_400_YEARS)
    years = remainder // 365
    day_offset = remainder - years * 365 - leap_years(years)
    if day_offset < 0:
        years -= 1
        day_offset += days_in_year(years)
    year = blocks * 400 + years
    month, day = month_and_day(year, day_offset + 1)
    return year, month, day


def ymd_to_day_count(year: int, month: int, day: int) -> int:
    """Day count since 0000-01-01 of a date assumed valid."""
    return year * 365 + leap_years(year) + days_to_month(year, month) + day - 1


def seconds_to_hms(seconds: int) -> tuple[int, int, int]:
    """Split seconds into the day into ``(hour, minute, second)``."""
    if seconds < 0:
        msg = f"Seconds must not be negative: {seconds}"
        raise InvalidArgumentError(msg)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return hour, minute, second


def day_index(unit: Resolution, raw: int) -> int:
    """Return the day count of an uncompressed index at *unit*."""
    per_day = UNITS_PER_DAY.get(unit)
    if per_day is None:
        msg = f"Day of week is undefined at resolution {unit}"
        raise UnsupportedPairingError(msg)
    return raw // per_day


def day_of_week(days: int) -> DayOfWeek:
    """Return the weekday of a day count.  Day 0 (0000-01-01) is a Saturday."""
    return DayOfWeek.from_number(days + 6)


def unit_day_of_week(unit: Resolution, raw: int) -> DayOfWeek:
    return day_of_week(day_index(unit, raw))


def max_rank(month: int) -> int:
    """Largest absolute rank of a weekday in a month (``month > 0``) or a year (``month == 0``)."""
    return 53 if month == 0 else 5


def day_by_rank(year: int, month: int, weekday: DayOfWeek, rank: int) -> int:
    """Return the day of the *rank*-th *weekday* within a month or a year.

    With ``month == 0`` the period is the whole year and the result is a
    day of the year.  Negative ranks count from the end of the period:
    ``-1`` is the last occurrence.  Returns 0 when the requested
    occurrence does not exist in the period.
    """
    limit = max_rank(month)
    if rank == 0 or rank < -limit or rank > limit:
        msg = f"Rank {rank} outside [{-limit}, {limit}] (0 excluded)"
        raise InvalidArgumentError(msg)
    if month == 0:
        first = day_of_week(ymd_to_day_count(year, 1, 1))
        period_days = days_in_year(year)
    else:
        first = day_of_week(ymd_to_day_count(year, month, 1))
        period_days = days_in_month(year, month)
    work_rank = limit if rank < 0 else rank
    week1_offset = (weekday.number - first.number) % 7
    day = 1 + week1_offset + (work_rank - 1) * 7
    if rank < 0:
        if day > period_days:
            day -= 7
        day += (rank + 1) * 7
        return max(day, 0)
    return 0 if day > period_days else day


def _validate_clock(hour: int, minute: int, second: int, fraction: int) -> None:
    if not 0 <= hour <= 23:
        msg = f"Hour {hour} outside [0, 23]"
        raise InvalidArgumentError(msg)
    if not 0 <= minute <= 59:
        msg = f"Minute {minute} outside [0, 59]"
        raise InvalidArgumentError(msg)
    if not 0 <= second <= 59:
        msg = f"Second {second} outside [0, 59]"
        raise InvalidArgumentError(msg)
    if not 0 <= fraction < NANOS_PER_SECOND:
        msg = f"Fraction of second {fraction} outside [0, {NANOS_PER_SECOND - 1}]"
        raise InvalidArgumentError(msg)


def validate_offset(offset: TimeZoneOffset) -> None:
    if offset.sign not in (-1, 1):
        msg = f"Offset sign must be +1 or -1, not {offset.sign}"
        raise InvalidArgumentError(msg)
    if not 0 <= offset.hour <= 11:
        msg = f"Offset hour {offset.hour} outside [0, 11]"
        raise InvalidArgumentError(msg)
    if not 0 <= offset.minute <= 59:
        msg = f"Offset minute {offset.minute} outside [0, 59]"
        raise InvalidArgumentError(msg)
    if not 0 <= offset.second <= 59:
        msg = f"Offset second {offset.second} outside [0, 59]"
        raise InvalidArgumentError(msg)
    if not 0 <= offset.fraction < NANOS_PER_SECOND:
        msg = f"Offset fraction {offset.fraction} outside [0, {NANOS_PER_SECOND - 1}]"
        raise InvalidArgumentError(msg)


def _apply_offset(
    hour: int, minute: int, second: int, fraction: int, offset: TimeZoneOffset
) -> tuple[int, int, int, int, int]:
    """Shift a valid clock time to UTC.

    Returns ``(day_carry, hour, minute, second, fraction)`` where the carry
    is -1, 0 or 1 day.  Each component borrows or carries at most one unit
    from the next one, starting with the fraction.
    """
    # Local time minus a positive offset, or plus a negative one.
    s = -offset.sign
    fraction += s * offset.fraction
    second += s * offset.second
    minute += s * offset.minute
    hour += s * offset.hour
    if fraction >= NANOS_PER_SECOND:
        fraction -= NANOS_PER_SECOND
        second += 1
    elif fraction < 0:
        fraction += NANOS_PER_SECOND
        second -= 1
    if second > 59:
        second -= 60
        minute += 1
    elif second < 0:
        second += 60
        minute -= 1
    if minute > 59:
        minute -= 60
        hour += 1
    elif minute < 0:
        minute += 60
        hour -= 1
    carry = 0
    if hour > 23:
        hour -= 24
        carry = 1
    elif hour < 0:
        hour += 24
        carry = -1
    return carry, hour, minute, second, fraction


def raw_index(unit: Resolution, parts: TimeParts) -> int:
    """Return the uncompressed index of *parts* at *unit*.

    This is where calendar fields are validated.  ``24:00:00`` rolls over
    to midnight of the next day, ``23:59:60`` on June 30 or December 31 is
    read as ``23:59:59``, and a UTC offset is applied with carry into the
    day count.
    """
    year, month, day = parts.year, parts.month, parts.day
    if year < 0:
        msg = f"Year must not be negative: {year}"
        raise InvalidArgumentError(msg)
    if unit is Resolution.YEAR:
        return year
    if not 1 <= month <= 12:
        msg = f"Month {month} outside [1, 12]"
        raise InvalidArgumentError(msg)
    if unit is Resolution.MONTH:
        return year * 12 + month - 1
    last = days_in_month(year, month)
    if not 1 <= day <= last:
        msg = f"Day {day} outside [1, {last}]"
        raise InvalidArgumentError(msg)
    time = ymd_to_day_count(year, month, day)
    if unit is Resolution.DAY:
        return time

    hour, minute, second, fraction = parts.hour, parts.minute, parts.second, parts.fraction
    if hour == 24 and minute == 0 and second == 0 and fraction == 0:
        hour = 0
        time += 1
    if second == 60:
        last_of_half = (month == 12 and day == 31) or (month == 6 and day == 30)
        if hour == 23 and minute == 59 and fraction == 0 and last_of_half:
            second = 59
        else:
            msg = "A leap second is only valid at 23:59:60 on June 30 or December 31"
            raise InvalidArgumentError(msg)
    _validate_clock(hour, minute, second, fraction)
    if parts.offset is not None:
        validate_offset(parts.offset)
        carry, hour, minute, second, fraction = _apply_offset(hour, minute, second, fraction, parts.offset)
        time += carry
        if time < 0:
            msg = "UTC offset moves the time before 0000-01-01"
            raise InvalidArgumentError(msg)

    time = time * 24 + hour
    if unit is Resolution.HOUR:
        return time
    time = time * 60 + minute
    if unit is Resolution.MIN:
        return time
    time = time * 60 + second
    match unit:
        case Resolution.SEC:
            return time
        case Resolution.MSEC | Resolution.USEC | Resolution.NSEC:
            per_unit = _NANOS_PER_UNIT[unit]
            return time * (NANOS_PER_SECOND // per_unit) + fraction // per_unit
        case _:
            raise bug(unit)


def decompose(unit: Resolution, raw: int) -> TimeParts:
    """Inverse of :func:`raw_index` for a non-negative uncompressed index."""
    match unit:
        case Resolution.YEAR:
            return TimeParts(year=raw)
        case Resolution.MONTH:
            year, month0 = divmod(raw, 12)
            return TimeParts(year=year, month=month0 + 1)
        case Resolution.DAY:
            year, month, day = day_count_to_ymd(raw)
            return TimeParts(year=year, month=month, day=day)
        case Resolution.HOUR | Resolution.MIN:
            days, rest = divmod(raw, UNITS_PER_DAY[unit])
            if unit is Resolution.HOUR:
                hour, minute = rest, 0
            else:
                hour, minute = divmod(rest, 60)
            year, month, day = day_count_to_ymd(days)
            return TimeParts(year=year, month=month, day=day, hour=hour, minute=minute)
        case Resolution.SEC | Resolution.MSEC | Resolution.USEC | Resolution.NSEC:
            days, rest = divmod(raw, UNITS_PER_DAY[unit])
            units_per_second = NANOS_PER_SECOND // _NANOS_PER_UNIT[unit]
            seconds, sub = divmod(rest, units_per_second)
            hour, minute, second = seconds_to_hms(seconds)
            year, month, day = day_count_to_ymd(days)
            return TimeParts(
                year=year,
                month=month,
                day=day,
                hour=hour,
                minute=minute,
                second=second,
                fraction=sub * _NANOS_PER_UNIT[unit],
            )
        case _:
            raise bug(unit)


def checked_add(a: int, b: int) -> int | None:
    """Return ``a + b``, or None when the sum leaves the signed 64-bit range."""
    total = a + b
    if total > INT64_MAX or total < INT64_MIN:
        return None
    return total


def normalize_two_digit_year(year: int) -> int:
    """Read 90..99 as the 1990s and 0..89 as the 2000s; other years pass through."""
    if 0 <= year < 100:
        return year + (1900 if year >= 90 else 2000)
    return year
