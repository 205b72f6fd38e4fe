"""Text form of times: an ISO 8601 flavoured scanner and formatter.

Accepted input, extended form::

    [+]YYYY[-MM[-DD[{T| }hh[:mm[:ss[{.|,}f...]]]]]][Z|{+|-}hh[:mm[:ss[.f...]]]]

and a basic form without separators, where the date and the time must be
separated by a literal ``T``::

    YYYY[MM[DD[Thh[mm[ss[{.|,}f...]]]]]][Z|{+|-}hh[mm[ss[.f...]]]]

Years with more than four digits need a leading ``+``.  Fractions take up
to nine digits.  The scanner only checks syntax; ranges are checked when
the parts are packed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from calpack.errors import ParseError, bug
from calpack.time.parts import TimeParts, TimeZoneOffset
from calpack.time.resolution import Resolution

_EXTENDED = re.compile(r"((?:\+\d+)?\d{4})(?:-(\d\d)(?:-(\d\d)(?:[T ]([0-9:.,]*)(?:Z|([+-][0-9:.,]*))?)?)?)?")
# Colons are accepted by the time group so that a misplaced one is reported as a time error.
_BASIC = re.compile(r"(\d{4})(?:(\d\d)(?:(\d\d)(?:T([0-9:.,]*)(?:Z|([+-][0-9:.,]*))?)?)?)?")
_EXTENDED_TIME = re.compile(r"(\d\d)(?::(\d\d)(?::(\d\d)(?:[.,](\d{1,9}))?)?)?")
_BASIC_TIME = re.compile(r"(\d\d)(?:(\d\d)(?:(\d\d)(?:[.,](\d{1,9}))?)?)?")


def _scan_clock(pattern: re.Pattern[str], text: str) -> tuple[int, int, int, int] | None:
    match = pattern.fullmatch(text)
    if match is None:
        return None
    hour, minute, second, fraction = match.groups()
    nanos = 0
    if fraction:
        nanos = int(fraction) * 10 ** (9 - len(fraction))
    return int(hour), int(minute or 0), int(second or 0), nanos


def scan(text: str) -> TimeParts:
    """Parse *text* into unvalidated :class:`TimeParts`."""
    hyphen = text.find("-")
    extended = hyphen > 0
    if extended:
        big_t = text.find("T")
        if 0 <= big_t < hyphen:
            extended = False
    date_pattern, clock_pattern = (_EXTENDED, _EXTENDED_TIME) if extended else (_BASIC, _BASIC_TIME)
    form = "extended" if extended else "basic"

    # The clock may be empty before a zone offset, but a separator needs something after it.
    if text.endswith(("T", " ")):
        msg = f"Missing time of day after the separator in {text!r}"
        raise ParseError(msg)
    match = date_pattern.fullmatch(text)
    if match is None:
        msg = f"Cannot parse {text!r} as a date ({form} form)"
        raise ParseError(msg)
    year, month, day, clock, offset = match.groups()

    fields: dict[str, object] = {"year": int(year.lstrip("+"))}
    if month:
        fields["month"] = int(month)
    if day:
        fields["day"] = int(day)
    if clock:
        scanned = _scan_clock(clock_pattern, clock)
        if scanned is None:
            msg = f"Cannot parse {clock!r} as a time of day ({form} form) in {text!r}"
            raise ParseError(msg)
        fields["hour"], fields["minute"], fields["second"], fields["fraction"] = scanned
    if offset:
        scanned = _scan_clock(clock_pattern, offset[1:])
        if scanned is None:
            msg = f"Cannot parse {offset!r} as a UTC offset ({form} form) in {text!r}"
            raise ParseError(msg)
        hour, minute, second, nanos = scanned
        fields["offset"] = TimeZoneOffset(
            sign=-1 if offset.startswith("-") else 1,
            hour=hour,
            minute=minute,
            second=second,
            fraction=nanos,
        )
    return TimeParts(**fields)  # type: ignore[arg-type]


def format_parts(unit: Resolution, parts: TimeParts, *, separator: str = " ") -> str:
    """Render *parts* down to *unit*, e.g. ``2009-06-01 12:34:12`` for SEC."""
    plus = "+" if parts.year > 9999 else ""
    text = f"{plus}{parts.year:04d}"
    if unit is Resolution.YEAR:
        return text
    text += f"-{parts.month:02d}"
    if unit is Resolution.MONTH:
        return text
    text += f"-{parts.day:02d}"
    if unit is Resolution.DAY:
        return text
    text += f"{separator}{parts.hour:02d}"
    if unit is Resolution.HOUR:
        return text
    text += f":{parts.minute:02d}"
    if unit is Resolution.MIN:
        return text
    text += f":{parts.second:02d}"
    match unit:
        case Resolution.SEC:
            return text
        case Resolution.MSEC:
            return f"{text}.{parts.fraction // 1_000_000:03d}"
        case Resolution.USEC:
            return f"{text}.{parts.fraction // 1_000:06d}"
        case Resolution.NSEC:
            return f"{text}.{parts.fraction:09d}"
        case _:
            raise bug(unit)


@dataclass(frozen=True)
class ExternalFormat:
    """Scanner and formatter pair owned by a domain."""

    use_t_separator: bool = False

    def scan(self, text: str) -> TimeParts:
        return scan(text)

    def format(self, unit: Resolution, parts: TimeParts) -> str:
        return format_parts(unit, parts, separator="T" if self.use_t_separator else " ")


DEFAULT_FORMAT = ExternalFormat()
