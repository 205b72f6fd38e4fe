"""Calendar components exchanged between the scanner, the packer and the formatter.

Neither type validates its fields: the packer is the single place where
ranges are checked, so a scanner can hand over ``24:00`` or a leap second
and let the packer decide what it means.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class TimeZoneOffset:
    """A fixed offset from UTC, as found at the end of an external time."""

    sign: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    fraction: int = 0  # nanoseconds

    def __str__(self) -> str:
        text = f"{'-' if self.sign < 0 else '+'}{self.hour:02d}:{self.minute:02d}"
        if self.second or self.fraction:
            text += f":{self.second:02d}"
        if self.fraction:
            text += f".{self.fraction:09d}".rstrip("0")
        return text


@dataclass(frozen=True)
class TimeParts:
    """Year down to nanosecond, plus an optional UTC offset.

    ``fraction`` is always expressed in nanoseconds, whatever the
    resolution of the domain that produced or will consume the parts.
    """

    year: int = 0
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    fraction: int = 0
    offset: TimeZoneOffset | None = None

    def with_fields(self, **changes: int | TimeZoneOffset | None) -> TimeParts:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)
