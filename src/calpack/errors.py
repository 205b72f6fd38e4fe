"""Error hierarchy shared by the time engine, the CLI and the services.

Every user-triggerable failure is a :class:`CalpackError` carrying a stable
machine-readable ``key``.  Broken internal contracts are not part of this
hierarchy: they raise ``RuntimeError("bug: ...")`` and are never wrapped.
"""

from __future__ import annotations

from typing import ClassVar


class CalpackError(ValueError):
    """Base class for all user-triggerable calpack failures."""

    key: ClassVar[str] = "CALPACK_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(CalpackError):
    """Malformed constructor input or calendar field."""

    key = "INVALID_ARGUMENT"


class OutOfRangeError(CalpackError):
    """Index outside the bounds of its domain."""

    key = "OUT_OF_RANGE"


class UnreachableTimeError(CalpackError):
    """Requested point does not exist in the domain and no adjustment applies."""

    key = "UNREACHABLE_TIME"


class TimeOverflowError(CalpackError):
    """Signed 64-bit (or 32-bit offset) arithmetic would wrap around."""

    key = "OVERFLOW"


class UnsupportedPairingError(CalpackError):
    """Base unit and sub unit (or resolution) combination is not implemented."""

    key = "UNSUPPORTED_PAIRING"


class ParseError(CalpackError):
    """Text does not match the external time grammar."""

    key = "PARSE_FAILURE"


class DomainMismatchError(CalpackError):
    """Operation requires values from the same domain."""

    key = "DOMAIN_MISMATCH"


def bug(detail: object) -> RuntimeError:
    """Build the exception raised when an internal invariant is broken."""
    return RuntimeError(f"bug: {detail}")
