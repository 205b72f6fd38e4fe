"""Base-period pattern: a repeating ON/OFF cycle over the base timeline.

A cycle like ``(False, False, True, True, True, True, True)`` over a daily
timeline that starts on a Saturday keeps Monday to Friday.  Compressing
an index removes the OFF points; expanding puts them back.
"""

from __future__ import annotations

from collections.abc import Iterable

from calpack.errors import InvalidArgumentError, UnreachableTimeError


class Cycle:
    """Immutable ON/OFF pattern with precomputed forward and inverse maps."""

    __slots__ = ("_pattern", "_map", "_inverse", "_hash")

    def __init__(self, pattern: Iterable[bool]) -> None:
        values = tuple(bool(on) for on in pattern)
        if not values:
            msg = "Cycle pattern must not be empty"
            raise InvalidArgumentError(msg)
        if not any(values):
            msg = "Cycle pattern must contain at least one ON position"
            raise InvalidArgumentError(msg)
        forward: list[int] = []
        inverse: list[int] = []
        for position, on in enumerate(values):
            if on:
                forward.append(len(inverse))
                inverse.append(position)
            else:
                forward.append(-1)
        self._pattern = values
        self._map = tuple(forward)
        self._inverse = tuple(inverse)
        self._hash = hash(values)

    @classmethod
    def parse(cls, text: str) -> Cycle:
        """Build a cycle from a string of ``0``/``1`` (``F``/``T`` also accepted)."""
        flags: list[bool] = []
        for ch in text.replace(",", "").replace(" ", ""):
            if ch in "1Tt":
                flags.append(True)
            elif ch in "0Ff":
                flags.append(False)
            else:
                msg = f"Invalid cycle character {ch!r} in {text!r}"
                raise InvalidArgumentError(msg)
        return cls(flags)

    @property
    def pattern(self) -> tuple[bool, ...]:
        return self._pattern

    @property
    def length(self) -> int:
        return len(self._pattern)

    @property
    def compressed_length(self) -> int:
        return len(self._inverse)

    @property
    def effective(self) -> bool:
        """True unless every position is ON, in which case the cycle changes nothing."""
        return self.compressed_length != self.length

    def compress(self, t: int) -> int:
        """Map an uncompressed index to the dense index of ON points."""
        if t < 0:
            msg = f"Cannot compress negative index {t}"
            raise InvalidArgumentError(msg)
        cycles, rem = divmod(t, self.length)
        offset = self._map[rem]
        if offset < 0:
            msg = f"Index {t} falls on an OFF position of cycle {self}"
            raise UnreachableTimeError(msg)
        return cycles * self.compressed_length + offset

    def expand(self, t: int) -> int:
        """Inverse of :meth:`compress`."""
        if t < 0:
            msg = f"Cannot expand negative index {t}"
            raise InvalidArgumentError(msg)
        cycles, rem = divmod(t, self.compressed_length)
        return cycles * self.length + self._inverse[rem]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cycle):
            return NotImplemented
        return self._pattern == other._pattern

    def __hash__(self) -> int:
        return self._hash

    def __str__(self) -> str:
        return "".join("1" if on else "0" for on in self._pattern)

    def __repr__(self) -> str:
        return f"Cycle.parse({str(self)!r})"
