"""TimeService: pack, unpack, convert and query times by domain label."""

from __future__ import annotations

import logging
from typing import Any

from calpack.errors import CalpackError, TimeOverflowError
from calpack.services.base import BaseService
from calpack.services.result import ServiceResult
from calpack.time.expression import Clock, DayExpression, utc_now
from calpack.time.index import TimeIndex
from calpack.time.range import Range
from calpack.time.resolution import Adjustment, DayOfWeek, Resolution

logger = logging.getLogger(__name__)

_RELATIONS = {-1: "before", 0: "equal", 1: "after"}


def describe_time(t: TimeIndex) -> dict[str, Any]:
    """JSON-friendly view of a time."""
    return {"domain": t.domain.label, "index": t.index, "text": str(t)}


def describe_parts(t: TimeIndex) -> dict[str, int]:
    p = t.parts
    return {
        "year": p.year,
        "month": p.month,
        "day": p.day,
        "hour": p.hour,
        "minute": p.minute,
        "second": p.second,
        "fraction": p.fraction,
    }


class TimeService(BaseService):
    """Calendar operations over the domains of a registry."""

    def pack(self, label: str, text: str, adjust: Adjustment | None = None) -> ServiceResult:
        """Pack *text* into its index in domain *label*."""
        op = "pack"
        warnings: list[str] = []
        try:
            t = self._domain(label).time(text, self._adjust(adjust))
        except CalpackError as exc:
            return self._failure(op, exc, domain=label, text=text)

        data = describe_time(t)
        try:
            data["offset"] = t.as_offset()
        except TimeOverflowError as exc:
            data["offset"] = None
            warnings.append(exc.message)
        if data["text"] != text:
            data["input"] = text
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def unpack(self, label: str, index: int) -> ServiceResult:
        """Format index *index* of domain *label* and split it into calendar parts."""
        op = "unpack"
        try:
            t = self._domain(label).time(index)
        except CalpackError as exc:
            return self._failure(op, exc, domain=label, index=index)
        return ServiceResult(ok=True, op=op, data={**describe_time(t), "parts": describe_parts(t)})

    def convert(
        self,
        source: str,
        target: str,
        text: str,
        adjust: Adjustment | None = None,
    ) -> ServiceResult:
        """Read *text* in *source*, then move the time into *target*."""
        op = "convert"
        try:
            t = self._domain(source).time(text)
            converted = t.convert(self._domain(target), self._adjust(adjust))
        except CalpackError as exc:
            return self._failure(op, exc, source=source, target=target, text=text)
        logger.debug("Converted %s from %s to %s", t, source, target)
        return ServiceResult(
            ok=True,
            op=op,
            data={"source": describe_time(t), "target": describe_time(converted)},
        )

    def compare(
        self,
        label_a: str,
        text_a: str,
        label_b: str,
        text_b: str,
        adjust: Adjustment | None = None,
    ) -> ServiceResult:
        """Order two times, possibly of different domains."""
        op = "compare"
        adjustment = self._adjust(adjust)
        try:
            a = self._domain(label_a).time(text_a, adjustment)
            b = self._domain(label_b).time(text_b, adjustment)
            result = a.compare(b)
        except CalpackError as exc:
            return self._failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "a": describe_time(a),
                "b": describe_time(b),
                "comparison": result,
                "relation": _RELATIONS[result],
            },
        )

    def range(
        self,
        label: str,
        first: str,
        last: str,
        adjust: Adjustment | None = None,
        *,
        limit: int | None = None,
    ) -> ServiceResult:
        """List the times from *first* to *last*, at most *limit* of them."""
        op = "range"
        warnings: list[str] = []
        try:
            r = Range.parse(self._domain(label), first, last, self._adjust(adjust))
        except CalpackError as exc:
            return self._failure(op, exc, domain=label, first=first, last=last)

        items: list[dict[str, Any]] = []
        for t in r:
            if limit is not None and len(items) >= limit:
                warnings.append(f"Showing {limit} of {r.size} times")
                break
            items.append(describe_time(t))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "domain": r.domain.label,
                "range": str(r),
                "size": 0 if r.is_empty() else r.size,
                "items": items,
            },
            warnings=warnings,
        )

    def weekday(self, label: str, text: str) -> ServiceResult:
        op = "weekday"
        try:
            t = self._domain(label).time(text)
            day = t.day_of_week()
        except CalpackError as exc:
            return self._failure(op, exc, domain=label, text=text)
        return ServiceResult(ok=True, op=op, data={**describe_time(t), "day_of_week": str(day)})

    def rank(
        self,
        label: str,
        text: str,
        unit: Resolution,
        weekday: str,
        rank: int,
    ) -> ServiceResult:
        """Find the *rank*-th *weekday* of the month or year containing *text*.

        A missing day (a fifth Monday in a month with four) is a success
        with ``day`` set to None and a warning.
        """
        op = "rank"
        warnings: list[str] = []
        try:
            t = self._domain(label).time(text)
            day_name = DayOfWeek.parse(weekday)
            found = t.day_by_rank(unit, day_name, rank)
        except CalpackError as exc:
            return self._failure(op, exc, domain=label, text=text)
        if found is None:
            warnings.append(f"No {day_name}#{rank} in the {unit.lower()} of {t}")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                **describe_time(t),
                "unit": str(unit),
                "weekday": str(day_name),
                "rank": rank,
                "day": None if found is None else str(found),
            },
            warnings=warnings,
        )

    def domains(self) -> ServiceResult:
        """Describe every labelled domain of the registry."""
        items: list[dict[str, Any]] = []
        for label in self._registry.labels():
            domain = self._registry.lookup(label)
            items.append(
                {
                    "label": label,
                    "unit": str(domain.base_unit),
                    "origin": domain.origin,
                    "base_pattern": None if domain.base_pattern is None else str(domain.base_pattern),
                    "sub_pattern": None if domain.sub_pattern is None else str(domain.sub_pattern),
                    "min": str(domain.min_time()),
                    "max": str(domain.max_time()),
                }
            )
        return ServiceResult(ok=True, op="domains", data={"items": items, "count": len(items)})

    def eval(
        self,
        expression: str,
        label: str | None = None,
        adjust: Adjustment | None = None,
        *,
        clock: Clock = utc_now,
    ) -> ServiceResult:
        """Resolve a day expression such as ``today-1`` in a domain."""
        op = "eval"
        try:
            domain = self._domain(label)
            expr = DayExpression.parse(expression, domain, self._adjust(adjust), clock=clock)
            t = expr.resolve(domain)
        except CalpackError as exc:
            return self._failure(op, exc, expression=expression)
        assert t is not None
        return ServiceResult(ok=True, op=op, data={**describe_time(t), "expression": str(expr)})
