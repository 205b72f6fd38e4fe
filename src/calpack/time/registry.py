"""Explicit registry of realized domains.

A :class:`DomainRegistry` hands out one :class:`TimeDomain` per distinct
definition, so that domains obtained twice are the same object.  It also
keeps a label index for lookups by name.  Registries are ordinary values:
create one per application, or use :func:`default_registry` which holds the
built-in domains.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from calpack.errors import InvalidArgumentError
from calpack.time.builtins import register_builtins
from calpack.time.cycle import Cycle
from calpack.time.definition import DomainDefinition
from calpack.time.domain import TimeDomain
from calpack.time.external import DEFAULT_FORMAT, ExternalFormat
from calpack.time.resolution import Resolution
from calpack.time.subperiod import SubPeriodPattern

logger = logging.getLogger(__name__)

DomainKey = tuple[Resolution, int, Cycle | None, SubPeriodPattern | None]


def _normalized_key(definition: DomainDefinition) -> DomainKey:
    pattern = definition.base_pattern
    if pattern is not None and not pattern.effective:
        pattern = None
    return (definition.base_unit, definition.origin, pattern, definition.sub_pattern)


class DomainRegistry:
    """Thread-safe lookup-or-insert store of domains keyed by their definition."""

    def __init__(self, external_format: ExternalFormat = DEFAULT_FORMAT) -> None:
        self._format = external_format
        self._lock = threading.Lock()
        self._by_key: dict[DomainKey, TimeDomain] = {}
        self._by_label: dict[str, TimeDomain] = {}

    def get(self, definition: DomainDefinition) -> TimeDomain:
        """Return the domain of *definition*, creating it on first request.

        When an equivalent domain already exists it is returned as is, even
        if its label differs; the new label becomes an alias for it.
        """
        key = _normalized_key(definition)
        with self._lock:
            domain = self._by_key.get(key)
            if domain is None:
                domain = TimeDomain(definition, self._format)
                self._by_key[key] = domain
                logger.debug("Registered domain %s", domain)
            label = definition.label
            if label:
                known = self._by_label.get(label)
                if known is not None and known is not domain:
                    msg = f"Label {label!r} already names domain {known}"
                    raise InvalidArgumentError(msg)
                self._by_label[label] = domain
            return domain

    def register(
        self,
        label: str,
        base_unit: Resolution,
        origin: int = 0,
        base_pattern: Cycle | None = None,
        sub_pattern: SubPeriodPattern | None = None,
    ) -> TimeDomain:
        return self.get(DomainDefinition(base_unit, origin, base_pattern, sub_pattern, label=label))

    def lookup(self, label: str) -> TimeDomain:
        """Return the domain registered under *label*."""
        with self._lock:
            domain = self._by_label.get(label)
        if domain is None:
            msg = f"Unknown domain {label!r}"
            raise InvalidArgumentError(msg)
        return domain

    def labels(self) -> list[str]:
        with self._lock:
            return sorted(self._by_label)

    def __contains__(self, label: object) -> bool:
        with self._lock:
            return label in self._by_label

    def __iter__(self) -> Iterator[TimeDomain]:
        with self._lock:
            domains = list(self._by_key.values())
        return iter(domains)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_key)


_default: DomainRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> DomainRegistry:
    """Registry pre-loaded with the built-in domains, created on first use."""
    global _default
    with _default_lock:
        if _default is None:
            registry = DomainRegistry()
            register_builtins(registry)
            _default = registry
        return _default
