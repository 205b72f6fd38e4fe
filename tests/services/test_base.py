"""Tests for BaseService plumbing."""

from __future__ import annotations

from calpack.config.models import DefaultsConfig
from calpack.errors import OutOfRangeError
from calpack.services.base import BaseService
from calpack.time.registry import DomainRegistry
from calpack.time.resolution import Adjustment


class TestBaseService:
    def test_domain_by_label(self, registry: DomainRegistry) -> None:
        service = BaseService(registry)
        assert service._domain("weekly") is registry.lookup("weekly")

    def test_default_domain(self, registry: DomainRegistry) -> None:
        assert BaseService(registry)._domain(None).label == "daily"
        service = BaseService(registry, DefaultsConfig(domain="monthly"))
        assert service._domain(None) is registry.lookup("monthly")

    def test_default_adjustment(self, registry: DomainRegistry) -> None:
        service = BaseService(registry, DefaultsConfig(adjust=Adjustment.DOWN))
        assert service._adjust(None) is Adjustment.DOWN
        assert service._adjust(Adjustment.UP) is Adjustment.UP

    def test_failure(self) -> None:
        result = BaseService._failure("unpack", OutOfRangeError("Index -1 is negative"), index=-1)
        assert result.ok is False
        assert result.op == "unpack"
        assert result.error is not None
        assert result.error.code == "OUT_OF_RANGE"
        assert result.error.message == "Index -1 is negative"
        assert result.error.detail == {"index": -1}
