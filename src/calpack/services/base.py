"""BaseService: shared plumbing for calpack services.

Services receive the :class:`DomainRegistry` to resolve domain labels and
the ``[defaults]`` settings section for omitted arguments.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from calpack.config.models import DefaultsConfig
from calpack.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from calpack.errors import CalpackError
    from calpack.time.domain import TimeDomain
    from calpack.time.registry import DomainRegistry
    from calpack.time.resolution import Adjustment

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class TimeService(BaseService):
            def pack(self, label: str, text: str) -> ServiceResult:
                try:
                    t = self._domain(label).time(text)
                except CalpackError as exc:
                    return self._failure("pack", exc)
                ...
    """

    def __init__(self, registry: DomainRegistry, defaults: DefaultsConfig | None = None) -> None:
        self._registry = registry
        self._defaults = defaults or DefaultsConfig()

    def _domain(self, label: str | None) -> TimeDomain:
        return self._registry.lookup(label or self._defaults.domain)

    def _adjust(self, adjust: Adjustment | None) -> Adjustment:
        return self._defaults.adjust if adjust is None else adjust

    @staticmethod
    def _failure(op: str, exc: CalpackError, **detail: Any) -> ServiceResult:
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.key, message=exc.message, detail=detail),
        )
