"""BaseService — foundation for all msgrules services.

Every service receives the resolved :class:`MsgRulesSettings` at
construction time and converts domain exceptions into failed
:class:`ServiceResult` values instead of letting them escape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from msgrules.services.result import ServiceResult

if TYPE_CHECKING:
    from msgrules.config.settings import MsgRulesSettings
    from msgrules.domain.errors import MsgRulesError

log = structlog.get_logger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class RuleService(BaseService):
            def classify(self, origin, kind) -> ServiceResult:
                ...
    """

    def __init__(self, settings: MsgRulesSettings | None = None) -> None:
        self._settings = settings

    def _fail(self, op: str, code: str, exc: MsgRulesError, **detail: object) -> ServiceResult:
        """Turn a domain error into a failed result, logging it at debug."""
        log.debug("service.failed", op=op, code=code, error=str(exc))
        return ServiceResult.failure(op, code, str(exc), **detail)
