"""RuleService — classify messages and look up their testing rules."""

from __future__ import annotations

import structlog

from msgrules.domain.errors import UnclassifiableMessageError
from msgrules.domain.messages import Kind, Message, Origin
from msgrules.domain.rules import iter_rules, select_rule, select_rule_for
from msgrules.services.base import BaseService
from msgrules.services.result import ServiceResult
from msgrules.services.telemetry import traced

log = structlog.get_logger(__name__)

UNCLASSIFIABLE = "UNCLASSIFIABLE_MESSAGE"


class RuleService(BaseService):
    """Answers "what must the test assert about this message?"."""

    @traced
    def classify(self, origin: Origin | str, kind: Kind | str) -> ServiceResult:
        """Return the rule for one ``(origin, kind)`` pair."""
        try:
            rule = select_rule(origin, kind)
        except UnclassifiableMessageError as exc:
            return self._fail("classify", UNCLASSIFIABLE, exc, origin=str(origin), kind=str(kind))
        log.debug("rule.selected", origin=rule.origin, kind=rule.kind)
        return ServiceResult(ok=True, op="classify", data=rule.to_dict())

    @traced
    def classify_message(self, message: Message, unit: str) -> ServiceResult:
        """Classify *message* as seen from *unit* and return its rule."""
        try:
            rule = select_rule_for(message, unit)
        except UnclassifiableMessageError as exc:
            return self._fail(
                "classify_message", UNCLASSIFIABLE, exc, message=message.name, unit=unit
            )
        data = {"message": message.name, "unit": unit, **rule.to_dict()}
        return ServiceResult(ok=True, op="classify_message", data=data)

    @traced
    def table(self) -> ServiceResult:
        """Return the whole rule table."""
        items = [rule.to_dict() for rule in iter_rules()]
        return ServiceResult(ok=True, op="rules", data={"items": items, "count": len(items)})
