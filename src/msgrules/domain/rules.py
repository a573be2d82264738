"""Testing rules per (origin, kind) and the rule selector.

Whoever *receives* a message proves its result or effects; whoever merely
*sends* it trusts the receiver's own tests:

=========  ==================  ==========================================
origin     kind                obligation
=========  ==================  ==========================================
incoming   query               assert the returned value
incoming   command             assert direct public side effects
incoming   query_and_command   assert both
self       any                 prohibited: do not test, assert or expect
outgoing   query               prohibited: do not assert, do not expect
outgoing   command             expect the call to be sent
outgoing   query_and_command   expect the call to be sent
=========  ==================  ==========================================

The table below is the single source of truth and covers every
``Origin x Kind`` pair; :func:`select_rule` never falls back to a default.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel

from msgrules.domain.errors import UnclassifiableMessageError
from msgrules.domain.messages import Kind, Message, Origin, parse_kind, parse_origin


class TestingRule(BaseModel):
    """The testing obligation attached to one ``(origin, kind)`` pair."""

    __test__ = False  # not a pytest test class

    model_config = {"frozen": True}

    origin: Origin
    kind: Kind
    must_assert_return_value: bool = False
    must_assert_side_effects: bool = False
    must_expect_call: bool = False
    prohibited: bool = False
    guidance: str = ""

    @property
    def obligations(self) -> list[str]:
        """Names of the obligations this rule sets, in a fixed order."""
        if self.prohibited:
            return ["prohibited"]
        names: list[str] = []
        if self.must_assert_return_value:
            names.append("assert_return_value")
        if self.must_assert_side_effects:
            names.append("assert_side_effects")
        if self.must_expect_call:
            names.append("expect_call")
        return names

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = self.model_dump(mode="json")
        data["obligations"] = self.obligations
        return data


_ASSERT_RESULT = "Assert the value the message returns."
_ASSERT_EFFECTS = "Assert the direct public side effects of the message."
_ASSERT_BOTH = "Assert the returned value and the direct public side effects."
_IGNORE_PRIVATE = (
    "Do not test private messages: no result assertions, no expectations. "
    "They are covered by the tests of the public interface."
)
_IGNORE_OUTGOING_QUERY = (
    "Do not assert the result and do not expect the send; "
    "the receiver's own tests prove the query."
)
_EXPECT_SEND = (
    "Expect the message to be sent to the collaborator; "
    "do not assert the collaborator's side effects."
)


def _private(kind: Kind) -> TestingRule:
    return TestingRule(origin=Origin.SELF, kind=kind, prohibited=True, guidance=_IGNORE_PRIVATE)


def _expect_send(kind: Kind) -> TestingRule:
    return TestingRule(
        origin=Origin.OUTGOING, kind=kind, must_expect_call=True, guidance=_EXPECT_SEND
    )


RULES: dict[tuple[Origin, Kind], TestingRule] = {
    (Origin.INCOMING, Kind.QUERY): TestingRule(
        origin=Origin.INCOMING,
        kind=Kind.QUERY,
        must_assert_return_value=True,
        guidance=_ASSERT_RESULT,
    ),
    (Origin.INCOMING, Kind.COMMAND): TestingRule(
        origin=Origin.INCOMING,
        kind=Kind.COMMAND,
        must_assert_side_effects=True,
        guidance=_ASSERT_EFFECTS,
    ),
    (Origin.INCOMING, Kind.QUERY_AND_COMMAND): TestingRule(
        origin=Origin.INCOMING,
        kind=Kind.QUERY_AND_COMMAND,
        must_assert_return_value=True,
        must_assert_side_effects=True,
        guidance=_ASSERT_BOTH,
    ),
    (Origin.SELF, Kind.QUERY): _private(Kind.QUERY),
    (Origin.SELF, Kind.COMMAND): _private(Kind.COMMAND),
    (Origin.SELF, Kind.QUERY_AND_COMMAND): _private(Kind.QUERY_AND_COMMAND),
    (Origin.OUTGOING, Kind.QUERY): TestingRule(
        origin=Origin.OUTGOING,
        kind=Kind.QUERY,
        prohibited=True,
        guidance=_IGNORE_OUTGOING_QUERY,
    ),
    (Origin.OUTGOING, Kind.COMMAND): _expect_send(Kind.COMMAND),
    # The command side wins: the sender still only expects the send.
    (Origin.OUTGOING, Kind.QUERY_AND_COMMAND): _expect_send(Kind.QUERY_AND_COMMAND),
}


def select_rule(origin: Origin | str, kind: Kind | str) -> TestingRule:
    """Return the testing rule for *origin* and *kind*.

    Strings are accepted and normalised (``"sent-to-self"``, ``"both"``,
    ``"Query+Command"`` ...).

    Raises:
        UnclassifiableMessageError: For an unknown origin or kind.
    """
    key = (parse_origin(origin), parse_kind(kind))
    try:
        return RULES[key]
    except KeyError:
        raise UnclassifiableMessageError(f"no rule for {key[0]} {key[1]}") from None


def select_rule_for(message: Message, unit: str) -> TestingRule:
    """Classify *message* as seen by *unit* and return its rule."""
    return select_rule(message.origin_for(unit), message.kind)


def iter_rules() -> Iterator[TestingRule]:
    """Yield every rule in ``Origin`` then ``Kind`` declaration order."""
    for origin in Origin:
        for kind in Kind:
            yield RULES[(origin, kind)]
