"""Tests for message origins, kinds and the Message model."""

import pytest

from msgrules.domain.errors import UnclassifiableMessageError
from msgrules.domain.messages import Kind, Message, Origin, parse_kind, parse_origin

ENUM_CASES = [
    (Origin, {"incoming", "outgoing", "self"}),
    (Kind, {"query", "command", "query_and_command"}),
]


@pytest.mark.parametrize(
    "enum_cls,expected_values",
    ENUM_CASES,
    ids=[cls.__name__ for cls, _ in ENUM_CASES],
)
def test_enum_members_and_values(enum_cls: type, expected_values: set[str]) -> None:
    actual_values = {e.value for e in enum_cls}
    assert actual_values == expected_values
    for member in enum_cls:
        assert member == member.value
        assert isinstance(member, str)


class TestParseOrigin:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("incoming", Origin.INCOMING),
            ("Outgoing", Origin.OUTGOING),
            ("  self ", Origin.SELF),
            ("sent-to-self", Origin.SELF),
            ("sent to self", Origin.SELF),
            (Origin.OUTGOING, Origin.OUTGOING),
        ],
    )
    def test_accepted_spellings(self, raw: str, expected: Origin) -> None:
        assert parse_origin(raw) is expected

    def test_unknown_origin(self) -> None:
        with pytest.raises(UnclassifiableMessageError, match="unknown origin 'sideways'"):
            parse_origin("sideways")

    def test_non_string(self) -> None:
        with pytest.raises(UnclassifiableMessageError):
            parse_origin(None)  # type: ignore[arg-type]


class TestParseKind:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("query", Kind.QUERY),
            ("COMMAND", Kind.COMMAND),
            ("query+command", Kind.QUERY_AND_COMMAND),
            ("Query + Command", Kind.QUERY_AND_COMMAND),
            ("query-and-command", Kind.QUERY_AND_COMMAND),
            ("both", Kind.QUERY_AND_COMMAND),
        ],
    )
    def test_accepted_spellings(self, raw: str, expected: Kind) -> None:
        assert parse_kind(raw) is expected

    def test_unknown_kind(self) -> None:
        with pytest.raises(UnclassifiableMessageError) as excinfo:
            parse_kind("event")
        assert str(excinfo.value).startswith("unclassifiable message:")
        assert "query, command, query_and_command" in str(excinfo.value)


class TestMessageKind:
    def test_query(self) -> None:
        msg = Message(name="diameter", sender="Gear", receiver="Wheel", returns_value=True)
        assert msg.kind is Kind.QUERY

    def test_command(self) -> None:
        msg = Message(name="set_cog", sender="Client", receiver="Gear", changes_state=True)
        assert msg.kind is Kind.COMMAND

    def test_query_and_command(self) -> None:
        msg = Message(
            name="pop",
            sender="Client",
            receiver="Stack",
            returns_value=True,
            changes_state=True,
        )
        assert msg.kind is Kind.QUERY_AND_COMMAND

    def test_no_effect_is_unclassifiable(self) -> None:
        msg = Message(name="noop", sender="A", receiver="B")
        with pytest.raises(UnclassifiableMessageError, match="neither returns"):
            _ = msg.kind


class TestMessageOrigin:
    def test_incoming(self) -> None:
        msg = Message(name="diameter", sender="Gear", receiver="Wheel", returns_value=True)
        assert msg.origin_for("Wheel") is Origin.INCOMING

    def test_outgoing(self) -> None:
        msg = Message(name="diameter", sender="Gear", receiver="Wheel", returns_value=True)
        assert msg.origin_for("Gear") is Origin.OUTGOING

    def test_sent_to_self(self) -> None:
        msg = Message(name="ratio", sender="Gear", receiver="Gear", returns_value=True)
        assert msg.origin_for("Gear") is Origin.SELF

    def test_bystander_is_unclassifiable(self) -> None:
        msg = Message(name="diameter", sender="Gear", receiver="Wheel", returns_value=True)
        with pytest.raises(UnclassifiableMessageError, match="neither sender nor receiver"):
            msg.origin_for("Bicycle")

    def test_frozen(self) -> None:
        msg = Message(name="pop", sender="A", receiver="B", returns_value=True)
        with pytest.raises(Exception):
            msg.name = "push"  # type: ignore[misc]
