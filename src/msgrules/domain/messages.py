"""Message origins, kinds, and the Message model.

A message travels from a sender to a receiver. Seen from the unit under
test it is *incoming* (the unit receives it), *outgoing* (the unit sends
it to a collaborator), or *sent to self* (a private call). Independently,
it is a *query* (returns something, changes nothing), a *command*
(changes observable state), or both at once.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

from msgrules.domain.errors import UnclassifiableMessageError


class Origin(StrEnum):
    """Where a message comes from, relative to the unit under test."""

    INCOMING = "incoming"
    OUTGOING = "outgoing"
    SELF = "self"


class Kind(StrEnum):
    """What a message does."""

    QUERY = "query"
    COMMAND = "command"
    QUERY_AND_COMMAND = "query_and_command"


# Alternate spellings accepted on input, after normalisation.
ORIGIN_ALIASES: dict[str, Origin] = {
    "sent_to_self": Origin.SELF,
    "to_self": Origin.SELF,
    "private": Origin.SELF,
    "in": Origin.INCOMING,
    "out": Origin.OUTGOING,
}

KIND_ALIASES: dict[str, Kind] = {
    "both": Kind.QUERY_AND_COMMAND,
    "query_command": Kind.QUERY_AND_COMMAND,
}


def _normalize(value: str) -> str:
    text = value.strip().lower().replace("+", " and ").replace("-", " ")
    return "_".join(text.split())


def parse_origin(value: Origin | str) -> Origin:
    """Coerce *value* to an :class:`Origin`.

    Raises:
        UnclassifiableMessageError: If *value* names no known origin.
    """
    if isinstance(value, Origin):
        return value
    if not isinstance(value, str):
        raise UnclassifiableMessageError(f"origin must be a string, got {value!r}")
    key = _normalize(value)
    if key in ORIGIN_ALIASES:
        return ORIGIN_ALIASES[key]
    try:
        return Origin(key)
    except ValueError:
        valid = ", ".join(o.value for o in Origin)
        raise UnclassifiableMessageError(
            f"unknown origin {value!r} (expected one of: {valid})"
        ) from None


def parse_kind(value: Kind | str) -> Kind:
    """Coerce *value* to a :class:`Kind`.

    Raises:
        UnclassifiableMessageError: If *value* names no known kind.
    """
    if isinstance(value, Kind):
        return value
    if not isinstance(value, str):
        raise UnclassifiableMessageError(f"kind must be a string, got {value!r}")
    key = _normalize(value)
    if key in KIND_ALIASES:
        return KIND_ALIASES[key]
    try:
        return Kind(key)
    except ValueError:
        valid = ", ".join(k.value for k in Kind)
        raise UnclassifiableMessageError(
            f"unknown kind {value!r} (expected one of: {valid})"
        ) from None


class Message(BaseModel):
    """A single message between two roles.

    Attributes:
        name: Message (method) name, e.g. ``"pop"``.
        sender: Role that sends the message.
        receiver: Role that receives the message.
        returns_value: The receiver hands back a meaningful value.
        changes_state: The message causes an observable state change.
    """

    model_config = {"frozen": True}

    name: str
    sender: str
    receiver: str
    returns_value: bool = False
    changes_state: bool = False

    @property
    def kind(self) -> Kind:
        """Query, command, or both — derived from the two effect flags."""
        if self.returns_value and self.changes_state:
            return Kind.QUERY_AND_COMMAND
        if self.returns_value:
            return Kind.QUERY
        if self.changes_state:
            return Kind.COMMAND
        raise UnclassifiableMessageError(
            f"{self.name!r} neither returns a value nor changes state"
        )

    def origin_for(self, unit: str) -> Origin:
        """Classify this message from the point of view of *unit*."""
        if self.sender == unit and self.receiver == unit:
            return Origin.SELF
        if self.receiver == unit:
            return Origin.INCOMING
        if self.sender == unit:
            return Origin.OUTGOING
        raise UnclassifiableMessageError(
            f"{unit!r} is neither sender nor receiver of {self.name!r}"
        )
