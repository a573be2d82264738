"""Domain exceptions."""

from __future__ import annotations


class MsgRulesError(Exception):
    """Base class for all msgrules domain errors."""


class UnclassifiableMessageError(MsgRulesError, ValueError):
    """A message could not be mapped to an (origin, kind) pair."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"unclassifiable message: {reason}")
        self.reason = reason


class DeckError(MsgRulesError):
    """A slide deck could not be read or parsed."""


class DeckNotFoundError(DeckError):
    """The slide deck file does not exist."""
