"""Command: testing rule for one (origin, kind) pair."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from msgrules.commands._base import RulesCommand

if TYPE_CHECKING:
    from msgrules.commands._context import AppContext


@click.command(
    cls=RulesCommand,
    examples="""\
        msgrules classify incoming query
        msgrules classify outgoing command
        msgrules classify sent-to-self query
        msgrules --json classify incoming both""",
)
@click.argument("origin")
@click.argument("kind")
@click.pass_obj
def classify(app: AppContext, origin: str, kind: str) -> None:
    """Show what a test must assert for a message.

    ORIGIN is incoming, outgoing or self (sent-to-self).
    KIND is query, command or query+command (both).
    """
    app.emit(app.rules.classify(origin, kind))
