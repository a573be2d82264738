"""Command: the full origin x kind rule table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from msgrules.commands._base import RulesCommand

if TYPE_CHECKING:
    from msgrules.commands._context import AppContext


@click.command(
    cls=RulesCommand,
    examples="""\
        msgrules rules
        msgrules -v rules
        msgrules --json rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """Print every testing rule."""
    app.emit(app.rules.table())
