"""Command: classify a concrete message from a unit's point of view."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from msgrules.commands._base import RulesCommand

if TYPE_CHECKING:
    from msgrules.commands._context import AppContext


@click.command(
    cls=RulesCommand,
    examples="""\
        msgrules message pop --sender Client --receiver Stack --unit Stack --returns-value --changes-state
        msgrules message fetch --sender Gear --receiver Wheel --unit Gear --returns-value
        msgrules message notify --sender Order --receiver Mailer --unit Order --changes-state""",
)
@click.argument("name")
@click.option("--sender", required=True, help="Role that sends the message.")
@click.option("--receiver", required=True, help="Role that receives the message.")
@click.option("--unit", required=True, help="The unit whose test you are writing.")
@click.option("--returns-value", is_flag=True, help="The message returns a meaningful value.")
@click.option("--changes-state", is_flag=True, help="The message changes observable state.")
@click.pass_obj
def message(
    app: AppContext,
    name: str,
    sender: str,
    receiver: str,
    unit: str,
    returns_value: bool,
    changes_state: bool,
) -> None:
    """Show what UNIT's test must assert about message NAME."""
    from msgrules.domain.messages import Message

    msg = Message(
        name=name,
        sender=sender,
        receiver=receiver,
        returns_value=returns_value,
        changes_state=changes_state,
    )
    app.emit(app.rules.classify_message(msg, unit))
