"""Subcommand modules for msgrules.

Provides register_commands() which uses deferred imports to keep
``msgrules --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the deck group and the standalone commands on the root group."""
    from msgrules.commands.classify import classify
    from msgrules.commands.deck import deck
    from msgrules.commands.message import message
    from msgrules.commands.rules import rules

    cli.add_command(deck)
    cli.add_command(classify)
    cli.add_command(message)
    cli.add_command(rules)
