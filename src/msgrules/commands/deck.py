"""Command group: inspect the Markdown slide deck."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from msgrules.commands._base import RulesGroup

if TYPE_CHECKING:
    from msgrules.commands._context import AppContext


@click.group(
    cls=RulesGroup,
    examples="""\
        msgrules deck outline
        msgrules deck outline talks/rules.md
        msgrules deck show 3""",
)
def deck() -> None:
    """Outline and read slides of the deck."""


@deck.command(
    examples="""\
        msgrules deck outline
        msgrules --json deck outline slides.md""",
)
@click.argument("path", required=False)
@click.pass_obj
def outline(app: AppContext, path: str | None) -> None:
    """List slides with titles and headers.

    PATH defaults to [deck] path in msgrules.toml.
    """
    app.emit(app.deck.outline(path))


@deck.command(
    examples="""\
        msgrules deck show 1
        msgrules deck show 4 slides.md""",
)
@click.argument("index", type=click.IntRange(min=1))
@click.argument("path", required=False)
@click.pass_obj
def show(app: AppContext, index: int, path: str | None) -> None:
    """Print slide INDEX (1-based)."""
    app.emit(app.deck.show(index, path))
