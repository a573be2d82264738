"""Click base classes with an ``--examples`` flag.

``msgrules <cmd> --examples`` prints ready-to-paste invocations and exits,
so ``--help`` can stay short.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    """Adds an eager ``--examples`` option when ``examples`` text is given."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in (self.examples or "").splitlines():
            click.echo(f"  {line}")
        ctx.exit(0)


class RulesCommand(_ExamplesMixin, click.Command):
    """Click Command that accepts ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class RulesGroup(_ExamplesMixin, click.Group):
    """Click Group that accepts ``examples=``.

    Subcommands default to :class:`RulesCommand`.
    """

    command_class = RulesCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
