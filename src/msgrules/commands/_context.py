"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides service construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from msgrules.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from msgrules.config.settings import MsgRulesSettings
    from msgrules.services.deck import DeckService
    from msgrules.services.result import ServiceResult
    from msgrules.services.rules import RuleService


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: MsgRulesSettings) -> None:
        self.settings = settings

        from msgrules.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from msgrules.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def rules(self) -> RuleService:
        from msgrules.services.rules import RuleService

        return RuleService(self.settings)

    @property
    def deck(self) -> DeckService:
        from msgrules.services.deck import DeckService

        return DeckService(self.settings)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            width=self.settings.output.width,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
