"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``MSGRULES_*`` prefix
  3. TOML file: ``msgrules.toml`` discovered via walk-up
  4. Code defaults: baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`msgrules.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from msgrules.config.discovery import ConfigError, find_config, read_toml
from msgrules.config.models import DeckConfig, OutputConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source over a single ``msgrules.toml``.

    A broken file is a usage error, so it surfaces as ``click.ClickException``
    and the CLI prints it without a traceback.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = read_toml(toml_path)
        except ConfigError as exc:
            raise click.ClickException(str(exc)) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class MsgRulesSettings(BaseSettings):
    """Unified settings for the msgrules CLI.

    Stored on the :class:`~msgrules.commands._context.AppContext` created
    by the root CLI group.

    Attributes:
        project_root: Parent of ``msgrules.toml``, or CWD if no config found.
            Relative deck paths resolve against it.
        config_path: The config file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "MSGRULES_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    deck: DeckConfig = Field(default_factory=DeckConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> MsgRulesSettings:
        """Construct settings from CLI invocation.

        Discovers ``msgrules.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. Flags left unset
        (False or None) are not passed on, so ``MSGRULES_*`` env vars and
        TOML can still turn them on.
        """
        overrides = {k: v for k, v in cli_flags.items() if v}
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None

    def resolve_deck_path(self, path: str | None = None) -> Path:
        """Resolve *path* (or the configured deck) against the project root."""
        candidate = Path(path or self.deck.path)
        if candidate.is_absolute():
            return candidate
        return self.project_root / candidate
