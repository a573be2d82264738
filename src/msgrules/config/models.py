"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, msgrules.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class DeckConfig(BaseModel):
    """[deck] section."""

    model_config = {"frozen": True}

    path: str = "slides.md"
    warn_untitled: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = 120
