"""DeckService — outline and inspect the Markdown slide deck."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from msgrules.domain.deck import Deck, load_deck
from msgrules.domain.errors import DeckError, DeckNotFoundError
from msgrules.services.base import BaseService
from msgrules.services.result import ServiceResult
from msgrules.services.telemetry import trace_span, traced

log = structlog.get_logger(__name__)

DECK_NOT_FOUND = "DECK_NOT_FOUND"
DECK_INVALID = "DECK_INVALID"
SLIDE_NOT_FOUND = "SLIDE_NOT_FOUND"


class DeckService(BaseService):
    """Reads a slide deck and reports on its structure."""

    def _resolve(self, path: str | Path | None) -> Path:
        if self._settings is not None:
            return self._settings.resolve_deck_path(str(path) if path else None)
        if path is None:
            return Path("slides.md")
        return Path(path)

    def _load(self, op: str, path: Path) -> Deck | ServiceResult:
        try:
            with trace_span("load_deck") as span:
                deck = load_deck(path)
                if span is not None:
                    span.annotate("slides", len(deck.slides))
                    span.annotate("front_matter", bool(deck.front_matter))
                return deck
        except DeckNotFoundError as exc:
            return self._fail(op, DECK_NOT_FOUND, exc, path=str(path))
        except DeckError as exc:
            return self._fail(op, DECK_INVALID, exc, path=str(path))

    @traced
    def outline(self, path: str | Path | None = None) -> ServiceResult:
        """Summarise every slide: index, title, header and code blocks."""
        deck_path = self._resolve(path)
        deck = self._load("deck_outline", deck_path)
        if isinstance(deck, ServiceResult):
            return deck

        warn_untitled = self._settings.deck.warn_untitled if self._settings else True
        warnings: list[str] = []
        items: list[dict[str, Any]] = []
        for slide in deck.slides:
            items.append(
                {
                    "index": slide.index,
                    "title": slide.title or "",
                    "header": slide.directives.get("header", ""),
                    "code_blocks": slide.code_blocks,
                }
            )
            if warn_untitled and slide.title is None:
                warnings.append(f"Slide {slide.index} has no heading")

        log.debug("deck.outlined", path=str(deck_path), slides=len(items))
        return ServiceResult(
            ok=True,
            op="deck_outline",
            data={
                "path": str(deck_path),
                "front_matter": deck.front_matter,
                "items": items,
                "count": len(items),
            },
            warnings=warnings,
        )

    @traced
    def show(self, index: int, path: str | Path | None = None) -> ServiceResult:
        """Return slide *index* (1-based) with its effective directives."""
        deck_path = self._resolve(path)
        deck = self._load("deck_show", deck_path)
        if isinstance(deck, ServiceResult):
            return deck

        try:
            slide = deck.slide(index)
        except DeckError as exc:
            return self._fail(
                "deck_show", SLIDE_NOT_FOUND, exc, index=index, count=len(deck.slides)
            )
        return ServiceResult(
            ok=True,
            op="deck_show",
            data={"path": str(deck_path), **slide.model_dump(mode="json")},
        )
