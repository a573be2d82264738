"""Markdown slide deck model and parser.

Deck format:

* optional YAML front matter between ``---`` lines at the very top
  (``marp``, ``theme``, ``paginate``, ...);
* slides separated by lines consisting solely of ``---``;
* HTML-comment directives ``<!-- key: value -->`` inside a slide.
  Keys prefixed with ``_`` are spot directives and apply to that slide
  only; other keys carry forward to every following slide.

Separators and directives inside fenced code blocks are ignored.
Nothing here renders slides.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from msgrules.domain.errors import DeckError, DeckNotFoundError

SLIDE_SEPARATOR = "---"

# Front-matter keys that also act as per-slide directives.
LOCAL_DIRECTIVES = frozenset(
    {
        "paginate",
        "header",
        "footer",
        "class",
        "backgroundColor",
        "backgroundImage",
        "color",
    }
)

_DIRECTIVE_RE = re.compile(r"^\s*<!--\s*(_?[A-Za-z][\w-]*)\s*:\s*(.*?)\s*-->\s*$")
_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+(.+?)(?:\s+#+)?\s*$")
_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")


class Slide(BaseModel):
    """One slide of a deck.

    Attributes:
        index: 1-based position in the deck.
        title: Text of the first heading, or None.
        body: Raw Markdown of the slide, without the separators.
        directives: Directives in effect for this slide (carried and spot).
        code_blocks: Number of fenced code blocks on the slide.
    """

    model_config = {"frozen": True}

    index: int
    title: str | None = None
    body: str = ""
    directives: dict[str, Any] = Field(default_factory=dict)
    code_blocks: int = 0


class Deck(BaseModel):
    """A parsed slide deck."""

    model_config = {"frozen": True}

    front_matter: dict[str, Any] = Field(default_factory=dict)
    slides: list[Slide] = Field(default_factory=list)

    def slide(self, index: int) -> Slide:
        """Return slide *index* (1-based)."""
        if not 1 <= index <= len(self.slides):
            msg = f"slide {index} out of range (deck has {len(self.slides)} slides)"
            raise DeckError(msg)
        return self.slides[index - 1]


def _split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    lines = text.split("\n")
    if not lines or lines[0].strip() != SLIDE_SEPARATOR:
        return {}, text

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == SLIDE_SEPARATOR:
            end_idx = i
            break
    if end_idx is None:
        return {}, text

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    try:
        loaded = YAML(typ="safe").load(yaml_block)
    except YAMLError as exc:
        raise DeckError(f"invalid front matter: {exc}") from exc
    if loaded is None:
        # Only comments, e.g. "# Title": a slide opened by a separator.
        if yaml_block.strip():
            return {}, text
        return {}, body
    if not isinstance(loaded, dict):
        raise DeckError("front matter must be a mapping")
    return dict(loaded), body


def _track_fence(line: str, fence: str | None) -> str | None:
    """Return the open fence marker after *line*, or None outside a fence.

    A fence closes only on a run of the same character at least as long
    as the one that opened it, with nothing after it.
    """
    match = _FENCE_RE.match(line)
    if match is None:
        return fence
    marker = match.group(1)
    if fence is None:
        return marker
    rest = line[match.end() :]
    if marker[0] == fence[0] and len(marker) >= len(fence) and not rest.strip():
        return None
    return fence


def _split_slides(body: str) -> list[str]:
    chunks: list[str] = []
    current: list[str] = []
    fence: str | None = None
    for line in body.split("\n"):
        fence = _track_fence(line, fence)
        if fence is None and line.strip() == SLIDE_SEPARATOR:
            chunks.append("\n".join(current))
            current = []
            continue
        current.append(line)
    chunks.append("\n".join(current))
    return [c.strip("\n") for c in chunks if c.strip()]


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        return value[1:-1]
    return value


def _scan_slide(chunk: str) -> tuple[str | None, dict[str, str], int]:
    """Return ``(title, directives, code_block_count)`` for one slide."""
    title: str | None = None
    directives: dict[str, str] = {}
    fences = 0
    fence: str | None = None
    for line in chunk.split("\n"):
        was_open = fence is not None
        fence = _track_fence(line, fence)
        if not was_open and fence is not None:
            fences += 1
        if was_open or fence is not None:
            continue
        directive = _DIRECTIVE_RE.match(line)
        if directive:
            directives[directive.group(1)] = _unquote(directive.group(2))
            continue
        if title is None:
            heading = _HEADING_RE.match(line)
            if heading:
                title = heading.group(1)
    return title, directives, fences


def parse_deck(text: str) -> Deck:
    """Parse Markdown deck *text* into a :class:`Deck`.

    Raises:
        DeckError: If the front matter is not a valid YAML mapping.
    """
    normalized = text.replace("\r\n", "\n")
    front_matter, body = _split_front_matter(normalized)

    carried: dict[str, Any] = {k: v for k, v in front_matter.items() if k in LOCAL_DIRECTIVES}
    slides: list[Slide] = []
    for index, chunk in enumerate(_split_slides(body), start=1):
        title, found, code_blocks = _scan_slide(chunk)
        spot: dict[str, Any] = {}
        for key, value in found.items():
            if key.startswith("_"):
                spot[key[1:]] = value
            else:
                carried[key] = value
        slides.append(
            Slide(
                index=index,
                title=title,
                body=chunk,
                directives={**carried, **spot},
                code_blocks=code_blocks,
            )
        )
    return Deck(front_matter=front_matter, slides=slides)


def load_deck(path: Path) -> Deck:
    """Read and parse the deck at *path*.

    Raises:
        DeckNotFoundError: If *path* is not a file.
        DeckError: If the file cannot be read or parsed.
    """
    if not path.is_file():
        raise DeckNotFoundError(f"deck not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DeckError(f"cannot read deck {path}: {exc}") from exc
    return parse_deck(text)
