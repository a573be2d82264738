"""Tests for the Markdown slide deck parser."""

from pathlib import Path

import pytest

from msgrules.domain.deck import load_deck, parse_deck
from msgrules.domain.errors import DeckError, DeckNotFoundError
from tests.conftest import SAMPLE_DECK


class TestFrontMatter:
    def test_parsed_as_yaml(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        assert deck.front_matter == {"marp": True, "theme": "gaia", "paginate": True}

    def test_absent(self) -> None:
        deck = parse_deck("# Only slide\n")
        assert deck.front_matter == {}
        assert len(deck.slides) == 1

    def test_unclosed_is_treated_as_body(self) -> None:
        deck = parse_deck("---\ntheme: gaia\n# Title\n")
        assert deck.front_matter == {}
        assert deck.slides[0].title == "Title"

    def test_invalid_yaml(self) -> None:
        with pytest.raises(DeckError, match="invalid front matter"):
            parse_deck("---\ntheme: [unclosed\n---\n# Slide\n")

    def test_non_mapping(self) -> None:
        with pytest.raises(DeckError, match="mapping"):
            parse_deck("---\n- a\n- b\n---\n# Slide\n")

    def test_leading_separator_before_heading_is_a_slide(self) -> None:
        deck = parse_deck("---\n# Title\n---\n# Two\n")
        assert deck.front_matter == {}
        assert [s.title for s in deck.slides] == ["Title", "Two"]

    def test_empty_block(self) -> None:
        deck = parse_deck("---\n---\n# Only\n")
        assert deck.front_matter == {}
        assert [s.title for s in deck.slides] == ["Only"]

    def test_crlf_line_endings(self) -> None:
        deck = parse_deck(SAMPLE_DECK.replace("\n", "\r\n"))
        assert deck.front_matter["theme"] == "gaia"
        assert len(deck.slides) == 5


class TestSlides:
    def test_split_on_separator(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        assert [s.index for s in deck.slides] == [1, 2, 3, 4, 5]

    def test_titles(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        assert [s.title for s in deck.slides] == [
            "The Rules of Testing",
            "Incoming query",
            "Incoming command",
            "Outgoing command",
            None,
        ]

    def test_separator_inside_fence_is_ignored(self) -> None:
        slide = parse_deck(SAMPLE_DECK).slide(4)
        assert "call: changed" in slide.body
        assert slide.code_blocks == 1

    def test_code_block_count(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        assert [s.code_blocks for s in deck.slides] == [0, 1, 0, 1, 0]

    def test_fence_closes_only_on_its_own_marker(self) -> None:
        deck = parse_deck("# A\n~~~\n```\n---\n~~~\n\n---\n# B\n")
        assert [s.title for s in deck.slides] == ["A", "B"]
        assert deck.slides[0].code_blocks == 1

    def test_shorter_run_does_not_close_fence(self) -> None:
        deck = parse_deck("# A\n````md\n```\n---\n````\n---\n# B\n")
        assert [s.title for s in deck.slides] == ["A", "B"]
        assert "---" in deck.slides[0].body

    def test_heading_inside_fence_is_not_a_title(self) -> None:
        deck = parse_deck("```\n# comment\n```\n\n## Real title\n")
        assert deck.slides[0].title == "Real title"

    def test_blank_chunks_are_skipped(self) -> None:
        deck = parse_deck("# One\n\n---\n\n---\n\n# Two\n")
        assert [s.title for s in deck.slides] == ["One", "Two"]

    def test_empty_deck(self) -> None:
        assert parse_deck("").slides == []


class TestDirectives:
    def test_front_matter_directives_apply_to_all(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        assert all(s.directives.get("paginate") is True for s in deck.slides)
        assert "theme" not in deck.slides[0].directives

    def test_local_directive_carries_forward(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        headers = [s.directives.get("header") for s in deck.slides]
        assert headers == [
            None,
            "Incoming messages",
            "Incoming messages",
            "Outgoing messages",
            "Outgoing messages",
        ]

    def test_spot_directive_applies_once(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        assert deck.slide(4).directives["class"] == "lead"
        assert "class" not in deck.slide(5).directives

    def test_quoted_value(self) -> None:
        deck = parse_deck("<!-- footer: 'Rules of Testing' -->\n# A\n")
        assert deck.slides[0].directives["footer"] == "Rules of Testing"


class TestDeckLookup:
    def test_slide_out_of_range(self) -> None:
        deck = parse_deck(SAMPLE_DECK)
        with pytest.raises(DeckError, match="out of range"):
            deck.slide(6)
        with pytest.raises(DeckError):
            deck.slide(0)


class TestLoadDeck:
    def test_load(self, deck_file: Path) -> None:
        deck = load_deck(deck_file)
        assert len(deck.slides) == 5

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(DeckNotFoundError, match="deck not found"):
            load_deck(tmp_path / "nope.md")

    def test_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.md"
        path.write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(DeckError, match="cannot read deck"):
            load_deck(path)
