# ABOUTME: Unit tests for title normalization, sortable titles, and trigrams.
# ABOUTME: Validates article stripping, punctuation folding, idempotency, and short-string trigrams.

import pytest

from folio.metadata.normalizer import (
    normalize_title,
    normalize_whitespace,
    sortable_title,
    trigrams,
)


class TestNormalizeTitle:
    """Tests for normalize_title."""

    def test_strips_article_and_punctuation(self) -> None:
        """Leading article, doubled spaces, and trailing punctuation disappear."""
        assert normalize_title("The  Hobbit!!") == "hobbit"

    def test_lowercases(self) -> None:
        assert normalize_title("DUNE") == "dune"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("A Wizard of Earthsea", "wizard of earthsea"),
            ("An Instance of the Fingerpost", "instance of the fingerpost"),
            ("the hobbit", "hobbit"),
        ],
    )
    def test_each_article_is_stripped(self, raw: str, expected: str) -> None:
        assert normalize_title(raw) == expected

    def test_article_only_stripped_at_start(self) -> None:
        """Articles inside the title are kept."""
        assert normalize_title("Catcher in the Rye") == "catcher in the rye"

    def test_article_must_be_a_whole_word(self) -> None:
        """"Theory" starts with "the" but is not an article."""
        assert normalize_title("Theory of Everything") == "theory of everything"
        assert normalize_title("Anathem") == "anathem"

    def test_punctuation_becomes_single_space(self) -> None:
        assert normalize_title("Catch-22: A Novel") == "catch 22 a novel"

    def test_underscore_is_not_alphanumeric(self) -> None:
        assert normalize_title("Report_Final") == "report final"

    def test_unicode_letters_are_kept(self) -> None:
        assert normalize_title("Cien años de soledad") == "cien años de soledad"

    def test_quoted_title_loses_article(self) -> None:
        """Punctuation before the article does not protect it."""
        assert normalize_title("'The Hobbit'") == "hobbit"

    @pytest.mark.parametrize(
        "raw",
        ["The  Hobbit!!", "The A-Team", "  an   apple a day  ", "'The Hobbit'", "", "!!!", "The"],
    )
    def test_idempotent(self, raw: str) -> None:
        """Normalizing twice gives the same result as normalizing once."""
        once = normalize_title(raw)
        assert normalize_title(once) == once

    def test_empty_and_symbol_only_titles(self) -> None:
        assert normalize_title("") == ""
        assert normalize_title("!!!") == ""


class TestSortableTitle:
    """Tests for sortable_title."""

    def test_strips_one_article(self) -> None:
        assert sortable_title("The Hobbit") == "hobbit"

    def test_keeps_punctuation(self) -> None:
        assert sortable_title("A Tale of Two Cities!") == "tale of two cities!"

    def test_no_article(self) -> None:
        assert sortable_title("Dune") == "dune"


class TestTrigrams:
    """Tests for trigrams."""

    def test_contiguous_substrings(self) -> None:
        assert trigrams("Dune") == {"dun", "une"}

    def test_lowercases_and_trims(self) -> None:
        assert trigrams("  ABCD ") == {"abc", "bcd"}

    def test_short_string_is_its_own_trigram(self) -> None:
        assert trigrams("ab") == {"ab"}
        assert trigrams("") == {""}

    def test_exactly_three_characters(self) -> None:
        assert trigrams("abc") == {"abc"}


class TestNormalizeWhitespace:
    """Tests for normalize_whitespace."""

    def test_collapses_and_trims(self) -> None:
        assert normalize_whitespace("  The \t Hobbit \n") == "The Hobbit"
