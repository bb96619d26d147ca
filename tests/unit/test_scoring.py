# ABOUTME: Unit tests for search-result confidence scoring.
# ABOUTME: Validates the additive title/author scheme, identifier bonus, and per-provider caps.

import pytest

from folio.metadata.scoring import score_search_result


class TestScoreSearchResult:
    """Tests for score_search_result."""

    def test_base_score_for_unrelated_result(self) -> None:
        score = score_search_result("Something Else", ["Nobody"], "Dune", "Frank Herbert", cap=1.0)
        assert score == pytest.approx(0.5)

    def test_exact_title_case_insensitive(self) -> None:
        score = score_search_result("DUNE", [], "dune", None, cap=1.0)
        assert score == pytest.approx(0.8)

    def test_partial_title_either_direction(self) -> None:
        longer = score_search_result("Dune Messiah", [], "Dune", None, cap=1.0)
        shorter = score_search_result("Dune", [], "Dune Messiah", None, cap=1.0)
        assert longer == pytest.approx(0.65)
        assert shorter == pytest.approx(0.65)

    def test_author_substring_match(self) -> None:
        score = score_search_result("Other", ["Frank Herbert"], "Dune", "Herbert", cap=1.0)
        assert score == pytest.approx(0.65)

    def test_any_author_can_match(self) -> None:
        score = score_search_result(
            "Good Omens", ["Terry Pratchett", "Neil Gaiman"], "Good Omens", "neil gaiman", cap=1.0
        )
        assert score == pytest.approx(0.95)

    def test_no_author_searched_gives_no_author_bonus(self) -> None:
        score = score_search_result("Dune", ["Frank Herbert"], "Dune", None, cap=1.0)
        assert score == pytest.approx(0.8)

    def test_identifier_bonus(self) -> None:
        without = score_search_result("Other", [], "Dune", None, cap=1.0)
        with_bonus = score_search_result(
            "Other", [], "Dune", None, cap=1.0, has_identifier=True, identifier_bonus=0.05
        )
        assert with_bonus - without == pytest.approx(0.05)

    def test_full_match_is_capped(self) -> None:
        google = score_search_result(
            "Dune",
            ["Frank Herbert"],
            "Dune",
            "Frank Herbert",
            cap=0.95,
            has_identifier=True,
            identifier_bonus=0.05,
        )
        open_library = score_search_result(
            "Dune", ["Frank Herbert"], "Dune", "Frank Herbert", cap=0.85
        )
        assert google == 0.95
        assert open_library == 0.85
