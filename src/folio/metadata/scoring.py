# ABOUTME: Confidence scoring for provider search results.
# ABOUTME: Additive title/author match scheme with a provider-specific cap.

from collections.abc import Sequence

_BASE_SCORE = 0.5
_EXACT_TITLE_BONUS = 0.3
_PARTIAL_TITLE_BONUS = 0.15
_AUTHOR_BONUS = 0.15


def _contains_either_way(a: str, b: str) -> bool:
    return a in b or b in a


def score_search_result(
    result_title: str,
    result_authors: Sequence[str],
    search_title: str,
    search_author: str | None,
    *,
    cap: float,
    has_identifier: bool = False,
    identifier_bonus: float = 0.0,
) -> float:
    """Score how well a search result matches the query that produced it.

    Starts at 0.5; adds 0.3 for a case-insensitive exact title match or 0.15
    when one title contains the other; adds 0.15 when any result author and
    the searched author contain one another; adds identifier_bonus when the
    result carries an ISBN. The total is capped at `cap`, which encodes how
    precise the provider's matching is.
    """
    score = _BASE_SCORE

    result_lower = result_title.lower()
    search_lower = search_title.lower()
    if result_lower == search_lower:
        score += _EXACT_TITLE_BONUS
    elif _contains_either_way(result_lower, search_lower):
        score += _PARTIAL_TITLE_BONUS

    if search_author:
        author_lower = search_author.lower()
        if any(_contains_either_way(a.lower(), author_lower) for a in result_authors):
            score += _AUTHOR_BONUS

    if has_identifier:
        score += identifier_bonus

    return min(score, cap)
