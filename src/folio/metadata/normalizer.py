# ABOUTME: Pure string transforms shared by the parser, grouper, and search index.
# ABOUTME: Title normalization for identity keys, trigrams, and whitespace cleanup.

import re

# Leading articles ignored when comparing or sorting titles.
_LEADING_ARTICLES = ("the ", "a ", "an ")

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to a single space and trim the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def _strip_leading_article(text: str) -> str:
    for article in _LEADING_ARTICLES:
        if text.startswith(article):
            return text[len(article):]
    return text


def normalize_title(title: str) -> str:
    """Normalize a title for identity comparison.

    Lowercases, turns every run of non-alphanumeric characters into a single
    space, trims, and strips leading articles ("the", "a", "an") until none
    is left. Applying it twice gives the same result as applying it once.

    >>> normalize_title("The  Hobbit!!")
    'hobbit'
    """
    # Keep only alphanumerics; everything else becomes a separator.
    chars = [ch if ch.isalnum() else " " for ch in title.lower()]
    normalized = normalize_whitespace("".join(chars))

    # "The A-Team" -> "team": the result never starts with an article.
    while True:
        stripped = _strip_leading_article(normalized)
        if stripped == normalized:
            return normalized
        normalized = stripped.strip()


def sortable_title(title: str) -> str:
    """Sort-friendly title: lowercase with one leading article removed."""
    return _strip_leading_article(title.lower()).strip()


def trigrams(text: str) -> set[str]:
    """Generate the set of 3-character substrings used by fuzzy search.

    Strings shorter than three characters yield a singleton set containing
    the normalized string itself.
    """
    normalized = text.lower().strip()
    if len(normalized) < 3:
        return {normalized}
    return {normalized[i : i + 3] for i in range(len(normalized) - 2)}
