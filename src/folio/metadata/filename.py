# ABOUTME: Heuristic filename parser that extracts a (title, author) seed from ebook filenames.
# ABOUTME: Tries bracket, "by", and dash patterns in fixed order, guided by a name-likeness check.

import re

from folio.metadata.normalizer import normalize_whitespace
from folio.metadata.types import ParsedFilename

# Final ".ext" component: 1-5 ASCII letters/digits. "Dr. Who" keeps its dot.
_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]{1,5}$")

# "Title (Author)" or "Title [Author]" at the very end of the name.
_TRAILING_BRACKET_RE = re.compile(r"\s*[\(\[]([^\)\]]+)[\)\]]\s*$")

_BY_RE = re.compile(r" by ", re.IGNORECASE)

# Regular hyphen, en-dash, em-dash, tried in this order.
_DASH_SEPARATORS = (" - ", " – ", " — ")

# Author names are 1-6 words; more than that is almost certainly a title.
_MAX_NAME_WORDS = 6
_NAME_WORD_RATIO = 0.5


def _is_name_word(word: str) -> bool:
    """Capitalized word made of letters, with an optional trailing period.

    Letters are Unicode-aware so "José" and "García" count as name words.
    """
    if word.endswith("."):
        word = word[:-1]
    return bool(word) and word[0].isupper() and word.isalpha()


def looks_like_author_name(text: str) -> bool:
    """Heuristic check whether a string looks like a person's name.

    Accepts 1-6 whitespace-separated words when at least half of them are
    capitalized name-like words (initials with periods count). This is a
    hint for the parser, not ground truth.
    """
    words = text.split()
    if not words or len(words) > _MAX_NAME_WORDS:
        return False
    name_words = sum(1 for word in words if _is_name_word(word))
    return name_words / len(words) >= _NAME_WORD_RATIO


def _strip_extension(filename: str) -> str:
    match = _EXTENSION_RE.search(filename)
    if match and match.start() > 0:
        return filename[: match.start()]
    return filename


def _match_bracket(name: str) -> ParsedFilename | None:
    match = _TRAILING_BRACKET_RE.search(name)
    if not match:
        return None
    author = match.group(1).strip()
    title = name[: match.start()].strip()
    if author and title:
        return ParsedFilename(title=title, author=author)
    return None


def _match_by(name: str) -> ParsedFilename | None:
    match = _BY_RE.search(name)
    if not match:
        return None
    title = name[: match.start()].strip()
    author = name[match.end():].strip()
    if title and author and looks_like_author_name(author):
        return ParsedFilename(title=title, author=author)
    return None


def _match_dash(name: str) -> ParsedFilename | None:
    for separator in _DASH_SEPARATORS:
        left, found, right = name.partition(separator)
        if not found:
            continue
        left, right = left.strip(), right.strip()
        if not left or not right:
            continue

        left_is_name = looks_like_author_name(left)
        right_is_name = looks_like_author_name(right)
        if right_is_name and not left_is_name:
            return ParsedFilename(title=left, author=right)
        if left_is_name and not right_is_name:
            return ParsedFilename(title=right, author=left)
        if right_is_name:
            # Both sides look like names: "Title - Author" is the common layout.
            return ParsedFilename(title=left, author=right)
    return None


def parse(filename: str) -> ParsedFilename:
    """Extract a title and optional author from an ebook filename.

    Patterns, first match wins:
      1. "Title (Author)" / "Title [Author]"
      2. "Title by Author" (author must look like a name)
      3. "Title - Author" / "Author - Title" (hyphen, en-dash, em-dash)
      4. fallback: the cleaned name as the title, no author

    Never raises; malformed input still produces a best-effort title.
    """
    stem = _strip_extension(filename)
    name = stem.replace("_", " ")

    for matcher in (_match_bracket, _match_by, _match_dash):
        parsed = matcher(name)
        if parsed is not None:
            return parsed

    title = normalize_whitespace(name.replace("-", " "))
    # Names made only of separators keep their raw text rather than going blank.
    return ParsedFilename(title=title or stem.strip() or filename.strip() or filename)


class FilenameParser:
    """Injectable wrapper around the module-level parsing functions."""

    def parse(self, filename: str) -> ParsedFilename:
        return parse(filename)

    def looks_like_author_name(self, text: str) -> bool:
        return looks_like_author_name(text)

    def normalize_whitespace(self, text: str) -> str:
        return normalize_whitespace(text)
