# ABOUTME: Embedded identifier extraction from EPUB files using ebooklib.
# ABOUTME: Supplies the ISBN that lets the resolver skip straight to an identifier lookup.

import logging
from pathlib import Path

from ebooklib import epub

from folio.metadata.isbn import clean_isbn, is_valid_isbn

logger = logging.getLogger(__name__)

# Schemes publishers use for ISBNs in dc:identifier, most specific first.
_ISBN_SCHEMES = ("isbn", "isbn13", "isbn-13", "isbn10", "isbn-10")

_URN_PREFIX = "urn:isbn:"


class EpubReadError(Exception):
    """Raised when an EPUB file cannot be read or parsed."""


def _get_identifiers(book: epub.EpubBook) -> dict[str, str]:
    """Map identifier scheme (lowercased, "id" when absent) to value."""
    identifiers: dict[str, str] = {}
    for value, attrs in book.get_metadata("DC", "identifier"):
        if not value:
            continue
        scheme = attrs.get("opf:scheme", attrs.get("scheme", "id"))
        identifiers.setdefault(scheme.lower(), str(value).strip())
    return identifiers


def _as_isbn(value: str) -> str | None:
    if value.lower().startswith(_URN_PREFIX):
        value = value[len(_URN_PREFIX):]
    cleaned = value.replace("-", "").replace(" ", "").upper()
    # Only hyphens and spaces may be dropped; UUIDs must not read as ISBNs.
    if cleaned != clean_isbn(cleaned):
        return None
    return cleaned if is_valid_isbn(cleaned) else None


def detect_isbn(identifiers: dict[str, str]) -> str | None:
    """Find a checksum-valid ISBN among dc:identifier values.

    Declared ISBN schemes are trusted first; otherwise any identifier whose
    value is a valid ISBN (including urn:isbn: forms) is used.
    """
    for scheme in _ISBN_SCHEMES:
        if scheme in identifiers:
            isbn = _as_isbn(identifiers[scheme])
            if isbn:
                return isbn
    for value in identifiers.values():
        isbn = _as_isbn(value)
        if isbn:
            return isbn
    return None


def read_epub_isbn(path: Path) -> str | None:
    """Return the ISBN embedded in an EPUB's package metadata, if any.

    Raises:
        EpubReadError: If the file cannot be read or parsed.
    """
    if not path.exists():
        raise EpubReadError(f"File not found: {path}")

    try:
        book = epub.read_epub(str(path), options={"ignore_ncx": True})
    except Exception as exc:
        raise EpubReadError(f"Failed to read EPUB: {path}: {exc}") from exc

    isbn = detect_isbn(_get_identifiers(book))
    logger.debug("Embedded ISBN for %s: %s", path.name, isbn)
    return isbn
