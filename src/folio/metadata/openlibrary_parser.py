# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts ISBN-endpoint and search-doc structures into MetadataRecord instances.

from typing import Any, Literal

from folio.metadata.dates import OPEN_LIBRARY_DATE_FORMATS, parse_date
from folio.metadata.isbn import clean_isbn, split_isbn
from folio.metadata.types import MetadataRecord

_COVERS_BASE_URL = "https://covers.openlibrary.org/b"

# Search docs can carry hundreds of subjects; keep the first few as tags.
_MAX_SEARCH_TAGS = 10

CoverSize = Literal["S", "M", "L"]


def build_cover_url(isbn: str, size: CoverSize = "L") -> str:
    """Build an Open Library cover image URL for a given ISBN.

    Args:
        isbn: The ISBN to look up cover art for.
        size: Image size — "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/isbn/{clean_isbn(isbn)}-{size}.jpg"


def build_cover_url_by_olid(olid: str, size: CoverSize = "L") -> str:
    """Cover URL for an Open Library edition ID such as "OL12345M"."""
    return f"{_COVERS_BASE_URL}/olid/{olid}-{size}.jpg"


def build_cover_url_by_id(cover_id: int, size: CoverSize = "L") -> str:
    """Cover URL for the numeric cover ID found in search docs (cover_i)."""
    return f"{_COVERS_BASE_URL}/id/{cover_id}-{size}.jpg"


def parse_description(data: dict[str, Any]) -> str | None:
    """Extract a description that may be a plain string or {"type", "value"}.

    Open Library uses both shapes for the same field.
    """
    desc = data.get("description")
    if isinstance(desc, str):
        return desc
    if isinstance(desc, dict):
        return desc.get("value")
    return None


def _named_values(entries: list[Any]) -> list[str]:
    """Flatten entries that are either strings or {"name": ...} dicts."""
    values: list[str] = []
    for entry in entries:
        if isinstance(entry, str):
            values.append(entry)
        elif isinstance(entry, dict) and entry.get("name"):
            values.append(entry["name"])
    return values


def author_keys(data: dict[str, Any]) -> list[str]:
    """Return the /authors/... keys referenced by an edition response."""
    keys: list[str] = []
    for entry in data.get("authors") or []:
        key = entry.get("key") if isinstance(entry, dict) else None
        if key:
            keys.append(key)
    return keys


def parse_author_name(data: dict[str, Any]) -> str | None:
    """Extract the author name from an Open Library Author response."""
    return data.get("name")


def parse_isbn_response(
    data: dict[str, Any],
    isbn: str,
    *,
    authors: list[str],
    confidence: float,
    source: str,
) -> MetadataRecord | None:
    """Parse an Open Library ISBN endpoint (edition) response.

    The queried ISBN is authoritative: it lands in isbn or isbn13 by length
    and also drives the cover URL. Returns None when the edition has no title.
    """
    title = data.get("title")
    if not title:
        return None

    cleaned = clean_isbn(isbn)
    isbn10, isbn13 = split_isbn(cleaned)
    publishers = _named_values(data.get("publishers") or [])
    page_count = data.get("number_of_pages")

    return MetadataRecord(
        title=title,
        authors=authors,
        isbn=isbn10,
        isbn13=isbn13,
        publisher=publishers[0] if publishers else None,
        published_date=parse_date(data.get("publish_date"), OPEN_LIBRARY_DATE_FORMATS),
        summary=parse_description(data),
        page_count=page_count if isinstance(page_count, int) else None,
        # Edition language is a /languages/ reference that needs another lookup.
        language=None,
        cover_image_url=build_cover_url(cleaned),
        tags=_named_values(data.get("subjects") or []),
        confidence=confidence,
        source=source,
    )


def doc_isbns(doc: dict[str, Any]) -> tuple[str | None, str | None]:
    """First ISBN-10 and first ISBN-13 listed in a search doc."""
    isbn10: str | None = None
    isbn13: str | None = None
    for raw in doc.get("isbn") or []:
        ten, thirteen = split_isbn(raw)
        if ten and isbn10 is None:
            isbn10 = ten
        elif thirteen and isbn13 is None:
            isbn13 = thirteen
        if isbn10 and isbn13:
            break
    return isbn10, isbn13


def parse_search_doc(
    doc: dict[str, Any], *, confidence: float, source: str
) -> MetadataRecord | None:
    """Parse one doc from an Open Library Search API response.

    Search docs never include descriptions. Docs without a title are skipped.
    """
    title = doc.get("title")
    if not title:
        return None

    isbn10, isbn13 = doc_isbns(doc)

    cover_id = doc.get("cover_i")
    cover_url: str | None = None
    if isinstance(cover_id, int):
        cover_url = build_cover_url_by_id(cover_id)
    elif isbn13 or isbn10:
        cover_url = build_cover_url(isbn13 or isbn10)

    year = doc.get("first_publish_year")
    publishers = doc.get("publisher") or []
    languages = doc.get("language") or []
    subjects = doc.get("subject") or []
    page_count = doc.get("number_of_pages_median")

    return MetadataRecord(
        title=title,
        authors=doc.get("author_name") or [],
        isbn=isbn10,
        isbn13=isbn13,
        publisher=publishers[0] if publishers else None,
        published_date=parse_date(str(year), ("%Y",)) if isinstance(year, int) else None,
        page_count=page_count if isinstance(page_count, int) else None,
        language=languages[0] if languages else None,
        cover_image_url=cover_url,
        tags=subjects[:_MAX_SEARCH_TAGS],
        confidence=confidence,
        source=source,
    )
