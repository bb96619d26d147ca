# ABOUTME: Parsing functions for Google Books volumes API JSON responses.
# ABOUTME: Converts volumeInfo dicts into MetadataRecord instances.

from typing import Any

from folio.metadata.dates import GOOGLE_BOOKS_DATE_FORMATS, parse_date
from folio.metadata.types import MetadataRecord

# Best image first.
_IMAGE_SIZES = ("extraLarge", "large", "medium", "small", "thumbnail", "smallThumbnail")


def parse_identifiers(volume_info: dict[str, Any]) -> tuple[str | None, str | None]:
    """Return (isbn10, isbn13) from a volume's industryIdentifiers list."""
    isbn: str | None = None
    isbn13: str | None = None
    for entry in volume_info.get("industryIdentifiers") or []:
        kind = entry.get("type")
        value = entry.get("identifier")
        if not value:
            continue
        if kind == "ISBN_10":
            isbn = value
        elif kind == "ISBN_13":
            isbn13 = value
    return isbn, isbn13


def parse_cover_url(volume_info: dict[str, Any]) -> str | None:
    """Pick the largest available cover image, upgraded to HTTPS."""
    links = volume_info.get("imageLinks") or {}
    for size in _IMAGE_SIZES:
        url = links.get(size)
        if url:
            return url.replace("http://", "https://", 1)
    return None


def parse_volume_info(
    volume_info: dict[str, Any], *, confidence: float, source: str
) -> MetadataRecord | None:
    """Parse one volumeInfo dict. Volumes without a title are skipped (None)."""
    title = volume_info.get("title")
    if not title:
        return None

    isbn, isbn13 = parse_identifiers(volume_info)
    authors = [a for a in volume_info.get("authors") or [] if isinstance(a, str)]
    tags = [c for c in volume_info.get("categories") or [] if isinstance(c, str)]
    page_count = volume_info.get("pageCount")

    return MetadataRecord(
        title=title,
        authors=authors,
        isbn=isbn,
        isbn13=isbn13,
        publisher=volume_info.get("publisher"),
        published_date=parse_date(volume_info.get("publishedDate"), GOOGLE_BOOKS_DATE_FORMATS),
        summary=volume_info.get("description"),
        page_count=page_count if isinstance(page_count, int) else None,
        language=volume_info.get("language"),
        cover_image_url=parse_cover_url(volume_info),
        # Series data from Google Books is too unreliable to use.
        series=None,
        series_index=None,
        tags=tags,
        confidence=confidence,
        source=source,
    )


def volume_items(data: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the volumeInfo dicts from a volumes search response."""
    items = data.get("items") or []
    return [item.get("volumeInfo") or {} for item in items if isinstance(item, dict)]
