# ABOUTME: JSON-ready dict conversion for records, variants, and groups.
# ABOUTME: Shared by the resolve and group commands' --json output.

from typing import Any

from folio.core.grouping import BookGroup, BookVariant, preferred_format
from folio.metadata.types import MetadataRecord


def record_to_dict(record: MetadataRecord) -> dict[str, Any]:
    return {
        "title": record.title,
        "authors": list(record.authors),
        "isbn": record.isbn,
        "isbn13": record.isbn13,
        "publisher": record.publisher,
        "published_date": record.published_date.isoformat() if record.published_date else None,
        "summary": record.summary,
        "page_count": record.page_count,
        "language": record.language,
        "cover_image_url": record.cover_image_url,
        "series": record.series,
        "series_index": record.series_index,
        "tags": list(record.tags),
        "confidence": record.confidence,
        "source": record.source,
    }


def variant_to_dict(variant: BookVariant) -> dict[str, Any]:
    return {
        "path": str(variant.path) if variant.path else None,
        "format": variant.format,
        "file_size_bytes": variant.file_size_bytes,
        "identity_key": variant.identity_key,
    }


def group_to_dict(book_group: BookGroup, purpose: str) -> dict[str, Any]:
    primary = book_group.primary_variant
    preferred = preferred_format(book_group, purpose)
    return {
        "group_key": book_group.group_key,
        "formats": book_group.formats,
        "total_size_bytes": book_group.total_size_bytes,
        "metadata": record_to_dict(primary.metadata) if primary else None,
        "preferred": variant_to_dict(preferred) if preferred else None,
        "variants": [variant_to_dict(v) for v in book_group.variants],
    }
