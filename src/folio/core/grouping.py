# ABOUTME: Identity grouping of format variants into logical books.
# ABOUTME: Group keys prefer ISBN-13, then ISBN-10, then the normalized title.

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from folio.metadata.normalizer import normalize_title, sortable_title
from folio.metadata.types import MetadataRecord

# Format preference per purpose. Kindle no longer takes MOBI, and Amazon
# converts EPUB itself, so EPUB leads both lists.
FORMAT_PRIORITIES: dict[str, tuple[str, ...]] = {
    "reading": ("epub", "pdf", "mobi", "azw3"),
    "kindle": ("epub", "azw3", "pdf", "txt"),
}

_UNTITLED = "untitled"


@dataclass(frozen=True)
class BookVariant:
    """One physical file of a book in one format."""

    identity_key: str
    format: str
    file_size_bytes: int
    metadata: MetadataRecord
    path: Path | None = None


def _completeness(variant: BookVariant) -> int:
    """Score how much useful metadata a variant carries. Cover art dominates."""
    meta = variant.metadata
    score = 0
    if meta.cover_image_url:
        score += 10
    if meta.summary:
        score += 5
    if meta.has_isbn:
        score += 3
    if meta.publisher:
        score += 2
    if meta.authors:
        score += 2
    if meta.page_count and meta.page_count > 0:
        score += 1
    return score


@dataclass(frozen=True)
class BookGroup:
    """All variants that share one group key.

    Derived data only: rebuild the group with group() whenever the
    underlying variant set changes.
    """

    group_key: str
    variants: tuple[BookVariant, ...]

    @property
    def primary_variant(self) -> BookVariant | None:
        """Variant with the most complete metadata; the first one wins ties."""
        if not self.variants:
            return None
        return max(self.variants, key=_completeness)

    @property
    def formats(self) -> list[str]:
        """Distinct lowercase formats, sorted."""
        return sorted({v.format.lower() for v in self.variants})

    @property
    def total_size_bytes(self) -> int:
        return sum(v.file_size_bytes for v in self.variants)

    @property
    def has_multiple_formats(self) -> bool:
        return len(self.formats) > 1

    @property
    def sortable_title(self) -> str:
        primary = self.primary_variant
        return sortable_title(primary.metadata.title) if primary else ""

    def variant_for_format(self, fmt: str) -> BookVariant | None:
        """First variant in the given format (case-insensitive)."""
        wanted = fmt.lower()
        for variant in self.variants:
            if variant.format.lower() == wanted:
                return variant
        return None


def group_key(variant: BookVariant) -> str:
    """Identity key shared by every format of the same book.

    >>> group_key(BookVariant("h1", "epub", 10, MetadataRecord(title="The Hobbit")))
    'title:hobbit'
    """
    meta = variant.metadata
    if meta.isbn13:
        return f"isbn:{meta.isbn13}"
    if meta.isbn:
        return f"isbn:{meta.isbn}"
    return f"title:{normalize_title(meta.title or _UNTITLED)}"


def group(variants: Iterable[BookVariant]) -> list[BookGroup]:
    """Group variants by key.

    Groups appear in the order their key was first seen and keep their
    variants in input order, so the same input always yields the same
    output.
    """
    buckets: dict[str, list[BookVariant]] = {}
    for variant in variants:
        buckets.setdefault(group_key(variant), []).append(variant)
    return [BookGroup(group_key=key, variants=tuple(members)) for key, members in buckets.items()]


def preferred_format(
    book_group: BookGroup,
    purpose: str,
    priorities: Mapping[str, Sequence[str]] = FORMAT_PRIORITIES,
) -> BookVariant | None:
    """Pick the best variant for a purpose such as "reading" or "kindle".

    Walks the purpose's format list and returns the first variant in the
    first format present. Falls back to the group's first variant when no
    listed format is present, and returns None for an empty group.

    Raises:
        KeyError: purpose is not in priorities.
    """
    order = priorities[purpose]
    if not book_group.variants:
        return None
    for fmt in order:
        variant = book_group.variant_for_format(fmt)
        if variant is not None:
            return variant
    return book_group.variants[0]
