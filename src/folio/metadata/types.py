# ABOUTME: Core metadata value objects for the resolution engine.
# ABOUTME: MetadataRecord is the interchange format between parser, providers, resolver, and grouper.

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ParsedFilename:
    """Best-effort (title, author) pair extracted from a raw filename.

    Never persisted as-is; it only seeds metadata resolution.
    """

    title: str
    author: str | None = None


@dataclass(frozen=True)
class MetadataRecord:
    """Structured metadata for one book, produced by exactly one source.

    Records are immutable: the resolver builds new records with merge()
    instead of editing existing ones. Every optional field uses None for
    "unknown" so gap-filling can tell absence from an empty value.
    """

    title: str
    authors: tuple[str, ...] = ()
    isbn: str | None = None
    isbn13: str | None = None
    publisher: str | None = None
    published_date: date | None = None
    summary: str | None = None
    page_count: int | None = None
    language: str | None = None
    cover_image_url: str | None = None
    series: str | None = None
    series_index: float | None = None
    tags: tuple[str, ...] = ()
    confidence: float = 0.0
    source: str = "unknown"

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            msg = f"confidence must be between 0.0 and 1.0, got {self.confidence}"
            raise ValueError(msg)
        # Accept lists from callers but store tuples so records stay hashable.
        object.__setattr__(self, "authors", tuple(self.authors))
        object.__setattr__(self, "tags", tuple(self.tags))

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""

    @property
    def primary_author(self) -> str | None:
        """First listed author, used as the author term in searches."""
        return self.authors[0] if self.authors else None

    @property
    def identifier(self) -> str | None:
        """Best known identifier for direct lookup: ISBN-13, then ISBN-10."""
        return self.isbn13 or self.isbn or None

    @property
    def has_isbn(self) -> bool:
        return bool(self.isbn13 or self.isbn)
