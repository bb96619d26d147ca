# ABOUTME: Seed records and the confidence-weighted merge used by the resolver.
# ABOUTME: merge() is order-sensitive: the running record keeps its scalar fields.

from dataclasses import replace

from folio.metadata.types import MetadataRecord, ParsedFilename

SEED_CONFIDENCE = 0.2
SEED_SOURCE = "filename"

_SCALAR_FIELDS = (
    "isbn",
    "isbn13",
    "publisher",
    "published_date",
    "summary",
    "page_count",
    "language",
    "cover_image_url",
    "series",
    "series_index",
)


def seed_record(parsed: ParsedFilename) -> MetadataRecord:
    """Low-confidence record built from a parsed filename."""
    return MetadataRecord(
        title=parsed.title,
        authors=(parsed.author,) if parsed.author else (),
        confidence=SEED_CONFIDENCE,
        source=SEED_SOURCE,
    )


def merge(current: MetadataRecord, incoming: MetadataRecord) -> MetadataRecord:
    """Fold an incoming provider result into the running record.

    Not commutative; argument order matters:

    - title, confidence and source come from ``incoming`` only when its
      confidence is strictly higher;
    - authors and tags are replaced by ``incoming``'s when it has any;
    - every other optional field keeps ``current``'s value when set and is
      filled from ``incoming`` otherwise.

    Neither input is modified.
    """
    changes: dict[str, object] = {}

    if incoming.confidence > current.confidence:
        changes["title"] = incoming.title
        changes["confidence"] = incoming.confidence
        changes["source"] = incoming.source

    if incoming.authors:
        changes["authors"] = incoming.authors
    if incoming.tags:
        changes["tags"] = incoming.tags

    for name in _SCALAR_FIELDS:
        if getattr(current, name) is None:
            value = getattr(incoming, name)
            if value is not None:
                changes[name] = value

    return replace(current, **changes)
