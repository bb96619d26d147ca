# ABOUTME: End-to-end catalog pipeline: files to seeds to resolved records to grouped books.
# ABOUTME: Resolution is optional so a library can be grouped offline from filenames alone.

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from folio.core.grouping import BookGroup, BookVariant, group
from folio.core.resolver import MetadataResolver, ResolutionOutcome
from folio.core.variants import seed_for_file, variant_from_file
from folio.metadata.provider import MetadataProvider

logger = logging.getLogger(__name__)


@dataclass
class CatalogResult:
    """Variants built from the scanned files and the groups they form.

    Files whose resolution timed out are still grouped by their seed and
    listed in ``timed_out`` with the reason.
    """

    variants: list[BookVariant]
    groups: list[BookGroup]
    timed_out: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.variants)


async def resolve_files(
    paths: Sequence[Path],
    providers: Sequence[MetadataProvider],
    *,
    timeout: float | None = None,
    min_confidence: float = 0.0,
) -> list[ResolutionOutcome]:
    """Seed each file and resolve all of them concurrently, in input order."""
    seeds = [seed_for_file(path) for path in paths]
    resolver = MetadataResolver(providers, timeout=timeout, min_confidence=min_confidence)
    return await resolver.resolve_many(seeds)


async def build_catalog(
    paths: Sequence[Path],
    providers: Sequence[MetadataProvider] | None = None,
    *,
    timeout: float | None = None,
    min_confidence: float = 0.0,
) -> CatalogResult:
    """Turn ebook files into grouped books.

    With no providers the filename (and embedded ISBN) seeds are grouped
    as they are.
    """
    timed_out: list[tuple[Path, str]] = []
    if providers:
        outcomes = await resolve_files(
            paths, providers, timeout=timeout, min_confidence=min_confidence
        )
        records = [outcome.metadata for outcome in outcomes]
        timed_out = [
            (path, str(outcome.error))
            for path, outcome in zip(paths, outcomes, strict=True)
            if outcome.timed_out
        ]
    else:
        records = [seed_for_file(path) for path in paths]

    variants = [
        variant_from_file(path, record) for path, record in zip(paths, records, strict=True)
    ]
    groups = group(variants)
    logger.info("Grouped %d files into %d books", len(variants), len(groups))
    return CatalogResult(variants=variants, groups=groups, timed_out=timed_out)
