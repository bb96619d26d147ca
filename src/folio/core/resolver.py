# ABOUTME: Metadata resolver: queries providers in priority order and merges their results.
# ABOUTME: Provider failures are logged and skipped; timeouts and cancellation are surfaced distinctly.

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from folio.metadata.http import MetadataFetchError
from folio.metadata.merge import merge, seed_record
from folio.metadata.provider import MetadataProvider
from folio.metadata.types import MetadataRecord, ParsedFilename

logger = logging.getLogger(__name__)

Seed = ParsedFilename | MetadataRecord


class NoProvidersError(ValueError):
    """Raised when resolution is attempted with an empty provider list."""


class ResolutionCancelledError(Exception):
    """Raised when resolution exceeds its timeout."""


@dataclass(frozen=True)
class ResolutionOutcome:
    """What became of one book in a batch: its record, or the timeout that stopped it."""

    seed: MetadataRecord
    record: MetadataRecord | None = None
    error: ResolutionCancelledError | None = None

    @property
    def timed_out(self) -> bool:
        return self.error is not None

    @property
    def metadata(self) -> MetadataRecord:
        """The resolved record, or the seed when resolution timed out."""
        return self.record if self.record is not None else self.seed


def _as_record(seed: Seed) -> MetadataRecord:
    if isinstance(seed, MetadataRecord):
        return seed
    return seed_record(seed)


class MetadataResolver:
    """Enrich seed records by querying providers in order.

    For each provider: an identifier lookup when the running record knows
    an ISBN, otherwise (or when that finds nothing) a title/author search
    whose best candidate is merged in. Providers are tried in the given
    order and their results merge in that order, so the record returned
    for the same inputs and responses is always the same.
    """

    def __init__(
        self,
        providers: Sequence[MetadataProvider],
        *,
        timeout: float | None = None,
        min_confidence: float = 0.0,
    ) -> None:
        if not providers:
            raise NoProvidersError("At least one metadata provider is required")
        self._providers = list(providers)
        self._timeout = timeout
        self._min_confidence = min_confidence

    @property
    def providers(self) -> list[MetadataProvider]:
        return list(self._providers)

    async def resolve(self, seed: Seed) -> MetadataRecord:
        """Resolve one book.

        Raises:
            ResolutionCancelledError: The timeout expired first.
            asyncio.CancelledError: The calling task was cancelled.
        """
        record = _as_record(seed)
        if self._timeout is None:
            return await self._resolve(record)
        try:
            async with asyncio.timeout(self._timeout):
                return await self._resolve(record)
        except TimeoutError as exc:
            raise ResolutionCancelledError(
                f"Resolution of {record.title!r} timed out after {self._timeout}s"
            ) from exc

    async def resolve_many(self, seeds: Iterable[Seed]) -> list[ResolutionOutcome]:
        """Resolve several books concurrently, one task per book.

        Outcomes come back in input order. A book that times out is reported
        in its own outcome and never cancels the others; books only contend
        with each other at the providers' rate-limit gates.
        """
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(self._outcome(_as_record(seed))) for seed in seeds]
        return [task.result() for task in tasks]

    async def _outcome(self, seed: MetadataRecord) -> ResolutionOutcome:
        try:
            record = await self.resolve(seed)
        except ResolutionCancelledError as exc:
            logger.info("%s", exc)
            return ResolutionOutcome(seed=seed, error=exc)
        return ResolutionOutcome(seed=seed, record=record)

    async def _resolve(self, record: MetadataRecord) -> MetadataRecord:
        for provider in self._providers:
            try:
                result = await self._query(provider, record)
            except MetadataFetchError as exc:
                logger.warning("Provider %s failed: %s", provider.name, exc)
                continue
            if result is not None:
                logger.debug(
                    "Provider %s matched %r (confidence %.2f)",
                    provider.name,
                    result.title,
                    result.confidence,
                )
                record = merge(record, result)
        return record

    async def _query(
        self, provider: MetadataProvider, record: MetadataRecord
    ) -> MetadataRecord | None:
        identifier = record.identifier
        if identifier:
            found = await provider.fetch_by_identifier(identifier)
            if found is not None:
                return found

        candidates = await provider.fetch_by_title_author(record.title, record.primary_author)
        eligible = [c for c in candidates if c.confidence >= self._min_confidence]
        if not eligible:
            return None
        # First one wins ties, so provider ordering decides between equals.
        return max(eligible, key=lambda c: c.confidence)


async def resolve(
    seed: Seed,
    providers: Sequence[MetadataProvider],
    *,
    timeout: float | None = None,
    min_confidence: float = 0.0,
) -> MetadataRecord:
    """Resolve one seed against providers in priority order.

    Raises:
        NoProvidersError: providers is empty.
        ResolutionCancelledError: The timeout expired first.
    """
    resolver = MetadataResolver(providers, timeout=timeout, min_confidence=min_confidence)
    return await resolver.resolve(seed)


async def resolve_many(
    seeds: Iterable[Seed],
    providers: Sequence[MetadataProvider],
    *,
    timeout: float | None = None,
    min_confidence: float = 0.0,
) -> list[ResolutionOutcome]:
    """Resolve many seeds concurrently; one outcome per seed, in input order."""
    resolver = MetadataResolver(providers, timeout=timeout, min_confidence=min_confidence)
    return await resolver.resolve_many(seeds)
