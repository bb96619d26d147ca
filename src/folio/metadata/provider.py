# ABOUTME: MetadataProvider protocol defining the contract for metadata sources.
# ABOUTME: Google Books, Open Library, and test fakes all implement this async capability.

from typing import Protocol, runtime_checkable

from folio.metadata.types import MetadataRecord


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for metadata lookup services.

    Implementations provide identifier lookup, title/author search, and
    cover lookup. "No match" is an empty result; every other failure is
    raised as a MetadataFetchError subclass for the resolver to handle.
    """

    @property
    def name(self) -> str: ...

    async def fetch_by_identifier(self, identifier: str) -> MetadataRecord | None: ...

    async def fetch_by_title_author(
        self, title: str, author: str | None = None
    ) -> list[MetadataRecord]: ...

    async def fetch_cover_image(self, identifier: str) -> str | None: ...
