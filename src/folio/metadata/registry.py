# ABOUTME: Provider configuration and the priority-ordered provider factory.
# ABOUTME: Settings come from keyword arguments or the FOLIO_GOOGLE_BOOKS_API_KEY environment variable.

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass

from folio.metadata.googlebooks import GoogleBooksProvider
from folio.metadata.googlebooks import create_http_client as create_google_http_client
from folio.metadata.openlibrary import OpenLibraryProvider
from folio.metadata.openlibrary import create_http_client as create_openlibrary_http_client
from folio.metadata.provider import MetadataProvider

logger = logging.getLogger(__name__)

GOOGLE_BOOKS_API_KEY_ENV = "FOLIO_GOOGLE_BOOKS_API_KEY"

DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class ProviderSettings:
    """Which providers to build and how."""

    google_books_api_key: str | None = None
    include_google_books: bool = False
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_env(
        cls,
        *,
        include_google_books: bool = False,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> "ProviderSettings":
        """Settings with the Google Books API key taken from the environment."""
        key = os.environ.get(GOOGLE_BOOKS_API_KEY_ENV, "").strip() or None
        return cls(
            google_books_api_key=key,
            include_google_books=include_google_books,
            request_timeout=request_timeout,
        )


def _google_books(settings: ProviderSettings) -> GoogleBooksProvider:
    http = create_google_http_client(
        settings.google_books_api_key, timeout=settings.request_timeout
    )
    return GoogleBooksProvider(http_client=http, api_key=settings.google_books_api_key)


def _open_library(settings: ProviderSettings) -> OpenLibraryProvider:
    http = create_openlibrary_http_client(timeout=settings.request_timeout)
    return OpenLibraryProvider(http_client=http)


def create_providers(settings: ProviderSettings | None = None) -> list[MetadataProvider]:
    """Build providers in priority order.

    With a Google Books API key, Google is queried first because its ISBN
    index is the most complete. Without one, Open Library leads and Google
    is only appended (at its slower unauthenticated pace) when
    include_google_books is set.
    """
    settings = settings if settings is not None else ProviderSettings.from_env()

    providers: list[MetadataProvider] = []
    if settings.google_books_api_key:
        providers.append(_google_books(settings))
        providers.append(_open_library(settings))
    else:
        providers.append(_open_library(settings))
        if settings.include_google_books:
            providers.append(_google_books(settings))

    logger.debug("Configured providers: %s", ", ".join(p.name for p in providers))
    return providers


async def close_providers(providers: Iterable[MetadataProvider]) -> None:
    """Release HTTP connections held by providers that own a client."""
    for provider in providers:
        aclose = getattr(provider, "aclose", None)
        if aclose is not None:
            await aclose()
