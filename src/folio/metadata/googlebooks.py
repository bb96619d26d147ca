# ABOUTME: Google Books metadata provider — the identifier-indexed variant.
# ABOUTME: Direct ISBN lookup at fixed 0.95 confidence, scored title/author search capped at 0.95.

import logging

from folio.metadata.googlebooks_parser import parse_volume_info, volume_items
from folio.metadata.http import FolioHttpClient, HttpClient, InvalidRequestError, NotFoundError
from folio.metadata.isbn import clean_isbn
from folio.metadata.scoring import score_search_result
from folio.metadata.types import MetadataRecord

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"
_MAX_RESULTS = 10

# Without an API key Google throttles aggressively, so pace more conservatively.
MIN_REQUEST_INTERVAL = 2.0
MIN_REQUEST_INTERVAL_WITH_KEY = 1.0
RETRY_DELAY = 5.0
MAX_ATTEMPTS = 3
# Google answers quota exhaustion with 403 as well as 429.
RATE_LIMIT_STATUSES = frozenset({403, 429})

ISBN_CONFIDENCE = 0.95
SEARCH_CONFIDENCE_CAP = 0.95
IDENTIFIER_BONUS = 0.05


def create_http_client(api_key: str | None = None, *, timeout: float = 30.0) -> FolioHttpClient:
    """HTTP client paced for Google Books, faster when an API key is configured."""
    interval = MIN_REQUEST_INTERVAL_WITH_KEY if api_key else MIN_REQUEST_INTERVAL
    return FolioHttpClient(
        min_request_interval=interval,
        max_attempts=MAX_ATTEMPTS,
        retry_delay=RETRY_DELAY,
        rate_limit_statuses=RATE_LIMIT_STATUSES,
        timeout=timeout,
    )


class GoogleBooksProvider:
    """Metadata provider backed by the Google Books volumes API.

    ISBN lookups are unambiguous and come back at a fixed high confidence;
    title/author searches are scored against the query. An API key is
    optional but raises Google's rate limits considerably.
    """

    def __init__(
        self, http_client: HttpClient | None = None, *, api_key: str | None = None
    ) -> None:
        self._api_key = api_key or None
        self._http = http_client if http_client is not None else create_http_client(self._api_key)

    @property
    def name(self) -> str:
        return "google_books"

    @property
    def has_api_key(self) -> bool:
        return self._api_key is not None

    def _params(self, query: str) -> dict[str, str]:
        params = {"q": query, "maxResults": str(_MAX_RESULTS), "printType": "books"}
        if self._api_key:
            params["key"] = self._api_key
        return params

    async def _volumes(self, query: str) -> list[dict]:
        try:
            data = await self._http.get(_VOLUMES_URL, params=self._params(query))
        except NotFoundError:
            return []
        items = volume_items(data)
        logger.info("Google Books: Found %s total items", data.get("totalItems", len(items)))
        return items

    async def fetch_by_identifier(self, identifier: str) -> MetadataRecord | None:
        """Look up a single volume by ISBN. Returns None when Google has no match."""
        isbn = clean_isbn(identifier)
        if not isbn:
            raise InvalidRequestError(f"Not an ISBN: {identifier!r}")

        for volume_info in await self._volumes(f"isbn:{isbn}"):
            return parse_volume_info(volume_info, confidence=ISBN_CONFIDENCE, source=self.name)
        return None

    async def fetch_by_title_author(
        self, title: str, author: str | None = None
    ) -> list[MetadataRecord]:
        """Search by title and optional author; results sorted by confidence."""
        title = title.strip()
        author = author.strip() if author else None

        query_parts: list[str] = []
        if title:
            query_parts.append(f"intitle:{title}")
        if author:
            query_parts.append(f"inauthor:{author}")
        if not query_parts:
            logger.warning("Google Books: Empty query - no title or author provided")
            return []

        query = "+".join(query_parts)
        logger.info("Google Books: Searching for %r", query)

        records: list[MetadataRecord] = []
        for volume_info in await self._volumes(query):
            confidence = score_search_result(
                volume_info.get("title") or "",
                volume_info.get("authors") or [],
                title,
                author,
                cap=SEARCH_CONFIDENCE_CAP,
                has_identifier=bool(volume_info.get("industryIdentifiers")),
                identifier_bonus=IDENTIFIER_BONUS,
            )
            record = parse_volume_info(volume_info, confidence=confidence, source=self.name)
            if record is not None:
                records.append(record)

        records.sort(key=lambda r: r.confidence, reverse=True)
        logger.info("Google Books: Returning %d metadata results", len(records))
        return records

    async def fetch_cover_image(self, identifier: str) -> str | None:
        record = await self.fetch_by_identifier(identifier)
        return record.cover_image_url if record else None

    async def aclose(self) -> None:
        if isinstance(self._http, FolioHttpClient):
            await self._http.aclose()
