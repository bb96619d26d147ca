# ABOUTME: Open Library metadata provider built on the ISBN and full-text search endpoints.
# ABOUTME: ISBN fast path with search fallback, title/author search capped at 0.85 confidence.

import logging
import re

from folio.metadata.http import (
    FolioHttpClient,
    HttpClient,
    InvalidRequestError,
    MetadataFetchError,
    NotFoundError,
)
from folio.metadata.isbn import clean_isbn
from folio.metadata.openlibrary_parser import (
    author_keys,
    build_cover_url,
    parse_author_name,
    parse_isbn_response,
    parse_search_doc,
)
from folio.metadata.scoring import score_search_result
from folio.metadata.types import MetadataRecord

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
_SEARCH_LIMIT = 10
_SEARCH_FIELDS = (
    "key,title,author_name,author_key,first_publish_year,publisher,isbn,"
    "cover_i,number_of_pages_median,language,subject"
)

# Open Library asks for at most one request per second.
MIN_REQUEST_INTERVAL = 1.0
RETRY_DELAY = 2.0
MAX_ATTEMPTS = 3

ISBN_CONFIDENCE = 0.90
# Search matching is fuzzier than Google's, so its ceiling is lower.
SEARCH_CONFIDENCE_CAP = 0.85

# Matches a colon followed by a space and remaining text (subtitle pattern).
_SUBTITLE_RE = re.compile(r"\s*:\s+.+$")


def _strip_subtitle(title: str) -> str | None:
    """Remove subtitle from a title string (text after ": ").

    Returns the stripped title, or None if no subtitle was found or
    stripping would produce an identical or empty string.
    """
    stripped = _SUBTITLE_RE.sub("", title).strip()
    if stripped and stripped != title.strip():
        return stripped
    return None


def create_http_client(*, timeout: float = 30.0) -> FolioHttpClient:
    """HTTP client tuned to Open Library's published rate limits."""
    return FolioHttpClient(
        min_request_interval=MIN_REQUEST_INTERVAL,
        max_attempts=MAX_ATTEMPTS,
        retry_delay=RETRY_DELAY,
        timeout=timeout,
    )


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library API.

    Identifier lookups try the ISBN endpoint first and fall back to a
    full-text search for the identifier when that finds nothing. Title and
    author searches use the general `q` parameter. Uses a dependency-injected
    HttpClient so each instance owns its own rate-limit state.
    """

    def __init__(self, http_client: HttpClient | None = None) -> None:
        self._http = http_client if http_client is not None else create_http_client()

    @property
    def name(self) -> str:
        return "open_library"

    async def fetch_by_identifier(self, identifier: str) -> MetadataRecord | None:
        """Look up a book by ISBN, falling back to search when the fast path is empty."""
        isbn = clean_isbn(identifier)
        if not isbn:
            raise InvalidRequestError(f"Not an ISBN: {identifier!r}")

        try:
            data = await self._http.get(f"{_OL_BASE}/isbn/{isbn}.json")
        except NotFoundError:
            data = {}

        if data.get("title"):
            authors = await self._fetch_author_names(data)
            return parse_isbn_response(
                data, isbn, authors=authors, confidence=ISBN_CONFIDENCE, source=self.name
            )

        logger.info("Open Library: ISBN %s not indexed, falling back to search", isbn)
        return await self._search_identifier(isbn)

    async def fetch_by_title_author(
        self, title: str, author: str | None = None
    ) -> list[MetadataRecord]:
        """Search Open Library by title and optional author.

        If the search returns nothing and the title has a subtitle (text
        after ": "), retries once with the subtitle stripped. Returns records
        sorted by confidence, highest first.
        """
        title = title.strip()
        author = author.strip() if author else None
        if not title:
            logger.warning("Open Library: Empty query - no title provided")
            return []

        records = await self._search(title, author)
        if not records:
            stripped = _strip_subtitle(title)
            if stripped:
                records = await self._search(stripped, author)
        return records

    async def fetch_cover_image(self, identifier: str) -> str | None:
        """Cover URLs are derived from the ISBN; no request is made."""
        isbn = clean_isbn(identifier)
        return build_cover_url(isbn) if isbn else None

    async def aclose(self) -> None:
        if isinstance(self._http, FolioHttpClient):
            await self._http.aclose()

    async def _search(self, title: str, author: str | None) -> list[MetadataRecord]:
        query = f"{title} {author}" if author else title
        logger.info("Open Library: Searching for q=%r", query)
        docs = await self._search_docs(query)

        records: list[MetadataRecord] = []
        for doc in docs:
            confidence = score_search_result(
                doc.get("title") or "",
                doc.get("author_name") or [],
                title,
                author,
                cap=SEARCH_CONFIDENCE_CAP,
            )
            record = parse_search_doc(doc, confidence=confidence, source=self.name)
            if record is not None:
                records.append(record)

        records.sort(key=lambda r: r.confidence, reverse=True)
        logger.info("Open Library: Returning %d metadata results", len(records))
        return records

    async def _search_identifier(self, isbn: str) -> MetadataRecord | None:
        """Search by raw ISBN; accept only a doc that actually lists it."""
        for doc in await self._search_docs(isbn):
            if isbn not in {clean_isbn(raw) for raw in doc.get("isbn") or []}:
                continue
            record = parse_search_doc(doc, confidence=SEARCH_CONFIDENCE_CAP, source=self.name)
            if record is not None:
                return record
        return None

    async def _search_docs(self, query: str) -> list[dict]:
        params = {"q": query, "limit": str(_SEARCH_LIMIT), "fields": _SEARCH_FIELDS}
        try:
            data = await self._http.get(f"{_OL_BASE}/search.json", params=params)
        except NotFoundError:
            return []
        docs = data.get("docs") or []
        logger.debug("Open Library: %d docs (numFound=%s)", len(docs), data.get("numFound"))
        return [doc for doc in docs if isinstance(doc, dict)]

    async def _fetch_author_names(self, edition: dict) -> list[str]:
        """Resolve author keys to names. Authors that fail to resolve are skipped."""
        names: list[str] = []
        for key in author_keys(edition):
            try:
                author_data = await self._http.get(f"{_OL_BASE}{key}.json")
            except MetadataFetchError as exc:
                logger.debug("Open Library: author %s lookup failed: %s", key, exc)
                continue
            name = parse_author_name(author_data)
            if name:
                names.append(name)
        return names
