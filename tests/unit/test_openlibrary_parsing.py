# ABOUTME: Unit tests for Open Library response parsing and cover URL builders.
# ABOUTME: Uses canned edition and search-doc fixtures to verify MetadataRecord construction.

from datetime import date

from folio.metadata.openlibrary_parser import (
    author_keys,
    build_cover_url,
    build_cover_url_by_id,
    build_cover_url_by_olid,
    parse_description,
    parse_isbn_response,
    parse_search_doc,
)
from tests.fixtures.openlibrary_responses import (
    ISBN_RESPONSE,
    ISBN_RESPONSE_TWO_AUTHORS,
    SEARCH_RESPONSE,
)


class TestCoverUrls:
    """Tests for the cover URL builders."""

    def test_by_isbn_defaults_to_large(self) -> None:
        assert build_cover_url("978-0-441-17271-9") == (
            "https://covers.openlibrary.org/b/isbn/9780441172719-L.jpg"
        )

    def test_sizes(self) -> None:
        assert build_cover_url("0441172717", "S").endswith("/isbn/0441172717-S.jpg")
        assert build_cover_url_by_olid("OL7353617M", "M") == (
            "https://covers.openlibrary.org/b/olid/OL7353617M-M.jpg"
        )
        assert build_cover_url_by_id(240727) == "https://covers.openlibrary.org/b/id/240727-L.jpg"


class TestParseDescription:
    """Tests for the two description shapes."""

    def test_string(self) -> None:
        assert parse_description({"description": "Plain."}) == "Plain."

    def test_typed_value(self) -> None:
        assert parse_description({"description": {"type": "/type/text", "value": "Typed."}}) == (
            "Typed."
        )

    def test_missing(self) -> None:
        assert parse_description({}) is None


class TestParseIsbnResponse:
    """Tests for parse_isbn_response."""

    def test_full_edition(self) -> None:
        record = parse_isbn_response(
            ISBN_RESPONSE,
            "978-0-15-600131-7",
            authors=["Umberto Eco"],
            confidence=0.9,
            source="open_library",
        )
        assert record is not None
        assert record.title == "The Name of the Rose"
        assert record.authors == ("Umberto Eco",)
        assert record.isbn13 == "9780156001317"
        assert record.isbn is None
        assert record.publisher == "Harcourt"
        assert record.published_date == date(1983, 9, 1)
        assert record.page_count == 512
        assert record.summary == "A mystery set in a medieval Italian monastery."
        assert record.tags == ("Mystery", "Historical fiction")
        assert record.cover_image_url == "https://covers.openlibrary.org/b/isbn/9780156001317-L.jpg"
        assert record.confidence == 0.9
        assert record.source == "open_library"

    def test_isbn10_goes_to_isbn_slot(self) -> None:
        record = parse_isbn_response(
            ISBN_RESPONSE, "0156001314", authors=[], confidence=0.9, source="open_library"
        )
        assert record is not None
        assert record.isbn == "0156001314"
        assert record.isbn13 is None

    def test_string_description_and_year_date(self) -> None:
        record = parse_isbn_response(
            ISBN_RESPONSE_TWO_AUTHORS, "0000000000", authors=[], confidence=0.9, source="ol"
        )
        assert record is not None
        assert record.summary == "The world will end on Saturday."
        assert record.published_date == date(1990, 1, 1)

    def test_unparseable_date_is_none(self) -> None:
        data = {**ISBN_RESPONSE, "publish_date": "sometime in the eighties"}
        record = parse_isbn_response(data, "0156001314", authors=[], confidence=0.9, source="ol")
        assert record is not None
        assert record.published_date is None

    def test_missing_title_returns_none(self) -> None:
        record = parse_isbn_response({}, "0156001314", authors=[], confidence=0.9, source="ol")
        assert record is None

    def test_author_keys(self) -> None:
        assert author_keys(ISBN_RESPONSE_TWO_AUTHORS) == ["/authors/OL1A", "/authors/OL2A"]
        assert author_keys({"authors": [{"name": "no key"}, "junk"]}) == []


class TestParseSearchDoc:
    """Tests for parse_search_doc."""

    def test_full_doc(self) -> None:
        doc = SEARCH_RESPONSE["docs"][1]
        record = parse_search_doc(doc, confidence=0.85, source="open_library")
        assert record is not None
        assert record.title == "The Name of the Rose"
        assert record.authors == ("Umberto Eco",)
        assert record.isbn == "0156001314"
        assert record.isbn13 == "9780156001317"
        assert record.publisher == "Harcourt"
        assert record.language == "eng"
        assert record.published_date == date(1980, 1, 1)
        assert record.page_count == 536
        assert record.cover_image_url == "https://covers.openlibrary.org/b/id/240727-L.jpg"
        assert record.summary is None

    def test_tags_limited_to_ten(self) -> None:
        record = parse_search_doc(SEARCH_RESPONSE["docs"][1], confidence=0.85, source="ol")
        assert record is not None
        assert len(record.tags) == 10
        assert record.tags[0] == "Subject 0"

    def test_cover_falls_back_to_isbn(self) -> None:
        record = parse_search_doc(SEARCH_RESPONSE["docs"][0], confidence=0.85, source="ol")
        assert record is not None
        assert record.cover_image_url == "https://covers.openlibrary.org/b/isbn/9780151446476-L.jpg"

    def test_doc_without_isbn_or_cover(self) -> None:
        record = parse_search_doc({"title": "Beowulf"}, confidence=0.5, source="ol")
        assert record is not None
        assert record.cover_image_url is None
        assert record.isbn is None
        assert record.isbn13 is None
        assert record.authors == ()

    def test_doc_without_title_is_skipped(self) -> None:
        assert parse_search_doc({"author_name": ["Anonymous"]}, confidence=0.5, source="ol") is None
