# ABOUTME: Canned Open Library API response fixtures for testing.
# ABOUTME: Provides realistic JSON dicts matching OL edition, author, and search response shapes.

ISBN_RESPONSE = {
    "title": "The Name of the Rose",
    "authors": [{"key": "/authors/OL123A"}],
    "publishers": ["Harcourt"],
    "publish_date": "September 1983",
    "isbn_13": ["9780156001317"],
    "isbn_10": ["0156001314"],
    "number_of_pages": 512,
    "languages": [{"key": "/languages/eng"}],
    "covers": [240727],
    "subjects": ["Mystery", "Historical fiction"],
    "description": {
        "type": "/type/text",
        "value": "A mystery set in a medieval Italian monastery.",
    },
    "works": [{"key": "/works/OL456W"}],
}

ISBN_RESPONSE_TWO_AUTHORS = {
    "title": "Good Omens",
    "authors": [{"key": "/authors/OL1A"}, {"key": "/authors/OL2A"}],
    "publishers": ["Workman"],
    "publish_date": "1990",
    "description": "The world will end on Saturday.",
}

AUTHOR_RESPONSE = {
    "key": "/authors/OL123A",
    "name": "Umberto Eco",
    "birth_date": "5 January 1932",
    "personal_name": "Umberto Eco",
}

AUTHOR_PRATCHETT = {"key": "/authors/OL1A", "name": "Terry Pratchett"}

SEARCH_RESPONSE = {
    "numFound": 2,
    "start": 0,
    "docs": [
        {
            "key": "/works/OL789W",
            "title": "The Name of the Rose: including Postscript",
            "author_name": ["Umberto Eco"],
            "isbn": ["9780151446476"],
            "language": ["eng"],
            "publisher": ["Harcourt Brace Jovanovich"],
            "first_publish_year": 1983,
        },
        {
            "key": "/works/OL456W",
            "title": "The Name of the Rose",
            "author_name": ["Umberto Eco"],
            "isbn": ["9780156001317", "0156001314"],
            "language": ["eng"],
            "publisher": ["Harcourt"],
            "cover_i": 240727,
            "first_publish_year": 1980,
            "number_of_pages_median": 536,
            "subject": [f"Subject {i}" for i in range(15)],
        },
    ],
}

SEARCH_RESPONSE_ISBN = {
    "numFound": 2,
    "start": 0,
    "docs": [
        {
            "key": "/works/OL1W",
            "title": "Unrelated Book",
            "author_name": ["Someone Else"],
            "isbn": ["9780000000002"],
        },
        {
            "key": "/works/OL893415W",
            "title": "Dune",
            "author_name": ["Frank Herbert"],
            "isbn": ["0-441-17271-7", "978-0-441-17271-9"],
            "publisher": ["Ace Books"],
            "first_publish_year": 1965,
        },
    ],
}

SEARCH_RESPONSE_NO_TITLE = {
    "numFound": 1,
    "start": 0,
    "docs": [{"key": "/works/OL0W", "author_name": ["Anonymous"]}],
}

SEARCH_RESPONSE_EMPTY = {
    "numFound": 0,
    "start": 0,
    "docs": [],
}
