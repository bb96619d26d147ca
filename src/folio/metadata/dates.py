# ABOUTME: Lenient publication-date parsing for provider responses.
# ABOUTME: Tries an ordered list of formats and returns None when nothing fits.

from collections.abc import Sequence
from datetime import date, datetime

# Google Books: "2012-09-18", "2012-09", "2012".
GOOGLE_BOOKS_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y")

# Open Library editions: "2012-09-18", "September 18, 2012", "September 2012", "2012".
OPEN_LIBRARY_DATE_FORMATS = ("%Y-%m-%d", "%B %d, %Y", "%B %Y", "%Y")


def parse_date(value: str | None, formats: Sequence[str]) -> date | None:
    """Parse the first format that matches; missing parts default to the 1st."""
    if not value:
        return None
    text = value.strip()
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None
