# ABOUTME: ISBN cleanup, checksum validation, and ISBN-10 to ISBN-13 conversion.
# ABOUTME: Used by providers to normalize identifiers before lookup and to sort 10/13 forms.

import re

_NON_ISBN_RE = re.compile(r"[^0-9X]")


def clean_isbn(isbn: str) -> str:
    """Strip hyphens, spaces and any other non-ISBN characters; uppercase the X."""
    return _NON_ISBN_RE.sub("", isbn.upper())


def is_valid_isbn10(isbn: str) -> bool:
    """Check an ISBN-10 checksum. Only the final character may be 'X'."""
    isbn = clean_isbn(isbn)
    if len(isbn) != 10:
        return False

    total = 0
    for index, char in enumerate(isbn):
        weight = 10 - index
        if char == "X":
            if index != 9:
                return False
            total += 10 * weight
        else:
            total += int(char) * weight
    return total % 11 == 0


def is_valid_isbn13(isbn: str) -> bool:
    """Check an ISBN-13 checksum (alternating 1/3 weights)."""
    isbn = clean_isbn(isbn)
    if len(isbn) != 13 or not isbn.isdigit():
        return False
    total = sum(int(char) * (1 if index % 2 == 0 else 3) for index, char in enumerate(isbn))
    return total % 10 == 0


def is_valid_isbn(isbn: str) -> bool:
    """True for a checksum-valid ISBN-10 or ISBN-13."""
    cleaned = clean_isbn(isbn)
    if len(cleaned) == 10:
        return is_valid_isbn10(cleaned)
    if len(cleaned) == 13:
        return is_valid_isbn13(cleaned)
    return False


def isbn10_to_isbn13(isbn10: str) -> str | None:
    """Convert a valid ISBN-10 to its 978-prefixed ISBN-13 form.

    Returns None when the input is not a valid ISBN-10.
    """
    cleaned = clean_isbn(isbn10)
    if not is_valid_isbn10(cleaned):
        return None

    prefix = "978" + cleaned[:-1]
    total = sum(int(char) * (1 if index % 2 == 0 else 3) for index, char in enumerate(prefix))
    check_digit = (10 - total % 10) % 10
    return f"{prefix}{check_digit}"


def split_isbn(isbn: str) -> tuple[str | None, str | None]:
    """Sort a raw identifier into (isbn10, isbn13) slots by its cleaned length."""
    cleaned = clean_isbn(isbn)
    if len(cleaned) == 10:
        return cleaned, None
    if len(cleaned) == 13:
        return None, cleaned
    return None, None
