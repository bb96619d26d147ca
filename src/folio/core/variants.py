# ABOUTME: Builds seeds and BookVariants from ebook files on disk.
# ABOUTME: Discovers supported files, hashes content for identity, and reads embedded ISBNs.

import hashlib
import logging
from dataclasses import replace
from pathlib import Path

from folio.core.grouping import BookVariant
from folio.formats.epub import EpubReadError, read_epub_isbn
from folio.metadata.filename import parse
from folio.metadata.isbn import split_isbn
from folio.metadata.merge import seed_record
from folio.metadata.types import MetadataRecord

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS: frozenset[str] = frozenset(
    {"epub", "mobi", "azw3", "pdf", "cbz", "cbr", "fb2", "lit", "pdb", "txt", "rtf", "docx"}
)

_CHUNK_SIZE = 65536  # 64 KB


def file_format(path: Path) -> str:
    """Lowercase extension without the dot ("" when there is none)."""
    return path.suffix.lower().lstrip(".")


def is_supported(path: Path) -> bool:
    return file_format(path) in SUPPORTED_FORMATS


def find_ebooks(path: Path) -> list[Path]:
    """Supported ebook files at a path: the file itself, or a sorted recursive walk."""
    if path.is_file():
        return [path] if is_supported(path) else []
    return sorted(p for p in path.rglob("*") if p.is_file() and is_supported(p))


def compute_file_hash(path: Path) -> str:
    """Compute the SHA-256 hash of a file.

    Reads the file in 64KB chunks to avoid loading large files entirely
    into memory.

    Returns:
        Lowercase hex digest string (64 characters).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            hasher.update(chunk)
    return hasher.hexdigest()


def seed_for_file(path: Path) -> MetadataRecord:
    """Starting record for a file: parsed filename plus any embedded EPUB ISBN.

    Unreadable EPUBs are logged and the filename seed is returned alone.
    """
    record = seed_record(parse(path.name))
    if file_format(path) != "epub":
        return record

    try:
        isbn = read_epub_isbn(path)
    except EpubReadError as exc:
        logger.warning("Could not read embedded metadata: %s", exc)
        return record

    if not isbn:
        return record
    isbn10, isbn13 = split_isbn(isbn)
    return replace(record, isbn=isbn10, isbn13=isbn13)


def variant_from_file(path: Path, metadata: MetadataRecord) -> BookVariant:
    """Describe one file as a BookVariant keyed by its content hash."""
    return BookVariant(
        identity_key=compute_file_hash(path),
        format=file_format(path),
        file_size_bytes=path.stat().st_size,
        metadata=metadata,
        path=path,
    )
