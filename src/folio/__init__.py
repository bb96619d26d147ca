# ABOUTME: Folio - ebook metadata resolution and identity deduplication.
# ABOUTME: Re-exports the library surface: parse, resolve, group_key, group, preferred_format.

from folio._version import __version__
from folio.core.grouping import BookGroup, BookVariant, group, group_key, preferred_format
from folio.core.resolver import ResolutionOutcome, resolve, resolve_many
from folio.metadata.filename import parse
from folio.metadata.provider import MetadataProvider
from folio.metadata.types import MetadataRecord, ParsedFilename

__all__ = [
    "BookGroup",
    "BookVariant",
    "MetadataProvider",
    "MetadataRecord",
    "ParsedFilename",
    "ResolutionOutcome",
    "__version__",
    "group",
    "group_key",
    "parse",
    "preferred_format",
    "resolve",
    "resolve_many",
]
