# ABOUTME: Metadata package: filename parsing, providers, scoring, and record merging.
# ABOUTME: Exports the MetadataRecord value object and the provider contract.

from folio.metadata.filename import FilenameParser, looks_like_author_name, parse
from folio.metadata.merge import merge, seed_record
from folio.metadata.provider import MetadataProvider
from folio.metadata.types import MetadataRecord, ParsedFilename

__all__ = [
    "FilenameParser",
    "MetadataProvider",
    "MetadataRecord",
    "ParsedFilename",
    "looks_like_author_name",
    "merge",
    "parse",
    "seed_record",
]
