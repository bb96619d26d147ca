# ABOUTME: Single source of the package version.
# ABOUTME: Used for the HTTP User-Agent header and packaging metadata.

__version__ = "0.1.0"
