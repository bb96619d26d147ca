# ABOUTME: Shared Click options for Folio CLI commands.
# ABOUTME: Provider configuration flags, JSON output, and provider construction from those flags.

import click

from folio.metadata.provider import MetadataProvider
from folio.metadata.registry import (
    DEFAULT_REQUEST_TIMEOUT,
    GOOGLE_BOOKS_API_KEY_ENV,
    ProviderSettings,
    create_providers,
)

google_api_key_option = click.option(
    "--google-api-key",
    envvar=GOOGLE_BOOKS_API_KEY_ENV,
    default=None,
    help=f"Google Books API key (env: {GOOGLE_BOOKS_API_KEY_ENV}). Enables Google Books first.",
)

include_google_option = click.option(
    "--google/--no-google",
    "include_google",
    default=False,
    help="Query Google Books without an API key (slower rate limit).",
)

timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0.0, min_open=True),
    default=None,
    help="Give up on a book after this many seconds.",
)

request_timeout_option = click.option(
    "--request-timeout",
    type=click.FloatRange(min=0.0, min_open=True),
    default=DEFAULT_REQUEST_TIMEOUT,
    show_default=True,
    help="Per-request HTTP timeout in seconds.",
)

json_option = click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results as JSON.",
)


def providers_from_options(
    api_key: str | None, include_google: bool, request_timeout: float
) -> list[MetadataProvider]:
    """Create the configured metadata providers in priority order."""
    settings = ProviderSettings(
        google_books_api_key=api_key or None,
        include_google_books=include_google,
        request_timeout=request_timeout,
    )
    return create_providers(settings)
