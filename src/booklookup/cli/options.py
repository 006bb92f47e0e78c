# ABOUTME: Shared Click options for booklookup CLI commands.
# ABOUTME: Provides reusable decorators for source order and the Google Books API key.

import click

from booklookup.metadata.config import DEFAULT_SOURCE_ORDER


def _parse_sources(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> tuple[str, ...]:
    if not value:
        return DEFAULT_SOURCE_ORDER
    names = tuple(name.strip().lower() for name in value.split(",") if name.strip())
    unknown = [name for name in names if name not in DEFAULT_SOURCE_ORDER]
    if unknown:
        raise click.BadParameter(
            f"unknown source(s): {', '.join(unknown)}; "
            f"choose from {', '.join(DEFAULT_SOURCE_ORDER)}"
        )
    if len(set(names)) != len(names):
        raise click.BadParameter("each source may only be listed once")
    return names


sources_option = click.option(
    "--sources",
    "sources",
    default=None,
    callback=_parse_sources,
    help=f"Comma-separated source priority order (default: {','.join(DEFAULT_SOURCE_ORDER)}).",
)

api_key_option = click.option(
    "--google-api-key",
    "google_api_key",
    envvar="GOOGLE_BOOKS_API_KEY",
    default=None,
    help="Google Books API key (default: $GOOGLE_BOOKS_API_KEY).",
)
