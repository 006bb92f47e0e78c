# ABOUTME: The `booklookup enrich` command for merged multi-source ISBN lookup.
# ABOUTME: Queries every source at once and fills each field from the best source that has it.

import click

from booklookup.cli import common
from booklookup.cli.options import api_key_option, sources_option


@click.command()
@click.argument("isbn")
@sources_option
@api_key_option
def enrich(isbn: str, sources: tuple[str, ...], google_api_key: str | None) -> None:
    """Look up a book by ISBN in every source and merge the results."""
    lookup = common.build_lookup(sources, google_api_key)
    result = common.run_lookup(lookup, lambda lk: lk.lookup_by_isbn_enriched(isbn))
    common.print_result(result)
