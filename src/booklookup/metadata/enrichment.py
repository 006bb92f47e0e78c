# ABOUTME: Enriched ISBN lookup: queries every source concurrently and merges records per field.
# ABOUTME: Merge order is the configured priority order, never completion order.

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import fields, replace

from booklookup.metadata.isbn import validate_isbn
from booklookup.metadata.source import BookSource, attempt_isbn_lookup
from booklookup.metadata.types import BookData, LookupResult

logger = logging.getLogger(__name__)

NOT_FOUND_ANYWHERE = "Book not found in any source"


def _is_empty(record: BookData, name: str) -> bool:
    if name == "author":
        return not record.has_known_author
    value = getattr(record, name)
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, tuple):
        return len(value) == 0
    return False


def merge_book_data(records: Sequence[BookData]) -> BookData:
    """Merge records, highest priority first, keeping the first non-empty value per field.

    Subjects are taken whole from the first record that has any; lists from
    different catalogs are not concatenated. The author placeholder counts
    as empty, so a later source's real author replaces it.
    """
    if not records:
        msg = "merge_book_data needs at least one record"
        raise ValueError(msg)

    merged = records[0]
    updates: dict[str, object] = {}
    for f in fields(BookData):
        if not _is_empty(merged, f.name):
            continue
        for record in records[1:]:
            if not _is_empty(record, f.name):
                updates[f.name] = getattr(record, f.name)
                break
    return replace(merged, **updates) if updates else merged


class IsbnEnrichment:
    """Concurrent ISBN lookup that combines every source's answer.

    Slower than the waterfall (it waits for the slowest source) but yields
    the most complete record. Individual failures never abort the others.
    """

    def __init__(self, sources: Sequence[BookSource]) -> None:
        if not sources:
            msg = "IsbnEnrichment needs at least one source"
            raise ValueError(msg)
        self._sources = list(sources)

    async def lookup_by_isbn_enriched(self, isbn: str) -> LookupResult:
        """Query all sources for the ISBN at once and merge what comes back."""
        names = [source.name for source in self._sources]
        validation = validate_isbn(isbn)
        if not validation.valid:
            logger.debug("Rejected ISBN %r: %s", isbn, validation.error)
            return LookupResult.failed(validation.error or "Invalid ISBN", source=names[0])

        # attempt_isbn_lookup never raises, so gather settles every call.
        outcomes = await asyncio.gather(
            *(attempt_isbn_lookup(source, validation.cleaned) for source in self._sources)
        )
        found = [outcome for outcome in outcomes if outcome.data is not None]

        if not found:
            logger.warning("ISBN %s not found in any source (enriched)", validation.cleaned)
            return LookupResult.failed(NOT_FOUND_ANYWHERE, source=names[0], attempted_sources=names)

        merged = merge_book_data([outcome.data for outcome in found if outcome.data is not None])
        logger.info(
            "Enriched ISBN %s from %s",
            validation.cleaned,
            ", ".join(outcome.source for outcome in found),
        )
        return LookupResult.found(
            merged, found[0].source, names, fallback_used=len(found) > 1
        )
