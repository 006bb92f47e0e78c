# ABOUTME: ISBN waterfall lookup: tries sources in priority order and stops at the first success.
# ABOUTME: On exhaustion, optionally defers to the title/author resolver when a title is known.

import logging
from collections.abc import Sequence

from booklookup.metadata.isbn import validate_isbn
from booklookup.metadata.source import BookSource, SourceOutcome, attempt_isbn_lookup
from booklookup.metadata.title_search import TitleResolver
from booklookup.metadata.types import LookupResult

logger = logging.getLogger(__name__)

# Marks title-search entries in attempted_sources after an ISBN miss.
TITLE_ATTEMPT_SUFFIX = " (title)"


def _exhaustion_message(outcomes: list[SourceOutcome]) -> str:
    tried = ", ".join(outcome.source for outcome in outcomes)
    errors = "; ".join(f"{outcome.source}: {outcome.error}" for outcome in outcomes)
    return f"Book not found in any source. Tried: {tried}. Errors: {errors}"


class IsbnFallback:
    """Sequential ISBN lookup across sources in a fixed priority order.

    A source that raises, times out, or has no record is treated the same
    way: its reason is recorded and the next source is tried.
    """

    def __init__(
        self,
        sources: Sequence[BookSource],
        *,
        title_resolver: TitleResolver | None = None,
    ) -> None:
        if not sources:
            msg = "IsbnFallback needs at least one source"
            raise ValueError(msg)
        self._sources = list(sources)
        self._title_resolver = title_resolver

    async def lookup_by_isbn(
        self,
        isbn: str,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> LookupResult:
        """Look up a book by ISBN, falling back source by source.

        Args:
            isbn: ISBN-10 or ISBN-13, hyphens and spaces allowed.
            title: Optional title; enables the title/author search when
                every ISBN lookup fails.
            author: Optional author for the title/author search.

        Returns:
            A LookupResult; never raises for not-found or source errors.
            When the title search ran, attempted_sources lists the ISBN
            attempts first, then the title attempts as "<source> (title)".
        """
        primary = self._sources[0].name
        validation = validate_isbn(isbn)
        if not validation.valid:
            logger.debug("Rejected ISBN %r: %s", isbn, validation.error)
            return LookupResult.failed(validation.error or "Invalid ISBN", source=primary)

        outcomes: list[SourceOutcome] = []
        for index, source in enumerate(self._sources):
            outcome = await attempt_isbn_lookup(source, validation.cleaned)
            outcomes.append(outcome)
            if outcome.data is not None:
                logger.info("Found ISBN %s in %s", validation.cleaned, source.name)
                return LookupResult.found(
                    outcome.data,
                    source.name,
                    [o.source for o in outcomes],
                    fallback_used=index != 0,
                )

        attempted = [o.source for o in outcomes]
        message = _exhaustion_message(outcomes)

        if title and title.strip() and self._title_resolver is not None:
            logger.info("ISBN %s not found by ISBN, trying title search", validation.cleaned)
            by_title = await self._title_resolver.lookup_by_title(title, author)
            combined = attempted + [
                f"{name}{TITLE_ATTEMPT_SUFFIX}" for name in by_title.attempted_sources
            ]
            if by_title.success and by_title.data is not None:
                return LookupResult.found(
                    by_title.data, by_title.source, combined, fallback_used=True
                )
            return LookupResult.failed(
                f"{message}. {by_title.error}", source=primary, attempted_sources=combined
            )

        logger.warning("ISBN %s not found in any source", validation.cleaned)
        return LookupResult.failed(message, source=primary, attempted_sources=attempted)
