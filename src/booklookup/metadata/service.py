# ABOUTME: BookLookup facade wiring the waterfall, enrichment, and title strategies together.
# ABOUTME: create_default_lookup builds the Google Books, Open Library, and WorldCat sources.

import logging
from collections.abc import Sequence

from booklookup.metadata.cache import BoundedCache
from booklookup.metadata.config import (
    GOOGLE_BOOKS,
    OPEN_LIBRARY,
    WORLDCAT,
    LookupConfig,
)
from booklookup.metadata.enrichment import IsbnEnrichment
from booklookup.metadata.fallback import IsbnFallback
from booklookup.metadata.googlebooks import GoogleBooksSource
from booklookup.metadata.http import AsyncHttpClient, HttpClient
from booklookup.metadata.openlibrary import OpenLibrarySource
from booklookup.metadata.source import BookSource
from booklookup.metadata.title_search import TitleResolver
from booklookup.metadata.types import LookupResult
from booklookup.metadata.worldcat import WorldCatSource

logger = logging.getLogger(__name__)

_KNOWN_SOURCES = (GOOGLE_BOOKS, OPEN_LIBRARY, WORLDCAT)


class BookLookup:
    """Caller-facing entry point for resolving book metadata.

    Holds an ordered list of sources (highest priority first) and exposes
    three strategies over it: a fast ISBN waterfall, a slower enriched ISBN
    lookup that merges every source, and a fuzzy title/author search.
    """

    def __init__(
        self,
        sources: Sequence[BookSource],
        config: LookupConfig | None = None,
        *,
        http_client: AsyncHttpClient | None = None,
    ) -> None:
        if not sources:
            msg = "BookLookup needs at least one source"
            raise ValueError(msg)
        names = [source.name for source in sources]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"duplicate source names: {', '.join(duplicates)}"
            raise ValueError(msg)

        self._config = config or LookupConfig()
        self._sources = list(sources)
        self._http_client = http_client

        title_sources = [s for s in self._sources if getattr(s, "supports_title_search", True)]
        self._title_resolver = TitleResolver(
            title_sources or self._sources,
            thresholds=self._config.thresholds,
            cache=BoundedCache(
                max_size=self._config.cache.max_size, ttl=self._config.cache.ttl
            ),
        )
        self._fallback = IsbnFallback(self._sources, title_resolver=self._title_resolver)
        self._enrichment = IsbnEnrichment(self._sources)

    @property
    def source_names(self) -> list[str]:
        return [source.name for source in self._sources]

    async def lookup_by_isbn(
        self,
        isbn: str,
        *,
        title: str | None = None,
        author: str | None = None,
    ) -> LookupResult:
        """Single best-effort answer: sources in order, first success wins.

        When a title is given and every ISBN lookup fails, the title/author
        search is tried before giving up.
        """
        return await self._fallback.lookup_by_isbn(isbn, title=title, author=author)

    async def lookup_by_isbn_enriched(self, isbn: str) -> LookupResult:
        """Most complete answer: every source at once, merged by priority."""
        return await self._enrichment.lookup_by_isbn_enriched(isbn)

    async def lookup_by_title(self, title: str, author: str | None = None) -> LookupResult:
        """Fuzzy-validated title/author search across sources in order."""
        return await self._title_resolver.lookup_by_title(title, author)

    def clear_all_caches(self) -> None:
        """Reset every source cache and the title cache."""
        for source in self._sources:
            source.clear_cache()
        self._title_resolver.clear_cache()

    async def aclose(self) -> None:
        """Close the HTTP client if this lookup created it."""
        if self._http_client is not None:
            await self._http_client.aclose()

    async def __aenter__(self) -> "BookLookup":
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


def _build_source(name: str, http_client: HttpClient, config: LookupConfig) -> BookSource:
    timeout = config.timeout_for(name)
    if name == GOOGLE_BOOKS:
        return GoogleBooksSource(
            http_client, api_key=config.google_api_key, timeout=timeout, cache=config.cache
        )
    if name == OPEN_LIBRARY:
        return OpenLibrarySource(http_client, timeout=timeout, cache=config.cache)
    if name == WORLDCAT:
        return WorldCatSource(http_client, timeout=timeout, cache=config.cache)
    msg = f"unknown source: {name!r} (expected one of {GOOGLE_BOOKS}, {OPEN_LIBRARY}, {WORLDCAT})"
    raise ValueError(msg)


def create_default_lookup(
    config: LookupConfig | None = None,
    *,
    http_client: HttpClient | None = None,
) -> BookLookup:
    """Build a BookLookup over the built-in sources in config.source_order.

    Args:
        config: Lookup configuration; defaults to LookupConfig().
        http_client: Shared client for all sources. When omitted, an
            AsyncHttpClient is created and closed by BookLookup.aclose().
    """
    config = config or LookupConfig()
    unknown = [name for name in config.source_order if name not in _KNOWN_SOURCES]
    if unknown:
        msg = f"unknown source: {unknown[0]!r} (expected one of {', '.join(_KNOWN_SOURCES)})"
        raise ValueError(msg)
    owned = None
    if http_client is None:
        owned = AsyncHttpClient()
        http_client = owned
    sources = [_build_source(name, http_client, config) for name in config.source_order]
    logger.debug("Built lookup with sources: %s", ", ".join(config.source_order))
    return BookLookup(sources, config, http_client=owned)
