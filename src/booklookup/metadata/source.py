# ABOUTME: BookSource protocol defining the contract for catalog sources, plus the call boundary.
# ABOUTME: Every source call goes through attempt_* helpers that turn raises and timeouts into data.

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from booklookup.metadata.cache import BoundedCache
from booklookup.metadata.config import CacheSettings
from booklookup.metadata.fuzzy import normalize
from booklookup.metadata.isbn import validate_isbn
from booklookup.metadata.types import BookData

logger = logging.getLogger(__name__)

NOT_FOUND = "Not found"

# Distinguishes a cached negative result (None) from a cache miss.
_MISSING = object()


@runtime_checkable
class BookSource(Protocol):
    """Protocol for catalog services (Google Books, Open Library, WorldCat, ...).

    Implementations own their request construction, response parsing, field
    normalization, and cache. Both lookups may raise on transport errors;
    callers go through attempt_isbn_lookup / attempt_title_search instead of
    calling them directly.
    """

    @property
    def name(self) -> str: ...

    @property
    def timeout(self) -> float: ...

    async def lookup_by_isbn(self, isbn: str) -> BookData | None: ...

    async def search_by_title(self, title: str, author: str | None = None) -> list[BookData]: ...

    def clear_cache(self) -> None: ...


@dataclass(frozen=True)
class SourceOutcome:
    """Uniform result of one source call: either data or an error reason."""

    source: str
    data: BookData | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def describe_error(exc: BaseException) -> str:
    """Short human-readable reason for a failed source call."""
    return str(exc) or type(exc).__name__


async def attempt_isbn_lookup(source: BookSource, isbn: str) -> SourceOutcome:
    """Call source.lookup_by_isbn under its timeout. Never raises."""
    try:
        data = await asyncio.wait_for(source.lookup_by_isbn(isbn), timeout=source.timeout)
    except TimeoutError:
        logger.warning("%s timed out after %.1fs for ISBN %s", source.name, source.timeout, isbn)
        return SourceOutcome(source=source.name, error=f"Timed out after {source.timeout:g}s")
    except Exception as exc:
        logger.warning("%s failed for ISBN %s: %s", source.name, isbn, exc)
        return SourceOutcome(source=source.name, error=describe_error(exc))

    if data is None:
        logger.debug("%s has no record for ISBN %s", source.name, isbn)
        return SourceOutcome(source=source.name, error=NOT_FOUND)
    return SourceOutcome(source=source.name, data=data)


async def attempt_title_search(
    source: BookSource, title: str, author: str | None
) -> list[BookData]:
    """Call source.search_by_title under its timeout; failures yield no candidates."""
    try:
        return await asyncio.wait_for(
            source.search_by_title(title, author), timeout=source.timeout
        )
    except TimeoutError:
        logger.warning(
            "%s title search timed out after %.1fs for title=%s author=%s",
            source.name,
            source.timeout,
            title,
            author,
        )
    except Exception as exc:
        logger.warning(
            "%s title search failed for title=%s author=%s: %s", source.name, title, author, exc
        )
    return []


class CachingSource:
    """Base for catalog sources: ISBN validation and per-source caching.

    Subclasses set ``name`` and implement _fetch_by_isbn / _fetch_by_title.
    Found and not-found results are both cached; exceptions are not, so a
    transient failure is retried on the next call.
    """

    name: str = ""
    supports_title_search: bool = True

    def __init__(self, *, timeout: float, cache: CacheSettings | None = None) -> None:
        settings = cache or CacheSettings()
        self._timeout = timeout
        self._isbn_cache: BoundedCache[BookData | None] = BoundedCache(
            max_size=settings.max_size, ttl=settings.ttl
        )
        self._search_cache: BoundedCache[list[BookData]] = BoundedCache(
            max_size=settings.max_size, ttl=settings.ttl
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    async def lookup_by_isbn(self, isbn: str) -> BookData | None:
        """Return the record for an ISBN, or None if the source doesn't know it."""
        validation = validate_isbn(isbn)
        if not validation.valid:
            logger.debug("%s skipped invalid ISBN %r: %s", self.name, isbn, validation.error)
            return None

        cached = self._isbn_cache.get(validation.cleaned, _MISSING)
        if cached is not _MISSING:
            return cached

        data = await self._fetch_by_isbn(validation.cleaned)
        self._isbn_cache.set(validation.cleaned, data)
        return data

    async def search_by_title(self, title: str, author: str | None = None) -> list[BookData]:
        """Return candidate records for a title and optional author, best first."""
        key = f"{normalize(title)}|{normalize(author) if author else ''}"
        cached = self._search_cache.get(key)
        if cached is not None:
            return list(cached)

        results = await self._fetch_by_title(title, author)
        self._search_cache.set(key, list(results))
        return results

    def clear_cache(self) -> None:
        self._isbn_cache.clear()
        self._search_cache.clear()

    async def _fetch_by_isbn(self, isbn: str) -> BookData | None:
        raise NotImplementedError

    async def _fetch_by_title(self, title: str, author: str | None) -> list[BookData]:
        raise NotImplementedError
