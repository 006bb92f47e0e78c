# ABOUTME: Title+author lookup that searches sources in priority order and fuzzy-validates results.
# ABOUTME: Used directly by callers and as the secondary strategy when every ISBN lookup fails.

import logging
from collections.abc import Sequence

from booklookup.metadata.cache import BoundedCache
from booklookup.metadata.config import DEFAULT_THRESHOLDS, MatchThresholds
from booklookup.metadata.fuzzy import find_best_match, normalize
from booklookup.metadata.source import BookSource, attempt_title_search
from booklookup.metadata.types import LookupResult

logger = logging.getLogger(__name__)


def title_cache_key(title: str, author: str | None = None) -> str:
    """Cache key built from the normalized title and author."""
    norm_author = normalize(author) if author else ""
    return f"title:{normalize(title)}|author:{norm_author}"


class TitleResolver:
    """Finds a book by title and optional author across several sources.

    Sources are searched one at a time in priority order, never raced: a
    match from an earlier source always wins over a later one. Each source's
    candidates are filtered with fuzzy matching because free-text search
    APIs happily return loosely related books.
    """

    def __init__(
        self,
        sources: Sequence[BookSource],
        *,
        thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
        cache: BoundedCache[LookupResult] | None = None,
    ) -> None:
        if not sources:
            msg = "TitleResolver needs at least one source"
            raise ValueError(msg)
        self._sources = list(sources)
        self._thresholds = thresholds
        self._cache: BoundedCache[LookupResult] = cache if cache is not None else BoundedCache()

    @property
    def source_names(self) -> list[str]:
        return [source.name for source in self._sources]

    async def lookup_by_title(self, title: str, author: str | None = None) -> LookupResult:
        """Search every source in order and return the first validated match.

        Results, including misses, are cached by normalized title and author.
        Source errors count as "no match from this source" and never propagate.
        """
        if not title or not title.strip():
            msg = "title must be a non-empty string"
            raise ValueError(msg)
        author = author.strip() if author and author.strip() else None

        key = title_cache_key(title, author)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Title cache hit for %s", key)
            return cached

        attempted: list[str] = []
        for index, source in enumerate(self._sources):
            attempted.append(source.name)
            candidates = await attempt_title_search(source, title, author)
            match = find_best_match(candidates, title, author, self._thresholds)
            if match is None:
                logger.debug(
                    "%s: no match among %d candidate(s) for title=%s author=%s",
                    source.name,
                    len(candidates),
                    title,
                    author,
                )
                continue

            logger.info("Title match from %s: %s by %s", source.name, match.title, match.author)
            result = LookupResult.found(
                match, source.name, attempted, fallback_used=index != 0
            )
            self._cache.set(key, result)
            return result

        result = LookupResult.failed(
            f"No matching book found by title+author. Tried: {', '.join(attempted)}",
            source=self._sources[0].name,
            attempted_sources=attempted,
        )
        self._cache.set(key, result)
        return result

    def clear_cache(self) -> None:
        self._cache.clear()
