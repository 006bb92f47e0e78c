# ABOUTME: Configuration values for book lookup: source order, timeouts, cache, match thresholds.
# ABOUTME: Everything is supplied at construction time; nothing here reads the environment.

from dataclasses import dataclass, field

GOOGLE_BOOKS = "googlebooks"
OPEN_LIBRARY = "openlibrary"
WORLDCAT = "worldcat"

DEFAULT_SOURCE_ORDER: tuple[str, ...] = (GOOGLE_BOOKS, OPEN_LIBRARY, WORLDCAT)

# Per-source request timeouts, in seconds.
DEFAULT_TIMEOUTS: dict[str, float] = {
    GOOGLE_BOOKS: 5.0,
    OPEN_LIBRARY: 10.0,
    WORLDCAT: 5.0,
}
DEFAULT_TIMEOUT = 10.0

DEFAULT_CACHE_SIZE = 250
DEFAULT_CACHE_TTL = 24 * 60 * 60.0

DEFAULT_TITLE_THRESHOLD = 0.65
# Author strings are shorter and noisier than titles, so the bar is lower.
DEFAULT_AUTHOR_THRESHOLD = 0.55


@dataclass(frozen=True)
class CacheSettings:
    """Capacity and lifetime of each bounded cache."""

    max_size: int = DEFAULT_CACHE_SIZE
    ttl: float = DEFAULT_CACHE_TTL


@dataclass(frozen=True)
class MatchThresholds:
    """Minimum Dice similarity for a search result to count as a match."""

    title: float = DEFAULT_TITLE_THRESHOLD
    author: float = DEFAULT_AUTHOR_THRESHOLD

    def __post_init__(self) -> None:
        for name in ("title", "author"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} threshold must be between 0.0 and 1.0, got {value}"
                raise ValueError(msg)


DEFAULT_THRESHOLDS = MatchThresholds()


@dataclass(frozen=True)
class LookupConfig:
    """Top-level configuration for a BookLookup built by create_default_lookup.

    Attributes:
        source_order: Source identifiers in priority order.
        cache: Settings applied to every source cache and the title cache.
        thresholds: Fuzzy-match thresholds for title/author search.
        timeouts: Per-source timeout overrides, in seconds.
        google_api_key: Optional Google Books API key for higher rate limits.
    """

    source_order: tuple[str, ...] = DEFAULT_SOURCE_ORDER
    cache: CacheSettings = field(default_factory=CacheSettings)
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS
    timeouts: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_TIMEOUTS))
    google_api_key: str | None = None

    def timeout_for(self, source_name: str) -> float:
        """Timeout for a source, falling back to DEFAULT_TIMEOUT."""
        return self.timeouts.get(source_name, DEFAULT_TIMEOUT)
