# ABOUTME: Metadata package for resolving book records from external catalogs.
# ABOUTME: Exports the lookup facade, data types, and source contract used throughout booklookup.

from booklookup.metadata.cache import BoundedCache
from booklookup.metadata.config import CacheSettings, LookupConfig, MatchThresholds
from booklookup.metadata.service import BookLookup, create_default_lookup
from booklookup.metadata.source import BookSource
from booklookup.metadata.types import UNKNOWN_AUTHOR, BookData, LookupResult

__all__ = [
    "UNKNOWN_AUTHOR",
    "BookData",
    "BookLookup",
    "BookSource",
    "BoundedCache",
    "CacheSettings",
    "LookupConfig",
    "LookupResult",
    "MatchThresholds",
    "create_default_lookup",
]
