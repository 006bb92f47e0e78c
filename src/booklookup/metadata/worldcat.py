# ABOUTME: WorldCat Classify catalog source.
# ABOUTME: ISBN-only lookups returning basic cataloguing data (title, author, OCLC work id).

import logging

from booklookup.metadata.config import WORLDCAT, CacheSettings
from booklookup.metadata.http import HttpClient
from booklookup.metadata.source import CachingSource
from booklookup.metadata.types import BookData
from booklookup.metadata.worldcat_parser import parse_classify_response

logger = logging.getLogger(__name__)

# OCLC only serves Classify over plain HTTP.
_CLASSIFY_URL = "http://classify.oclc.org/classify2/Classify"


class WorldCatSource(CachingSource):
    """Catalog source backed by the OCLC WorldCat Classify API.

    Sparse data, but it knows many library-only titles the other sources
    lack, which makes it a useful last resort. It has no title search.
    """

    name = WORLDCAT
    supports_title_search = False

    def __init__(
        self,
        http_client: HttpClient,
        *,
        timeout: float = 5.0,
        cache: CacheSettings | None = None,
    ) -> None:
        super().__init__(timeout=timeout, cache=cache)
        self._http = http_client

    async def _fetch_by_isbn(self, isbn: str) -> BookData | None:
        xml = await self._http.get_text(_CLASSIFY_URL, params={"isbn": isbn, "summary": "true"})
        book = parse_classify_response(xml, isbn)
        if book is None:
            logger.debug("WorldCat has no work for ISBN %s", isbn)
        return book

    async def _fetch_by_title(self, title: str, author: str | None) -> list[BookData]:
        return []
