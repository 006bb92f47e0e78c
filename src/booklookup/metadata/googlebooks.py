# ABOUTME: Google Books catalog source.
# ABOUTME: Looks up volumes by ISBN or intitle/inauthor search and returns normalized BookData.

import logging

from booklookup.metadata.config import GOOGLE_BOOKS, CacheSettings
from booklookup.metadata.googlebooks_parser import parse_isbn_response, parse_search_results
from booklookup.metadata.http import HttpClient
from booklookup.metadata.source import CachingSource
from booklookup.metadata.types import BookData

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"
_SEARCH_LIMIT = 5


class GoogleBooksSource(CachingSource):
    """Catalog source backed by the Google Books volumes API.

    Best metadata coverage of the three sources (synopsis, page count,
    categories, covers). An API key is optional and only raises rate limits.
    """

    name = GOOGLE_BOOKS

    def __init__(
        self,
        http_client: HttpClient,
        *,
        api_key: str | None = None,
        timeout: float = 5.0,
        cache: CacheSettings | None = None,
    ) -> None:
        super().__init__(timeout=timeout, cache=cache)
        self._http = http_client
        self._api_key = api_key

    def _params(self, query: str, **extra: str) -> dict[str, str]:
        params = {"q": query, **extra}
        if self._api_key:
            params["key"] = self._api_key
        return params

    async def _fetch_by_isbn(self, isbn: str) -> BookData | None:
        data = await self._http.get_json(_VOLUMES_URL, params=self._params(f"isbn:{isbn}"))
        book = parse_isbn_response(data, isbn)
        if book is None:
            logger.debug("Google Books has no volume for ISBN %s", isbn)
        return book

    async def _fetch_by_title(self, title: str, author: str | None) -> list[BookData]:
        query = f"intitle:{title}"
        if author:
            query += f"+inauthor:{author}"
        data = await self._http.get_json(
            _VOLUMES_URL, params=self._params(query, maxResults=str(_SEARCH_LIMIT))
        )
        return parse_search_results(data)
