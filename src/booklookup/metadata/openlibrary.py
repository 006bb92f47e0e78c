# ABOUTME: Open Library catalog source.
# ABOUTME: Looks up openlibrary.org by ISBN (Books API) or title/author (Search API).

import logging

from booklookup.metadata.config import OPEN_LIBRARY, CacheSettings
from booklookup.metadata.http import HttpClient
from booklookup.metadata.isbn import isbn10_to_isbn13
from booklookup.metadata.openlibrary_parser import parse_books_response, parse_search_results
from booklookup.metadata.source import CachingSource
from booklookup.metadata.types import BookData

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"
_SEARCH_LIMIT = 3
_SEARCH_FIELDS = (
    "title,author_name,publisher,first_publish_year,isbn,cover_i,number_of_pages_median,subject"
)


class OpenLibrarySource(CachingSource):
    """Catalog source backed by the Open Library Books and Search APIs.

    Free and keyless. ISBN-10 input is converted to ISBN-13 before the
    request because Open Library indexes editions more reliably that way.
    """

    name = OPEN_LIBRARY

    def __init__(
        self,
        http_client: HttpClient,
        *,
        timeout: float = 10.0,
        cache: CacheSettings | None = None,
    ) -> None:
        super().__init__(timeout=timeout, cache=cache)
        self._http = http_client

    async def _fetch_by_isbn(self, isbn: str) -> BookData | None:
        isbn13 = isbn10_to_isbn13(isbn) if len(isbn) == 10 else isbn
        bibkey = f"ISBN:{isbn13 or isbn}"
        data = await self._http.get_json(
            f"{_OL_BASE}/api/books",
            params={"bibkeys": bibkey, "format": "json", "jscmd": "data"},
        )
        book = parse_books_response(data, bibkey, isbn)
        if book is None:
            logger.debug("Open Library has no edition for %s", bibkey)
        return book

    async def _fetch_by_title(self, title: str, author: str | None) -> list[BookData]:
        params: dict[str, str] = {
            "title": title,
            "limit": str(_SEARCH_LIMIT),
            "fields": _SEARCH_FIELDS,
        }
        if author:
            params["author"] = author
        data = await self._http.get_json(f"{_OL_BASE}/search.json", params=params)
        return parse_search_results(data)
