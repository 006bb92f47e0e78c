# ABOUTME: Parsing functions for Google Books API JSON responses.
# ABOUTME: Converts volume items into BookData, upgrading cover URLs to https and full size.

import re
from typing import Any

from booklookup.metadata.isbn import clean_isbn
from booklookup.metadata.types import UNKNOWN_AUTHOR, BookData

# Largest first; Google Books omits sizes it doesn't have.
_IMAGE_SIZES = ("extraLarge", "large", "medium", "small", "thumbnail", "smallThumbnail")

_ZOOM_RE = re.compile(r"zoom=\d")


def _clean(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def normalize_cover_url(url: str | None) -> str | None:
    """Force https and request the original image size (zoom=0)."""
    if not url:
        return None
    url = url.strip()
    if url.startswith("http://"):
        url = "https://" + url[len("http://") :]
    return _ZOOM_RE.sub("zoom=0", url)


def _pick_cover(image_links: dict[str, Any] | None) -> str | None:
    if not image_links:
        return None
    for size in _IMAGE_SIZES:
        url = image_links.get(size)
        if url:
            return normalize_cover_url(url)
    return None


def _pick_isbn(identifiers: list[dict[str, Any]]) -> str:
    by_type = {entry.get("type"): entry.get("identifier", "") for entry in identifiers}
    return clean_isbn(by_type.get("ISBN_13") or by_type.get("ISBN_10") or "")


def parse_volume(item: dict[str, Any], isbn: str | None = None) -> BookData | None:
    """Parse one Google Books volume item into BookData.

    Args:
        item: A member of the response's "items" list.
        isbn: The ISBN that was looked up; used in place of the volume's own
            identifiers so the record carries the ISBN the caller asked for.

    Returns:
        BookData, or None when the volume has no title.
    """
    info = item.get("volumeInfo") or {}
    title = _clean(info.get("title"))
    if not title:
        return None

    authors = [a.strip() for a in info.get("authors") or [] if isinstance(a, str) and a.strip()]
    categories = [
        c.strip() for c in info.get("categories") or [] if isinstance(c, str) and c.strip()
    ]
    page_count = info.get("pageCount")

    return BookData(
        title=title,
        author=", ".join(authors) or UNKNOWN_AUTHOR,
        isbn=clean_isbn(isbn) if isbn else _pick_isbn(info.get("industryIdentifiers") or []),
        publisher=_clean(info.get("publisher")),
        published_date=_clean(info.get("publishedDate")),
        synopsis=_clean(info.get("description")),
        cover_image_url=_pick_cover(info.get("imageLinks")),
        pages=page_count if isinstance(page_count, int) and page_count > 0 else None,
        subjects=tuple(categories) or None,
    )


def parse_isbn_response(data: dict[str, Any], isbn: str) -> BookData | None:
    """Parse a volumes?q=isbn: response; the first item is the most relevant."""
    items = data.get("items") or []
    if not data.get("totalItems") or not items:
        return None
    return parse_volume(items[0], isbn)


def parse_search_results(data: dict[str, Any]) -> list[BookData]:
    """Parse a volumes search response into BookData, skipping untitled volumes."""
    results: list[BookData] = []
    for item in data.get("items") or []:
        book = parse_volume(item)
        if book is not None:
            results.append(book)
    return results
