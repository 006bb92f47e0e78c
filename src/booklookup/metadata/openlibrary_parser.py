# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts Books API (jscmd=data) and Search API structures into BookData.

from typing import Any

from booklookup.metadata.isbn import clean_isbn
from booklookup.metadata.types import UNKNOWN_AUTHOR, BookData

_COVERS_BASE_URL = "https://covers.openlibrary.org/b"
_MAX_SEARCH_SUBJECTS = 10


def _clean(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _https(url: str | None) -> str | None:
    if url and url.startswith("http://"):
        return "https://" + url[len("http://") :]
    return url


def _names(entries: list[Any]) -> list[str]:
    """Extract names from a list of strings or {"name": ...} dicts."""
    names: list[str] = []
    for entry in entries:
        if isinstance(entry, dict):
            entry = entry.get("name")
        name = _clean(entry)
        if name:
            names.append(name)
    return names


def parse_description(value: Any) -> str | None:
    """Extract a description from an Open Library record.

    Handles the OL quirk where description can be either a plain string
    or a dict with {"type": ..., "value": "actual text"}.
    """
    if isinstance(value, dict):
        value = value.get("value")
    return _clean(value)


def parse_books_response(data: dict[str, Any], bibkey: str, isbn: str) -> BookData | None:
    """Parse a Books API response (jscmd=data) for one bibkey.

    Args:
        data: Response body, keyed by bibkey ("ISBN:9780...").
        bibkey: The key that was requested.
        isbn: The ISBN the caller asked for, stored on the record.

    Returns:
        BookData, or None when the bibkey is absent or the record has no title.
    """
    record = data.get(bibkey)
    if not isinstance(record, dict):
        return None
    title = _clean(record.get("title"))
    if not title:
        return None

    authors = _names(record.get("authors") or [])
    publishers = _names(record.get("publishers") or [])
    cover = record.get("cover") or {}
    cover_url = cover.get("large") or cover.get("medium") or cover.get("small")
    oclc = (record.get("identifiers") or {}).get("oclc") or []
    subjects = _names(record.get("subjects") or [])
    pages = record.get("number_of_pages")

    return BookData(
        title=title,
        author=", ".join(authors) or UNKNOWN_AUTHOR,
        isbn=clean_isbn(isbn),
        publisher=publishers[0] if publishers else None,
        published_date=_clean(record.get("publish_date")),
        synopsis=parse_description(record.get("description")),
        cover_image_url=_https(_clean(cover_url)),
        oclc_number=_clean(oclc[0]) if oclc else None,
        pages=pages if isinstance(pages, int) and pages > 0 else None,
        subjects=tuple(subjects) or None,
    )


def build_cover_url(cover_id: int, size: str = "L") -> str:
    """Build an Open Library cover image URL from a cover id.

    Args:
        cover_id: The search document's cover_i value.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/id/{cover_id}-{size}.jpg"


def parse_search_doc(doc: dict[str, Any]) -> BookData | None:
    """Parse one Search API document; returns None for untitled documents."""
    title = _clean(doc.get("title"))
    if not title:
        return None

    authors = _names(doc.get("author_name") or [])
    publishers = _names(doc.get("publisher") or [])
    isbns = doc.get("isbn") or []
    cover_id = doc.get("cover_i")
    year = doc.get("first_publish_year")
    pages = doc.get("number_of_pages_median")
    subjects = _names(doc.get("subject") or [])[:_MAX_SEARCH_SUBJECTS]

    return BookData(
        title=title,
        author=", ".join(authors) or UNKNOWN_AUTHOR,
        isbn=clean_isbn(isbns[0]) if isbns else "",
        publisher=publishers[0] if publishers else None,
        published_date=str(year) if year else None,
        cover_image_url=build_cover_url(cover_id) if cover_id else None,
        pages=pages if isinstance(pages, int) and pages > 0 else None,
        subjects=tuple(subjects) or None,
    )


def parse_search_results(data: dict[str, Any]) -> list[BookData]:
    """Parse an Open Library Search API response into a list of BookData."""
    results: list[BookData] = []
    for doc in data.get("docs") or []:
        book = parse_search_doc(doc)
        if book is not None:
            results.append(book)
    return results
