# ABOUTME: Parsing functions for WorldCat Classify XML responses.
# ABOUTME: Reads the response code and the first <work> element into BookData.

import logging
import xml.etree.ElementTree as ET

from booklookup.metadata.http import MetadataFetchError
from booklookup.metadata.isbn import clean_isbn
from booklookup.metadata.types import UNKNOWN_AUTHOR, BookData

logger = logging.getLogger(__name__)

# Classify response codes: 0 single work, 2 single work editions, 4 multiple works (use first).
SUCCESS_CODES = frozenset({"0", "2", "4"})
NOT_FOUND_CODE = "102"


def _local(tag: str) -> str:
    """Tag name without its {namespace} prefix."""
    return tag.rsplit("}", 1)[-1]


def _find(root: ET.Element, name: str) -> ET.Element | None:
    for element in root.iter():
        if _local(element.tag) == name:
            return element
    return None


def _child_text(element: ET.Element, name: str) -> str | None:
    for child in element:
        if _local(child.tag) == name and child.text and child.text.strip():
            return child.text.strip()
    return None


def _format_authors(raw: str) -> str:
    """Classify separates multiple "Last, First" authors with " | "; rejoin with "; "."""
    parts = [part.strip() for part in raw.split("|")]
    return "; ".join(part for part in parts if part)


def parse_response_code(root: ET.Element) -> str | None:
    response = _find(root, "response")
    if response is None:
        return None
    return response.get("code")


def parse_classify_response(xml: str, isbn: str) -> BookData | None:
    """Parse a Classify response into BookData.

    Classify is a cataloguing service: it has title, author, and the OCLC work
    identifier, but no covers, synopsis, publisher, or subjects.

    Returns:
        BookData, or None when the response code is not a success code or
        the work has no title.

    Raises:
        MetadataFetchError: If the body is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml)
    except ET.ParseError as exc:
        raise MetadataFetchError(f"Malformed WorldCat response: {exc}") from exc

    code = parse_response_code(root)
    if code == NOT_FOUND_CODE:
        return None
    if code not in SUCCESS_CODES:
        logger.warning("WorldCat returned response code %s for ISBN %s", code, isbn)
        return None

    work = _find(root, "work")
    if work is None:
        return None

    title = (work.get("title") or _child_text(work, "title") or "").strip()
    if not title:
        return None
    author = _format_authors(work.get("author") or _child_text(work, "author") or "")

    return BookData(
        title=title,
        author=author or UNKNOWN_AUTHOR,
        isbn=clean_isbn(isbn),
        oclc_number=(work.get("owi") or "").strip() or None,
    )
