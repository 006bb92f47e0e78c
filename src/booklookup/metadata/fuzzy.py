# ABOUTME: Fuzzy text matching for validating title/author search results against the query.
# ABOUTME: Uses the Dice coefficient over character bigrams, which tolerates word reordering.

import re
import unicodedata
from collections.abc import Iterable

from booklookup.metadata.config import DEFAULT_THRESHOLDS, MatchThresholds
from booklookup.metadata.types import BookData

# Combined score weights when the query includes an author; they sum to 1.0.
_WEIGHT_TITLE = 0.6
_WEIGHT_AUTHOR = 0.4

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
# Matches a colon followed by a space and remaining text (subtitle pattern).
_SUBTITLE_RE = re.compile(r"\s*:\s+.+$")
# Separators catalogs use between co-authors in a single author string.
_AUTHOR_SPLIT_RE = re.compile(r"\s*(?:[,;&]|\band\b)\s*", re.IGNORECASE)


def normalize(text: str) -> str:
    """Normalize text for comparison.

    Strips diacritics, lowercases, removes punctuation, and collapses
    whitespace. "Anti-Oedipus" becomes "antioedipus"; "Émile" becomes "emile".
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    cleaned = _PUNCTUATION_RE.sub("", stripped.lower())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def _bigrams(text: str) -> set[str]:
    return {text[i : i + 2] for i in range(len(text) - 1)}


def dice_coefficient(a: str, b: str) -> float:
    """Similarity of two strings in [0.0, 1.0]: 2 * |A & B| / (|A| + |B|) over bigram sets.

    Handles reordering well ("Bakunin, Mikhail" vs "Mikhail Bakunin") because
    it compares sets of character pairs rather than positions.
    """
    norm_a = normalize(a)
    norm_b = normalize(b)

    if norm_a == norm_b:
        return 1.0
    if len(norm_a) < 2 or len(norm_b) < 2:
        return 0.0

    bigrams_a = _bigrams(norm_a)
    bigrams_b = _bigrams(norm_b)
    return 2 * len(bigrams_a & bigrams_b) / (len(bigrams_a) + len(bigrams_b))


def _strip_subtitle(title: str) -> str | None:
    """Remove subtitle from a title string (text after ": ").

    Returns the stripped title, or None if no subtitle was found or
    stripping would produce an identical or empty string.
    """
    stripped = _SUBTITLE_RE.sub("", title).strip()
    if stripped and stripped != title.strip():
        return stripped
    return None


def _title_variants(title: str) -> list[str]:
    main = _strip_subtitle(title)
    return [title, main] if main else [title]


def title_similarity(query_title: str, candidate_title: str) -> float:
    """Best Dice score between the titles, with or without their subtitles.

    Catalogs often return "Main Title: Long Subtitle" for a query that only
    names the main title, which dilutes the bigram overlap of the full strings.
    """
    return max(
        dice_coefficient(query, candidate)
        for query in _title_variants(query_title)
        for candidate in _title_variants(candidate_title)
    )


def author_similarity(query_author: str, candidate_author: str) -> float:
    """Best Dice score against the whole author string or any single name in it.

    Sources join co-authors into one string ("Gilles Deleuze, Félix Guattari"),
    which dilutes the overlap for a query naming only one of them.
    """
    names = [candidate_author]
    names.extend(name for name in _AUTHOR_SPLIT_RE.split(candidate_author) if name)
    return max(dice_coefficient(query_author, name) for name in names)


def is_match(
    query_title: str,
    query_author: str | None,
    candidate_title: str,
    candidate_author: str,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """Whether a search result plausibly is the book that was asked for."""
    if title_similarity(query_title, candidate_title) < thresholds.title:
        return False
    if query_author:
        return author_similarity(query_author, candidate_author) >= thresholds.author
    return True


def match_score(query_title: str, query_author: str | None, candidate: BookData) -> float:
    """Ranking score for a candidate that already passed is_match."""
    title_score = title_similarity(query_title, candidate.title)
    if not query_author:
        return title_score
    author_score = author_similarity(query_author, candidate.author)
    return _WEIGHT_TITLE * title_score + _WEIGHT_AUTHOR * author_score


def find_best_match(
    candidates: Iterable[BookData],
    query_title: str,
    query_author: str | None = None,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> BookData | None:
    """Pick the highest-scoring candidate that passes is_match.

    Ties keep the earliest candidate, so the source's own ranking breaks them.
    """
    best: BookData | None = None
    best_score = -1.0
    for candidate in candidates:
        if not is_match(query_title, query_author, candidate.title, candidate.author, thresholds):
            continue
        score = match_score(query_title, query_author, candidate)
        if score > best_score:
            best = candidate
            best_score = score
    return best
