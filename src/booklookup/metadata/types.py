# ABOUTME: Core data structures for book lookup results.
# ABOUTME: BookData is the normalized record every source produces; LookupResult wraps it.

from dataclasses import dataclass

# Placeholder sources substitute when a record carries no author.
UNKNOWN_AUTHOR = "Unknown Author"


@dataclass(frozen=True)
class BookData:
    """Normalized bibliographic record produced by a catalog source.

    Only title, author, and isbn are required. Search results may carry an
    empty isbn when the catalog doesn't report one. Instances are immutable
    so cached records can be shared between callers safely.
    """

    title: str
    author: str = UNKNOWN_AUTHOR
    isbn: str = ""
    publisher: str | None = None
    published_date: str | None = None
    synopsis: str | None = None
    cover_image_url: str | None = None
    oclc_number: str | None = None
    pages: int | None = None
    subjects: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            msg = "title must be a non-empty string"
            raise ValueError(msg)
        if not self.author:
            object.__setattr__(self, "author", UNKNOWN_AUTHOR)

    @property
    def has_known_author(self) -> bool:
        """Whether the author is real data rather than the placeholder."""
        return bool(self.author.strip()) and self.author != UNKNOWN_AUTHOR


@dataclass(frozen=True)
class LookupResult:
    """Envelope returned by every lookup operation.

    Attributes:
        success: Whether a record was found.
        data: The record; present iff success.
        error: Human-readable reason; present iff not success.
        source: Identifier of the source that answered (or would have).
        attempted_sources: Sources actually queried, in attempt order.
        fallback_used: Whether the answer came from beyond the first source.
    """

    success: bool
    source: str
    data: BookData | None = None
    error: str | None = None
    attempted_sources: tuple[str, ...] = ()
    fallback_used: bool = False

    def __post_init__(self) -> None:
        if self.success and self.data is None:
            msg = "successful LookupResult requires data"
            raise ValueError(msg)
        if self.success and self.error is not None:
            msg = "successful LookupResult must not carry an error"
            raise ValueError(msg)
        if not self.success and self.data is not None:
            msg = "failed LookupResult must not carry data"
            raise ValueError(msg)
        if not self.success and not self.error:
            msg = "failed LookupResult requires an error message"
            raise ValueError(msg)

    @classmethod
    def found(
        cls,
        data: BookData,
        source: str,
        attempted_sources: tuple[str, ...] | list[str],
        *,
        fallback_used: bool,
    ) -> "LookupResult":
        return cls(
            success=True,
            data=data,
            source=source,
            attempted_sources=tuple(attempted_sources),
            fallback_used=fallback_used,
        )

    @classmethod
    def failed(
        cls,
        error: str,
        source: str,
        attempted_sources: tuple[str, ...] | list[str] = (),
    ) -> "LookupResult":
        return cls(
            success=False,
            error=error,
            source=source,
            attempted_sources=tuple(attempted_sources),
            fallback_used=False,
        )
