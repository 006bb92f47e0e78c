# ABOUTME: Shared pytest fixtures for booklookup tests.
# ABOUTME: Provides sample records and a controllable clock for cache tests.

import pytest

from booklookup.metadata import BookData


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def pragmatic_programmer() -> BookData:
    """A complete record as Google Books would return it."""
    return BookData(
        title="The Pragmatic Programmer",
        author="David Thomas, Andrew Hunt",
        isbn="9780135957059",
        publisher="Addison-Wesley Professional",
        published_date="2019-09-13",
        synopsis="Your journey to mastery.",
        cover_image_url="https://books.google.com/books/content?id=LhOlDwAAQBAJ&zoom=0",
        pages=352,
        subjects=("Computers",),
    )


@pytest.fixture
def name_of_the_rose() -> BookData:
    """A sparse record as WorldCat would return it."""
    return BookData(
        title="The Name of the Rose",
        author="Eco, Umberto",
        isbn="9780156001311",
        oclc_number="1843428",
    )
