# ABOUTME: Unit tests for TitleResolver.
# ABOUTME: Covers priority order, fuzzy validation, source failures, and result caching.

import asyncio

import pytest

from booklookup.metadata import BookData, MatchThresholds
from booklookup.metadata.http import MetadataFetchError
from booklookup.metadata.title_search import TitleResolver, title_cache_key
from tests.fixtures.fake_sources import FakeSource

ANTI_OEDIPUS = BookData(
    title="Anti-Oedipus: Capitalism and Schizophrenia",
    author="Gilles Deleuze, Félix Guattari",
    isbn="9780143105824",
)
HOLLAND = BookData(title="Deleuze and Guattari's Anti-Oedipus", author="Eugene W. Holland")


class TestTitleCacheKey:
    """Tests for title_cache_key."""

    def test_normalized(self) -> None:
        assert title_cache_key("Dune!", "Frank  Herbert") == "title:dune|author:frank herbert"

    def test_no_author(self) -> None:
        assert title_cache_key("Dune") == "title:dune|author:"


class TestTitleResolverOrder:
    """Tests for source ordering and fallback reporting."""

    def test_first_source_match(self) -> None:
        s1 = FakeSource("s1", candidates=[ANTI_OEDIPUS])
        s2 = FakeSource("s2", candidates=[ANTI_OEDIPUS])
        result = asyncio.run(TitleResolver([s1, s2]).lookup_by_title("Anti-Oedipus", "Deleuze"))

        assert result.success
        assert result.data == ANTI_OEDIPUS
        assert result.source == "s1"
        assert result.attempted_sources == ("s1",)
        assert not result.fallback_used
        assert s2.title_calls == []

    def test_later_source_match(self) -> None:
        """A match from beyond the first source is reported as a fallback."""
        s1 = FakeSource("s1", candidates=[HOLLAND])
        s2 = FakeSource("s2", candidates=[ANTI_OEDIPUS])
        result = asyncio.run(TitleResolver([s1, s2]).lookup_by_title("Anti-Oedipus", "Deleuze"))

        assert result.success
        assert result.source == "s2"
        assert result.attempted_sources == ("s1", "s2")
        assert result.fallback_used

    def test_source_error_skipped(self) -> None:
        s1 = FakeSource("s1", search_error=MetadataFetchError("HTTP 500"))
        s2 = FakeSource("s2", candidates=[ANTI_OEDIPUS])
        result = asyncio.run(TitleResolver([s1, s2]).lookup_by_title("Anti-Oedipus"))

        assert result.success
        assert result.source == "s2"

    def test_source_timeout_skipped(self) -> None:
        s1 = FakeSource("s1", candidates=[ANTI_OEDIPUS], delay=0.5, timeout=0.05)
        s2 = FakeSource("s2", candidates=[ANTI_OEDIPUS])
        result = asyncio.run(TitleResolver([s1, s2]).lookup_by_title("Anti-Oedipus"))

        assert result.source == "s2"
        assert result.attempted_sources == ("s1", "s2")

    def test_no_match_anywhere(self) -> None:
        s1 = FakeSource("s1", candidates=[HOLLAND])
        s2 = FakeSource("s2")
        result = asyncio.run(TitleResolver([s1, s2]).lookup_by_title("Anti-Oedipus", "Deleuze"))

        assert not result.success
        assert result.error == "No matching book found by title+author. Tried: s1, s2"
        assert result.source == "s1"
        assert result.attempted_sources == ("s1", "s2")
        assert not result.fallback_used

    def test_custom_thresholds(self) -> None:
        s1 = FakeSource("s1", candidates=[ANTI_OEDIPUS])
        resolver = TitleResolver([s1], thresholds=MatchThresholds(title=1.0, author=1.0))
        result = asyncio.run(resolver.lookup_by_title("Anti-Oedipus", "Deleuze"))
        assert not result.success


class TestTitleResolverInput:
    """Tests for argument handling."""

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, title: str) -> None:
        resolver = TitleResolver([FakeSource("s1")])
        with pytest.raises(ValueError, match="title"):
            asyncio.run(resolver.lookup_by_title(title))

    def test_blank_author_ignored(self) -> None:
        s1 = FakeSource("s1", candidates=[ANTI_OEDIPUS])
        asyncio.run(TitleResolver([s1]).lookup_by_title("Anti-Oedipus", "  "))
        assert s1.title_calls == [("Anti-Oedipus", None)]

    def test_needs_sources(self) -> None:
        with pytest.raises(ValueError):
            TitleResolver([])


class TestTitleResolverCache:
    """Tests for title result caching."""

    def test_match_cached(self) -> None:
        s1 = FakeSource("s1", candidates=[ANTI_OEDIPUS])
        resolver = TitleResolver([s1])

        async def _run() -> None:
            await resolver.lookup_by_title("Anti-Oedipus", "Deleuze")
            await resolver.lookup_by_title("ANTI-OEDIPUS!", "  deleuze ")

        asyncio.run(_run())
        assert len(s1.title_calls) == 1

    def test_hyphen_and_space_are_different_keys(self) -> None:
        """Punctuation is dropped, not replaced, so "Anti-Oedipus" is "antioedipus"."""
        s1 = FakeSource("s1", candidates=[ANTI_OEDIPUS])
        resolver = TitleResolver([s1])

        async def _run() -> None:
            await resolver.lookup_by_title("Anti-Oedipus", "Deleuze")
            await resolver.lookup_by_title("Anti Oedipus", "Deleuze")

        asyncio.run(_run())
        assert len(s1.title_calls) == 2
        assert title_cache_key("Anti-Oedipus", "Deleuze") != title_cache_key(
            "Anti Oedipus", "Deleuze"
        )

    def test_miss_cached(self) -> None:
        s1 = FakeSource("s1")
        resolver = TitleResolver([s1])

        async def _run() -> None:
            await resolver.lookup_by_title("Unfindable")
            await resolver.lookup_by_title("Unfindable")

        asyncio.run(_run())
        assert len(s1.title_calls) == 1

    def test_clear_cache(self) -> None:
        s1 = FakeSource("s1", candidates=[ANTI_OEDIPUS])
        resolver = TitleResolver([s1])

        async def _run() -> None:
            await resolver.lookup_by_title("Anti-Oedipus")
            resolver.clear_cache()
            await resolver.lookup_by_title("Anti-Oedipus")

        asyncio.run(_run())
        assert len(s1.title_calls) == 2
