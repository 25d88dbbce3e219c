from datetime import timedelta

import pytest

from snippetbox.exceptions.base import NotFoundError
from snippetbox.stores.records import Snippet
from snippetbox.stores.snippet_store import LATEST_LIMIT, SnippetStore


@pytest.mark.asyncio
class TestSnippetStoreInsert:
    """
    Tests covering SnippetStore.insert() and reading the row back with get().

    Fixtures used:
      - snippet_store: SnippetStore bound to a per-test SQLite database.
      - clock: frozen clock shared with the store; `created` is read from it.
    """

    @pytest.mark.parametrize("days", [1, 7, 365])
    async def test_expires_is_created_plus_days(self, snippet_store: SnippetStore, clock, days):
        """
        Behavior:
          - Insert with each permitted expiry and read the snippet back.

        Importance:
          - Expiry is computed from the same instant as `created`, so the gap is exact.
        """
        snippet_id = await snippet_store.insert("title", "content", days)
        snippet = await snippet_store.get(snippet_id)

        assert isinstance(snippet, Snippet)
        assert snippet.created == clock.now
        assert snippet.expires - snippet.created == timedelta(days=days)
        assert snippet.created.tzinfo is not None

    async def test_ids_are_positive_and_increasing(self, create_snippet):
        first = await create_snippet()
        second = await create_snippet()

        assert first > 0
        assert second > first

    async def test_content_round_trips_unchanged(self, snippet_store: SnippetStore):
        """
        Behavior:
          - Content with newlines, tabs and non-ASCII text comes back byte-for-byte.

        Importance:
          - Content is stored as submitted; no escaping is applied on the way in or out.
        """
        content = "O snail\nClimb Mount Fuji,\n\tBut slowly, slowly!\n\n– Kobayashi Issa 🐌\\n"
        snippet_id = await snippet_store.insert("O snail", content, 7)

        snippet = await snippet_store.get(snippet_id)
        assert snippet.title == "O snail"
        assert snippet.content == content


@pytest.mark.asyncio
class TestSnippetStoreGet:
    async def test_missing_id_raises_not_found(self, snippet_store: SnippetStore):
        with pytest.raises(NotFoundError):
            await snippet_store.get(9999)

    async def test_expired_snippet_is_not_found(self, snippet_store: SnippetStore, create_snippet, clock):
        """
        Behavior:
          - A 1-day snippet is visible just before its expiry and gone exactly at it.

        Importance:
          - Visibility is `expires > now`; expired and missing look identical.
        """
        snippet_id = await create_snippet(expires_days=1)

        clock.advance(days=1, microseconds=-1)
        assert (await snippet_store.get(snippet_id)).id == snippet_id

        clock.advance(microseconds=1)
        with pytest.raises(NotFoundError) as expired:
            await snippet_store.get(snippet_id)
        with pytest.raises(NotFoundError) as missing:
            await snippet_store.get(snippet_id + 1000)

        assert expired.value.to_payload() == missing.value.to_payload()

    @pytest.mark.parametrize("snippet_id", [0, -1, 2**63, 2**70])
    async def test_out_of_range_id_is_not_found(self, snippet_store: SnippetStore, create_snippet, snippet_id):
        """
        Behavior:
          - Ids below 1 or beyond the 64-bit INTEGER range never reach the driver.

        Importance:
          - SQLite refuses to bind such ids; the caller must still see NotFoundError,
            not a generic storage failure.
        """
        await create_snippet()

        with pytest.raises(NotFoundError):
            await snippet_store.get(snippet_id)

    async def test_returned_record_is_detached(self, snippet_store: SnippetStore, create_snippet):
        snippet_id = await create_snippet(title="first")
        snippet = await snippet_store.get(snippet_id)

        with pytest.raises(AttributeError):
            snippet.title = "changed"  # frozen dataclass

        again = await snippet_store.get(snippet_id)
        assert again.title == "first"


@pytest.mark.asyncio
class TestSnippetStoreLatest:
    async def test_empty_store_returns_empty_list(self, snippet_store: SnippetStore):
        assert await snippet_store.latest() == []

    async def test_latest_is_limited_and_newest_first(self, snippet_store: SnippetStore, create_snippet):
        """
        Behavior:
          - Insert more than the limit; latest() returns exactly 10, ids strictly descending,
            starting from the most recent insert.
        """
        ids = [await create_snippet() for _ in range(LATEST_LIMIT + 3)]

        latest = await snippet_store.latest()

        assert len(latest) == LATEST_LIMIT
        returned = [s.id for s in latest]
        assert returned == sorted(ids, reverse=True)[:LATEST_LIMIT]
        assert all(a > b for a, b in zip(returned, returned[1:]))

    async def test_latest_excludes_expired(self, snippet_store: SnippetStore, create_snippet, clock):
        short_lived = await create_snippet(expires_days=1)
        week = await create_snippet(expires_days=7)
        year = await create_snippet(expires_days=365)

        clock.advance(days=2)
        assert [s.id for s in await snippet_store.latest()] == [year, week]
        assert short_lived not in [s.id for s in await snippet_store.latest()]

        clock.advance(days=7)
        assert [s.id for s in await snippet_store.latest()] == [year]
