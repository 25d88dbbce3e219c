"""
The in-memory doubles must behave like the SQL stores, otherwise the HTTP tests
that run against them prove nothing.
"""
from datetime import timedelta

import pytest

from snippetbox.exceptions.base import DuplicateEmailError, InvalidCredentialsError, NotFoundError
from snippetbox.stores.memory import InMemorySnippetStore, InMemoryUserStore
from snippetbox.stores.protocols import SnippetStoreProtocol, UserStoreProtocol
from snippetbox.stores.snippet_store import LATEST_LIMIT


@pytest.mark.asyncio
class TestInMemorySnippetStore:
    async def test_insert_and_get(self, memory_snippet_store: InMemorySnippetStore, clock):
        snippet_id = await memory_snippet_store.insert("title", "line one\nline two", 7)
        snippet = await memory_snippet_store.get(snippet_id)

        assert snippet.content == "line one\nline two"
        assert snippet.created == clock.now
        assert snippet.expires == clock.now + timedelta(days=7)

    async def test_expiry_hides_snippet(self, memory_snippet_store: InMemorySnippetStore, clock):
        snippet_id = await memory_snippet_store.insert("title", "content", 1)
        clock.advance(days=1)

        with pytest.raises(NotFoundError):
            await memory_snippet_store.get(snippet_id)
        assert await memory_snippet_store.latest() == []

    async def test_latest_order_and_limit(self, memory_snippet_store: InMemorySnippetStore):
        ids = [await memory_snippet_store.insert(f"t{i}", "c", 365) for i in range(LATEST_LIMIT + 2)]

        latest = await memory_snippet_store.latest()
        assert [s.id for s in latest] == ids[::-1][:LATEST_LIMIT]

    @pytest.mark.parametrize("snippet_id", [0, 2**63, 2**70])
    async def test_out_of_range_id_is_not_found(self, memory_snippet_store: InMemorySnippetStore, snippet_id):
        await memory_snippet_store.insert("title", "content", 365)

        with pytest.raises(NotFoundError):
            await memory_snippet_store.get(snippet_id)


@pytest.mark.asyncio
class TestInMemoryUserStore:
    async def test_duplicate_email(self, memory_user_store: InMemoryUserStore, sample_user_data):
        await memory_user_store.insert(**sample_user_data)

        with pytest.raises(DuplicateEmailError):
            await memory_user_store.insert(**sample_user_data)

    async def test_authenticate_and_exists(self, memory_user_store: InMemoryUserStore, sample_user_data):
        await memory_user_store.insert(**sample_user_data)

        user_id = await memory_user_store.authenticate(sample_user_data["email"], sample_user_data["password"])
        assert await memory_user_store.exists(user_id) is True
        assert await memory_user_store.exists(user_id + 1) is False
        assert await memory_user_store.exists(2**63) is False

    async def test_failures_are_uniform(self, memory_user_store: InMemoryUserStore, sample_user_data):
        await memory_user_store.insert(**sample_user_data)

        with pytest.raises(InvalidCredentialsError) as unknown:
            await memory_user_store.authenticate("nobody@example.com", "whatever1")
        with pytest.raises(InvalidCredentialsError) as wrong:
            await memory_user_store.authenticate(sample_user_data["email"], "whatever1")

        assert unknown.value.to_payload() == wrong.value.to_payload()


def test_doubles_satisfy_the_protocols(memory_snippet_store, memory_user_store):
    # static check for type checkers; at runtime just make sure the names line up
    snippets: SnippetStoreProtocol = memory_snippet_store
    users: UserStoreProtocol = memory_user_store

    for name in ("insert", "get", "latest"):
        assert callable(getattr(snippets, name))
    for name in ("insert", "authenticate", "exists"):
        assert callable(getattr(users, name))
