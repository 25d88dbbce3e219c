import asyncio

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from snippetbox.exceptions.base import (
    DuplicateEmailError,
    InvalidCredentialsError,
    PasswordHashingError,
    RepositoryError,
)
from snippetbox.models.user import User as UserRow
from snippetbox.stores import user_store as user_store_module
from snippetbox.stores.user_store import UserStore

from ..test_fixtures.store_fixtures import TEST_BCRYPT_ROUNDS


async def count_users(sessions: async_sessionmaker[AsyncSession]) -> int:
    async with sessions() as session:
        return (await session.execute(select(func.count()).select_from(UserRow))).scalar_one()


@pytest.mark.asyncio
class TestUserStoreInsert:
    """
    Tests covering UserStore.insert().

    Fixtures used:
      - user_store: UserStore on a per-test SQLite database, bcrypt cost 4.
      - sample_user_data: Faker-generated name/email/password.
      - sessions: to look at the raw rows.
    """

    async def test_insert_stores_bcrypt_hash_not_password(self, user_store, sample_user_data, sessions, clock):
        """
        Behavior:
          - Insert a user and read the raw row.

        Importance:
          - The stored value is a bcrypt hash with the configured cost, never the password.
        """
        await user_store.insert(**sample_user_data)

        async with sessions() as session:
            row = (await session.execute(select(UserRow))).scalar_one()

        assert row.email == sample_user_data["email"]
        assert row.name == sample_user_data["name"]
        assert row.hashed_password != sample_user_data["password"].encode()
        assert row.hashed_password.startswith(b"$2b$%02d$" % TEST_BCRYPT_ROUNDS)
        assert len(row.hashed_password) == 60
        assert row.created == clock.now

    async def test_duplicate_email_raises(self, user_store, registered_user):
        with pytest.raises(DuplicateEmailError) as exc_info:
            await user_store.insert("Someone Else", registered_user["email"], "another-password")

        err = exc_info.value
        assert err.fields == ["email"]
        assert err.http_status() == 409
        assert err.to_payload()["code"] == "duplicate_email"

    async def test_duplicate_email_after_surrounding_whitespace(self, user_store, registered_user):
        with pytest.raises(DuplicateEmailError):
            await user_store.insert("Someone Else", f"  {registered_user['email']} ", "another-password")

    async def test_concurrent_inserts_same_email(self, sessions, sample_user_data):
        """
        Behavior:
          - Two stores with independent sessions insert the same email at the same time.
          - Exactly one succeeds; the other gets DuplicateEmailError.

        Importance:
          - Uniqueness comes from the database constraint, not from a check-then-insert.
        """
        first = UserStore(sessions, rounds=TEST_BCRYPT_ROUNDS)
        second = UserStore(sessions, rounds=TEST_BCRYPT_ROUNDS)

        results = await asyncio.gather(
            first.insert(**sample_user_data),
            second.insert(**sample_user_data),
            return_exceptions=True,
        )

        assert sum(1 for r in results if r is None) == 1
        assert sum(1 for r in results if isinstance(r, DuplicateEmailError)) == 1
        assert await count_users(sessions) == 1

    async def test_password_over_72_bytes_is_rejected(self, user_store, sample_user_data, sessions):
        """
        Behavior:
          - 73 bytes of password raise PasswordHashingError and nothing is written.
        """
        data = dict(sample_user_data, password="p" * 73)

        with pytest.raises(PasswordHashingError):
            await user_store.insert(**data)

        assert await count_users(sessions) == 0

    async def test_password_of_72_multibyte_bytes_is_accepted(self, user_store, sample_user_data):
        # 24 characters, 72 bytes
        data = dict(sample_user_data, password="日" * 24)
        await user_store.insert(**data)

        assert await user_store.authenticate(data["email"], data["password"]) > 0


@pytest.mark.asyncio
class TestUserStoreAuthenticate:
    async def test_correct_credentials_return_id(self, user_store, registered_user, sessions):
        user_id = await user_store.authenticate(registered_user["email"], registered_user["password"])

        async with sessions() as session:
            row = (await session.execute(select(UserRow))).scalar_one()
        assert user_id == row.id

    async def test_unknown_email_and_wrong_password_are_indistinguishable(self, user_store, registered_user):
        """
        Behavior:
          - Authenticate with an unknown email, then with a wrong password.

        Importance:
          - Same exception type, same message, same payload: callers cannot tell
            which half of the credentials was wrong.
        """
        with pytest.raises(InvalidCredentialsError) as unknown:
            await user_store.authenticate("nobody@example.com", registered_user["password"])
        with pytest.raises(InvalidCredentialsError) as wrong:
            await user_store.authenticate(registered_user["email"], "definitely-wrong")

        assert type(unknown.value) is type(wrong.value)
        assert str(unknown.value) == str(wrong.value)
        assert unknown.value.to_payload() == wrong.value.to_payload()
        assert unknown.value.http_status() == wrong.value.http_status() == 401

    async def test_overlong_password_is_just_invalid(self, user_store, registered_user):
        with pytest.raises(InvalidCredentialsError):
            await user_store.authenticate(registered_user["email"], "p" * 200)

    async def test_unreadable_stored_hash_is_a_storage_error(self, user_store, registered_user, sessions):
        async with sessions() as session, session.begin():
            row = (await session.execute(select(UserRow))).scalar_one()
            row.hashed_password = b"not-a-bcrypt-hash"

        with pytest.raises(RepositoryError) as exc_info:
            await user_store.authenticate(registered_user["email"], registered_user["password"])

        assert not isinstance(exc_info.value, InvalidCredentialsError)


@pytest.mark.asyncio
class TestUserStoreExists:
    async def test_exists_for_registered_user(self, user_store, registered_user):
        user_id = await user_store.authenticate(registered_user["email"], registered_user["password"])
        assert await user_store.exists(user_id) is True

    @pytest.mark.parametrize("user_id", [0, -1, 42, 2**63, 2**70])
    async def test_unknown_id_is_false_not_error(self, user_store, user_id):
        assert await user_store.exists(user_id) is False


@pytest.mark.asyncio
class TestUserStoreVerificationWork:
    """
    Both authentication failure paths must run exactly one bcrypt verification,
    so neither answers measurably faster than the other.
    """

    @pytest.fixture
    def verify_calls(self, monkeypatch):
        calls: list[bytes] = []
        original = user_store_module.verify_password_async

        async def recording_verify(password: str, hashed: bytes) -> bool:
            calls.append(hashed)
            return await original(password, hashed)

        monkeypatch.setattr(user_store_module, "verify_password_async", recording_verify)
        return calls

    async def test_unknown_email_verifies_against_dummy_hash(self, user_store, registered_user, verify_calls):
        with pytest.raises(InvalidCredentialsError):
            await user_store.authenticate("nobody@example.com", registered_user["password"])

        assert verify_calls == [user_store._dummy_hash]

    async def test_wrong_password_verifies_against_stored_hash(self, user_store, registered_user, verify_calls, sessions):
        with pytest.raises(InvalidCredentialsError):
            await user_store.authenticate(registered_user["email"], "definitely-wrong")

        async with sessions() as session:
            stored = (await session.execute(select(UserRow.hashed_password))).scalar_one()

        assert verify_calls == [bytes(stored)]
        assert verify_calls[0] != user_store._dummy_hash
