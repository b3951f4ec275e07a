from datetime import datetime, timedelta, timezone

import pytest

from otp_service.domain.entities import PasscodeRecord

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def rec(subject: str, code: str = "123456", minutes: int = 5) -> PasscodeRecord:
    return PasscodeRecord(
        subject=subject, code=code, expires_at=T0 + timedelta(minutes=minutes)
    )


@pytest.mark.asyncio
async def test_put_get_delete(store):
    await store.put(rec("a@gmail.com"))
    got = await store.get("a@gmail.com")
    assert got is not None and got.code == "123456"

    await store.delete("a@gmail.com")
    assert await store.get("a@gmail.com") is None

    # idempotent
    await store.delete("a@gmail.com")
    assert len(store) == 0


@pytest.mark.asyncio
async def test_put_replaces_existing_record(store):
    await store.put(rec("a@gmail.com", code="111111"))
    await store.put(rec("a@gmail.com", code="222222"))
    assert len(store) == 1
    assert (await store.get("a@gmail.com")).code == "222222"


@pytest.mark.asyncio
async def test_get_returns_expired_records(store):
    await store.put(rec("a@gmail.com", minutes=-1))
    assert await store.get("a@gmail.com") is not None


@pytest.mark.asyncio
async def test_purge_expired_only_drops_stale(store):
    await store.put(rec("old@gmail.com", minutes=1))
    await store.put(rec("new@gmail.com", minutes=10))

    removed = await store.purge_expired(T0 + timedelta(minutes=5))
    assert removed == 1
    assert await store.get("old@gmail.com") is None
    assert await store.get("new@gmail.com") is not None


@pytest.mark.asyncio
async def test_locked_is_exclusive(store):
    lock_a = store.locked("a@gmail.com")
    async with lock_a:
        assert store.locked("b@gmail.com").locked()
    assert not lock_a.locked()


def test_separate_stores_are_isolated():
    from otp_service.infrastructure.memory.passcode_store import (
        InMemoryPasscodeStore,
    )

    s1, s2 = InMemoryPasscodeStore(), InMemoryPasscodeStore()
    assert s1.locked("x") is not s2.locked("x")


@pytest.mark.asyncio
async def test_purge_expired_releases_the_lock(store):
    await store.put(rec("old@gmail.com", minutes=-1))

    assert await store.purge_expired(T0) == 1
    assert not store.locked("old@gmail.com").locked()

    # a read-modify-write right after a purge does not block
    async with store.locked("a@gmail.com"):
        await store.put(rec("a@gmail.com"))
    assert len(store) == 1
