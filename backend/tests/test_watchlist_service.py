import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from models.watchlist import WatchlistEntry
from services.watchlist import WatchlistService, WatchlistSnapshot


async def _count(db, identity, name):
    return await db.scalar(
        select(func.count(WatchlistEntry.id)).where(
            WatchlistEntry.owner_id == identity.id,
            WatchlistEntry.title_name == name,
        )
    )


async def test_add_list_duplicate_remove_scenario(db, alice):
    service = WatchlistService(db)

    added = await service.add(alice, "Inception")
    assert added.ok is True
    assert "Inception" in added.message

    entries = await service.list(alice)
    assert [e.title_name for e in entries] == ["Inception"]

    again = await service.add(alice, "Inception")
    assert again.ok is False
    assert "already in your list" in again.message
    assert await _count(db, alice, "Inception") == 1

    removed = await service.remove(alice, entries[0].id)
    assert removed.ok is True
    assert await service.list(alice) == []


async def test_add_rejects_empty_name(db, alice):
    service = WatchlistService(db)
    result = await service.add(alice, "   ")
    assert result.ok is False
    assert result.message == "Title name is required"
    assert await service.list(alice) == []


async def test_same_title_for_two_identities(db, alice, bob):
    service = WatchlistService(db)
    assert (await service.add(alice, "Dune")).ok is True
    assert (await service.add(bob, "Dune")).ok is True
    assert await _count(db, alice, "Dune") == 1
    assert await _count(db, bob, "Dune") == 1


async def test_remove_by_other_identity_has_no_effect(db, alice, bob):
    service = WatchlistService(db)
    entry = (await service.add(alice, "Parasite")).entry

    result = await service.remove(bob, entry.id)
    assert result.ok is False
    assert result.message == "Entry not found in your list"
    assert [e.id for e in await service.list(alice)] == [entry.id]


async def test_list_empty_is_empty_list(db, alice):
    assert await WatchlistService(db).list(alice) == []


async def test_list_newest_first(db, alice, bob):
    now = datetime.now(timezone.utc)
    db.add_all([
        WatchlistEntry(owner_id=alice.id, title_name="Old", created_at=now - timedelta(days=2)),
        WatchlistEntry(owner_id=alice.id, title_name="New", created_at=now),
        WatchlistEntry(owner_id=alice.id, title_name="Middle", created_at=now - timedelta(days=1)),
        WatchlistEntry(owner_id=bob.id, title_name="Not mine", created_at=now),
    ])
    await db.flush()

    entries = await WatchlistService(db).list(alice)
    assert [e.title_name for e in entries] == ["New", "Middle", "Old"]


async def test_snapshot_membership_is_not_live(db, alice):
    service = WatchlistService(db)
    await service.add(alice, "Inception")

    snapshot = await service.snapshot(alice)
    assert snapshot.is_member("Inception") is True
    assert snapshot.is_member("Dune") is False

    await service.add(alice, "Dune")
    assert snapshot.is_member("Dune") is False
    assert (await service.snapshot(alice)).is_member("Dune") is True


def test_snapshot_matches_exact_name():
    snapshot = WatchlistSnapshot([WatchlistEntry(title_name="Inception")])
    assert snapshot.is_member("Inception") is True
    assert snapshot.is_member("inception") is False


async def test_clear_only_touches_owner(db, alice, bob):
    service = WatchlistService(db)
    await service.add(alice, "A")
    await service.add(alice, "B")
    await service.add(bob, "A")

    assert await service.clear(alice) == 2
    assert await service.list(alice) == []
    assert len(await service.list(bob)) == 1


async def test_storage_rejects_duplicate_entry(db, alice):
    db.add(WatchlistEntry(owner_id=alice.id, title_name="Inception"))
    await db.flush()

    db.add(WatchlistEntry(owner_id=alice.id, title_name="Inception"))
    with pytest.raises(IntegrityError):
        await db.flush()


async def test_concurrent_adds_keep_one_entry(session_factory, alice):
    async def add():
        async with session_factory() as session:
            result = await WatchlistService(session).add(alice, "Inception")
            await session.commit()
            return result

    results = await asyncio.gather(add(), add())

    assert sorted(r.ok for r in results) == [False, True]
    assert [r.message for r in results if not r.ok] == ["This title is already in your list"]
    async with session_factory() as session:
        assert await _count(session, alice, "Inception") == 1
