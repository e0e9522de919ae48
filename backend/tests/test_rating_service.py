import asyncio
from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from models.rating import Rating
from services.rating import RatingService


async def _rating_rows(db, identity, name):
    return await db.scalar(
        select(func.count(Rating.id)).where(
            Rating.owner_id == identity.id,
            Rating.title_name == name,
            Rating.kind.is_not(None),
        )
    )


async def test_like_twice_toggles_off(db, alice):
    service = RatingService(db)

    first = await service.rate(alice, "Inception", "like")
    assert first.state == "created"
    second = await service.rate(alice, "Inception", "like")
    assert second.state == "removed"
    assert second.kind is None

    assert await _rating_rows(db, alice, "Inception") == 0


async def test_switching_kind_updates_the_row(db, alice):
    service = RatingService(db)
    await service.rate(alice, "Inception", "like")
    result = await service.rate(alice, "Inception", "dislike")

    assert result.state == "updated"
    assert result.kind == "dislike"
    assert await _rating_rows(db, alice, "Inception") == 1


async def test_unknown_kind_rejected(db, alice):
    result = await RatingService(db).rate(alice, "Inception", "love")
    assert result.ok is False
    assert await _rating_rows(db, alice, "Inception") == 0


async def test_comments_are_separate_rows(db, alice):
    service = RatingService(db)
    await service.rate(alice, "Dune", "like")
    first = await service.comment(alice, "Dune", "Great sound design")
    second = await service.comment(alice, "Dune", "Watched it again")

    assert first.kind is None
    assert first.comment == "Great sound design"
    assert first.id != second.id
    # the comment rows do not disturb the rating toggle
    assert (await service.rate(alice, "Dune", "like")).state == "removed"


async def test_empty_comment_is_not_stored(db, alice):
    assert await RatingService(db).comment(alice, "Dune", "  \x00 ") is None


async def test_delete_comment_scoped_to_owner(db, alice, bob):
    service = RatingService(db)
    row = await service.comment(alice, "Dune", "Mine")

    assert await service.delete_comment(bob, row.id) is False
    assert await service.delete_comment(alice, row.id) is True
    assert await service.delete_comment(alice, row.id) is False


async def test_summary(db, alice, bob):
    service = RatingService(db)
    await service.rate(alice, "Dune", "like")
    await service.rate(bob, "Dune", "dislike")
    await service.comment(bob, "Dune", "Too long")

    summary = await service.summary("Dune", alice)
    assert summary.likes == 1
    assert summary.dislikes == 1
    assert summary.my_rating == "like"
    assert [c.comment for c in summary.comments] == ["Too long"]

    anonymous = await service.summary("Dune")
    assert anonymous.my_rating is None


async def test_storage_rejects_second_rating_row(db, alice):
    db.add(Rating(owner_id=alice.id, title_name="Inception", kind="like"))
    await db.flush()
    db.add(Rating(owner_id=alice.id, title_name="Inception", comment="Great"))
    db.add(Rating(owner_id=alice.id, title_name="Inception", comment="Again"))
    await db.flush()

    db.add(Rating(owner_id=alice.id, title_name="Inception", kind="dislike"))
    with pytest.raises(IntegrityError):
        await db.flush()


async def test_rate_after_stale_read_applies_to_stored_row(db, alice):
    db.add(Rating(owner_id=alice.id, title_name="Inception", kind="like"))
    await db.flush()
    service = RatingService(db)
    lookup = service._current_rating
    reads = []

    async def stale_first(identity, name):
        reads.append(name)
        if len(reads) == 1:
            return None
        return await lookup(identity, name)

    with patch.object(service, "_current_rating", stale_first):
        result = await service.rate(alice, "Inception", "dislike")

    assert result.state == "updated"
    assert len(reads) == 2
    assert await _rating_rows(db, alice, "Inception") == 1
    assert (await service.summary("Inception", alice)).my_rating == "dislike"


async def test_concurrent_ratings_keep_one_row(session_factory, alice):
    async def rate(kind):
        async with session_factory() as session:
            result = await RatingService(session).rate(alice, "Inception", kind)
            await session.commit()
            return result

    results = await asyncio.gather(rate("like"), rate("dislike"))

    assert all(r.ok for r in results)
    assert sorted(r.state for r in results) == ["created", "updated"]
    async with session_factory() as session:
        assert await _rating_rows(session, alice, "Inception") == 1
