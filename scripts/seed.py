"""Seed script to populate the database with sample data for a local identity."""
import asyncio
import sys
import uuid
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend" / "src"))

from clients.types import Identity  # noqa: E402
from core.database import engine, get_db  # noqa: E402
from models import Base  # noqa: E402
from services.profile import ProfileService  # noqa: E402
from services.rating import RatingService  # noqa: E402
from services.watchlist import WatchlistService  # noqa: E402


async def seed(user_id: uuid.UUID, email: str):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    identity = Identity(id=user_id, email=email, access_token="")

    async with get_db() as db:
        profiles = ProfileService(db, identity_client=None)
        if await profiles.get(identity) is None:
            await profiles.create(user_id, email, "Demo User", "912345678", "Lisbon")

        watchlist = WatchlistService(db)
        for title in ["Inception", "Parasite", "Dune", "The Office"]:
            result = await watchlist.add(identity, title)
            print(result.message)

        ratings = RatingService(db)
        await ratings.rate(identity, "Inception", "like")
        await ratings.rate(identity, "Dune", "dislike")
        await ratings.comment(identity, "Parasite", "Still the best ending in years.")

    await engine.dispose()
    print(f"Seeded data for {email} ({user_id})")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python scripts/seed.py <identity-uuid> <email>")
        sys.exit(1)
    asyncio.run(seed(uuid.UUID(sys.argv[1]), sys.argv[2]))
