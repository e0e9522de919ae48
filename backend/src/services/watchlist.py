import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from clients.types import Identity
from core.database import dialect_insert
from core.sanitization import sanitize_title_name
from models.watchlist import WatchlistEntry

logger = logging.getLogger(__name__)


@dataclass
class WatchlistResult:
    ok: bool
    message: str
    entry: WatchlistEntry | None = None


class WatchlistSnapshot:
    """Membership view over the last fetched list; not refreshed on its own."""

    def __init__(self, entries: list[WatchlistEntry]):
        self.entries = entries
        self._names = {e.title_name for e in entries}

    def is_member(self, title_name: str) -> bool:
        return title_name in self._names


class WatchlistService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, identity: Identity, title_name: str) -> WatchlistResult:
        name = sanitize_title_name(title_name)
        if not name:
            return WatchlistResult(False, "Title name is required")

        # The (owner_id, title_name) constraint decides "already present";
        # no prior read, so concurrent adds cannot both succeed.
        insert = dialect_insert(self.db)
        stmt = (
            insert(WatchlistEntry)
            .values(id=uuid.uuid4(), owner_id=identity.id, title_name=name)
            .on_conflict_do_nothing(index_elements=["owner_id", "title_name"])
            .returning(WatchlistEntry)
        )
        result = await self.db.execute(stmt)
        entry = result.scalars().first()

        if entry is None:
            return WatchlistResult(False, "This title is already in your list")

        logger.info("Watchlist add: %s -> %s", identity.id, name)
        return WatchlistResult(True, f'"{name}" was added to your list', entry)

    async def remove(self, identity: Identity, entry_id: uuid.UUID) -> WatchlistResult:
        stmt = delete(WatchlistEntry).where(
            WatchlistEntry.id == entry_id,
            WatchlistEntry.owner_id == identity.id,
        )
        result = await self.db.execute(stmt)
        await self.db.flush()

        if not result.rowcount:
            return WatchlistResult(False, "Entry not found in your list")

        logger.info("Watchlist remove: %s -> %s", identity.id, entry_id)
        return WatchlistResult(True, "Title removed from your list")

    async def list(self, identity: Identity) -> list[WatchlistEntry]:
        stmt = (
            select(WatchlistEntry)
            .where(WatchlistEntry.owner_id == identity.id)
            .order_by(WatchlistEntry.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def snapshot(self, identity: Identity) -> WatchlistSnapshot:
        return WatchlistSnapshot(await self.list(identity))

    async def clear(self, identity: Identity) -> int:
        result = await self.db.execute(
            delete(WatchlistEntry).where(WatchlistEntry.owner_id == identity.id)
        )
        return result.rowcount
