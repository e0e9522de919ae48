import logging
import uuid
from dataclasses import dataclass, field

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from clients.types import Identity
from core.database import dialect_insert
from core.sanitization import sanitize_comment, sanitize_title_name
from models.rating import RATING_KINDS, Rating

logger = logging.getLogger(__name__)


@dataclass
class RateResult:
    ok: bool
    message: str
    state: str | None = None  # "created" | "updated" | "removed"
    kind: str | None = None


@dataclass
class TitleSummary:
    title_name: str
    likes: int = 0
    dislikes: int = 0
    my_rating: str | None = None
    comments: list[Rating] = field(default_factory=list)


class RatingService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def rate(self, identity: Identity, title_name: str, kind: str) -> RateResult:
        """Toggle a like/dislike: insert, flip, or remove on a repeat."""
        name = sanitize_title_name(title_name)
        if not name:
            return RateResult(False, "Title name is required")
        if kind not in RATING_KINDS:
            return RateResult(False, f"Unknown rating '{kind}'")

        existing = await self._current_rating(identity, name)
        if existing is None:
            # The partial unique index on (owner_id, title_name) decides who
            # creates the row; a loser falls through to the toggle below.
            insert = dialect_insert(self.db)
            stmt = (
                insert(Rating)
                .values(id=uuid.uuid4(), owner_id=identity.id, title_name=name, kind=kind)
                .on_conflict_do_nothing(
                    index_elements=["owner_id", "title_name"],
                    index_where=Rating.kind.is_not(None),
                )
                .returning(Rating)
            )
            if (await self.db.execute(stmt)).scalars().first() is not None:
                return RateResult(True, "Rating saved", "created", kind)

            existing = await self._current_rating(identity, name)
            if existing is None:
                return RateResult(False, "Rating changed meanwhile, try again")

        if existing.kind == kind:
            await self.db.delete(existing)
            await self.db.flush()
            return RateResult(True, "Rating removed", "removed", None)

        existing.kind = kind
        await self.db.flush()
        return RateResult(True, "Rating updated", "updated", kind)

    async def _current_rating(self, identity: Identity, name: str) -> Rating | None:
        stmt = select(Rating).where(
            Rating.owner_id == identity.id,
            Rating.title_name == name,
            Rating.kind.is_not(None),
        )
        return (await self.db.execute(stmt)).scalars().first()

    async def comment(self, identity: Identity, title_name: str, text: str) -> Rating | None:
        name = sanitize_title_name(title_name)
        text = sanitize_comment(text)
        if not name or not text:
            return None

        row = Rating(owner_id=identity.id, title_name=name, comment=text)
        self.db.add(row)
        await self.db.flush()
        logger.info("Comment %s added by %s on %s", row.id, identity.id, name)
        return row

    async def delete_comment(self, identity: Identity, comment_id: uuid.UUID) -> bool:
        stmt = delete(Rating).where(
            Rating.id == comment_id,
            Rating.owner_id == identity.id,
            Rating.comment.is_not(None),
        )
        result = await self.db.execute(stmt)
        await self.db.flush()
        return bool(result.rowcount)

    async def summary(self, title_name: str, identity: Identity | None = None) -> TitleSummary:
        name = sanitize_title_name(title_name)
        summary = TitleSummary(title_name=name)

        counts = await self.db.execute(
            select(Rating.kind, func.count(Rating.id))
            .where(Rating.title_name == name, Rating.kind.is_not(None))
            .group_by(Rating.kind)
        )
        for kind, count in counts.all():
            if kind == "like":
                summary.likes = count
            elif kind == "dislike":
                summary.dislikes = count

        comments = await self.db.execute(
            select(Rating)
            .where(Rating.title_name == name, Rating.comment.is_not(None))
            .order_by(Rating.created_at.desc())
        )
        summary.comments = list(comments.scalars().all())

        if identity is not None:
            summary.my_rating = await self.db.scalar(
                select(Rating.kind).where(
                    Rating.owner_id == identity.id,
                    Rating.title_name == name,
                    Rating.kind.is_not(None),
                )
            )
        return summary

    async def clear(self, identity: Identity) -> int:
        result = await self.db.execute(delete(Rating).where(Rating.owner_id == identity.id))
        return result.rowcount
