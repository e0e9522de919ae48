import uuid

from sqlalchemy import Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base

RATING_KINDS = ("like", "dislike")


class Rating(Base):
    """A like/dislike or a free-text comment left by an identity on a title.

    Ratings and comments share the table but never the row: a rating row has
    ``kind`` set, a comment row has ``comment`` set.
    """

    __tablename__ = "ratings"

    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    title_name: Mapped[str] = mapped_column(String(255), nullable=False)
    kind: Mapped[str | None] = mapped_column(String(10), nullable=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_ratings_title_owner", "title_name", "owner_id"),
        # One like/dislike per identity and title; comments are unlimited
        Index(
            "uq_ratings_owner_title_kind",
            "owner_id",
            "title_name",
            unique=True,
            postgresql_where=text("kind IS NOT NULL"),
            sqlite_where=text("kind IS NOT NULL"),
        ),
    )
