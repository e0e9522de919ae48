import uuid

from sqlalchemy import String, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class WatchlistEntry(Base):
    __tablename__ = "watchlist_entries"
    __table_args__ = (
        UniqueConstraint("owner_id", "title_name", name="uq_watchlist_owner_title"),
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    title_name: Mapped[str] = mapped_column(String(255), nullable=False)
