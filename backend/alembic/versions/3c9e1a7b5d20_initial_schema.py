"""initial schema: profiles, watchlist_entries, ratings

Revision ID: 3c9e1a7b5d20
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c9e1a7b5d20"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=True),
    )
    op.create_table(
        "watchlist_entries",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("title_name", sa.String(255), nullable=False),
        sa.UniqueConstraint("owner_id", "title_name", name="uq_watchlist_owner_title"),
    )
    op.create_index("ix_watchlist_entries_owner_id", "watchlist_entries", ["owner_id"])
    op.create_table(
        "ratings",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("title_name", sa.String(255), nullable=False),
        sa.Column("kind", sa.String(10), nullable=True),
        sa.Column("comment", sa.Text(), nullable=True),
    )
    op.create_index("ix_ratings_title_owner", "ratings", ["title_name", "owner_id"])


def downgrade() -> None:
    op.drop_index("ix_ratings_title_owner", table_name="ratings")
    op.drop_table("ratings")
    op.drop_index("ix_watchlist_entries_owner_id", table_name="watchlist_entries")
    op.drop_table("watchlist_entries")
    op.drop_table("profiles")
