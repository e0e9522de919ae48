"""unique like/dislike per owner and title

Revision ID: 8e4b2f6d1a37
Revises: 3c9e1a7b5d20
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "8e4b2f6d1a37"
down_revision: Union[str, None] = "3c9e1a7b5d20"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Keep the newest rating where earlier check-then-insert races left duplicates
    op.execute(
        """
        DELETE FROM ratings
        WHERE kind IS NOT NULL
          AND EXISTS (
            SELECT 1 FROM ratings AS newer
            WHERE newer.owner_id = ratings.owner_id
              AND newer.title_name = ratings.title_name
              AND newer.kind IS NOT NULL
              AND (newer.created_at > ratings.created_at
                   OR (newer.created_at = ratings.created_at AND newer.id > ratings.id))
          )
        """
    )
    op.create_index(
        "uq_ratings_owner_title_kind",
        "ratings",
        ["owner_id", "title_name"],
        unique=True,
        postgresql_where=sa.text("kind IS NOT NULL"),
        sqlite_where=sa.text("kind IS NOT NULL"),
    )


def downgrade() -> None:
    op.drop_index("uq_ratings_owner_title_kind", table_name="ratings")
