"""receipt_direction_and_ttl

Record the requested direction on vote receipts, so an idempotency key only
replays a cast with the same direction, and index receipts by age for the
expired-receipt purge.

Receipts only live for a short TTL, so existing ones are dropped rather
than backfilled.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19 16:40:12.118205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: Union[str, Sequence[str], None] = "0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("DELETE FROM vote_receipts")

    op.add_column(
        "vote_receipts",
        sa.Column("direction", sa.SmallInteger(), nullable=False),
    )
    op.create_check_constraint(
        "receipt_direction_valid", "vote_receipts", "direction IN (1, -1)"
    )
    op.create_index(
        "idx_vote_receipts_created_at", "vote_receipts", ["created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_vote_receipts_created_at", table_name="vote_receipts")
    op.drop_constraint("receipt_direction_valid", "vote_receipts", type_="check")
    op.drop_column("vote_receipts", "direction")
