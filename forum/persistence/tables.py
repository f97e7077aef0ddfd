"""SQLAlchemy table definitions for the forum.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

target_kind_enum = postgresql.ENUM(
    "thread", "comment", name="target_kind", create_type=False
)
vote_outcome_enum = postgresql.ENUM(
    "created", "updated", "removed", name="vote_outcome", create_type=False
)

# ============================================================================
# THREADS TABLE (owned by thread CRUD; votes only reference it)
# ============================================================================
threads_table = Table(
    "threads",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("author_id", UUID, nullable=False),
    Column("title", String(100), nullable=False),
    Column("content", Text, nullable=False),  # Text, or image URL from the media store
    Column("image_ref", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_threads_author_id", threads_table.c.author_id)

# ============================================================================
# COMMENTS TABLE (one level of replies)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "thread_id", UUID, ForeignKey("threads.id", ondelete="CASCADE"), nullable=False
    ),
    Column("author_id", UUID, nullable=False),
    Column(
        "parent_id", UUID, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    ),
    Column("content", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_thread_id", comments_table.c.thread_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("voter_id", UUID, nullable=False),
    Column("target_kind", target_kind_enum, nullable=False),
    Column("target_id", UUID, nullable=False),
    Column("direction", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("direction IN (1, -1)", name="vote_direction_valid"),
    # The serialization point for concurrent casts: one vote per voter per target
    UniqueConstraint("voter_id", "target_kind", "target_id", name="unique_vote"),
)

# Backs count_by_direction
Index(
    "idx_votes_target_direction",
    votes_table.c.target_id,
    votes_table.c.target_kind,
    votes_table.c.direction,
)

# ============================================================================
# VOTE RECEIPTS TABLE (idempotency keys)
# ============================================================================
vote_receipts_table = Table(
    "vote_receipts",
    metadata,
    Column("voter_id", UUID, primary_key=True),
    Column("request_id", String(255), primary_key=True),
    Column("target_kind", target_kind_enum, nullable=False),
    Column("target_id", UUID, nullable=False),
    Column("direction", SmallInteger, nullable=False),
    Column("outcome", vote_outcome_enum, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("direction IN (1, -1)", name="receipt_direction_valid"),
)

# Backs the expired-receipt purge
Index("idx_vote_receipts_created_at", vote_receipts_table.c.created_at)
