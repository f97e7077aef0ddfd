"""initial_schema

Create the schema for the forum voting service:
- Threads and comments (one level of reply nesting); owned by the CRUD
  services, the vote service only reads them
- Votes (up/down, one per voter per target)
- Vote receipts (idempotency keys for cast requests)
- Triggers removing a target's votes when the target is deleted

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:12:44.501371

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE target_kind AS ENUM ('thread', 'comment');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_outcome AS ENUM ('created', 'updated', 'removed');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # THREADS table
    # ========================================================================
    op.create_table(
        "threads",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_ref", sa.String(255), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_threads_author_id", "threads", ["author_id"])

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("content", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["thread_id"], ["threads.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_thread_id", "comments", ["thread_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column(
            "target_kind",
            postgresql.ENUM("thread", "comment", name="target_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("direction IN (1, -1)", name="vote_direction_valid"),
        sa.UniqueConstraint(
            "voter_id", "target_kind", "target_id", name="unique_vote"
        ),
    )
    op.create_index(
        "idx_votes_target_direction",
        "votes",
        ["target_id", "target_kind", "direction"],
    )

    # ========================================================================
    # VOTE RECEIPTS table
    # ========================================================================
    op.create_table(
        "vote_receipts",
        sa.Column("voter_id", sa.UUID(), nullable=False),
        sa.Column("request_id", sa.String(255), nullable=False),
        sa.Column(
            "target_kind",
            postgresql.ENUM("thread", "comment", name="target_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column(
            "outcome",
            postgresql.ENUM(
                "created", "updated", "removed", name="vote_outcome", create_type=False
            ),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("voter_id", "request_id"),
    )

    # ========================================================================
    # TRIGGERS
    # ========================================================================

    # Votes reference their target polymorphically, so no foreign key can
    # cascade. These triggers remove a target's votes when it is deleted.
    op.execute("""
        CREATE OR REPLACE FUNCTION delete_thread_votes()
        RETURNS TRIGGER AS $$
        BEGIN
            DELETE FROM votes
            WHERE target_kind = 'thread' AND target_id = OLD.id;
            RETURN OLD;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE OR REPLACE FUNCTION delete_comment_votes()
        RETURNS TRIGGER AS $$
        BEGIN
            DELETE FROM votes
            WHERE target_kind = 'comment' AND target_id = OLD.id;
            RETURN OLD;
        END;
        $$ LANGUAGE plpgsql
    """)

    op.execute("""
        CREATE TRIGGER delete_thread_votes
        AFTER DELETE ON threads
        FOR EACH ROW
        EXECUTE FUNCTION delete_thread_votes()
    """)

    # Also fires for comments removed by the thread_id/parent_id cascades
    op.execute("""
        CREATE TRIGGER delete_comment_votes
        AFTER DELETE ON comments
        FOR EACH ROW
        EXECUTE FUNCTION delete_comment_votes()
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP TRIGGER IF EXISTS delete_comment_votes ON comments")
    op.execute("DROP TRIGGER IF EXISTS delete_thread_votes ON threads")

    op.execute("DROP FUNCTION IF EXISTS delete_comment_votes()")
    op.execute("DROP FUNCTION IF EXISTS delete_thread_votes()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("vote_receipts")
    op.drop_table("votes")
    op.drop_table("comments")
    op.drop_table("threads")

    op.execute("DROP TYPE IF EXISTS vote_outcome")
    op.execute("DROP TYPE IF EXISTS target_kind")
