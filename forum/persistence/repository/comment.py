"""PostgreSQL implementation of Comment repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId
from forum.persistence.database import store_errors
from forum.persistence.mappers import comment_to_dict, row_to_comment
from forum.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        with store_errors():
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        with store_errors():
            await self.session.execute(stmt)
        return comment
