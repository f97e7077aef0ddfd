"""PostgreSQL implementation of Thread repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.model import Thread
from forum.domain.repository import ThreadRepository
from forum.domain.value import ThreadId
from forum.persistence.database import store_errors
from forum.persistence.mappers import row_to_thread, thread_to_dict
from forum.persistence.tables import threads_table


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID."""
        stmt = select(threads_table).where(threads_table.c.id == thread_id)
        with store_errors():
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_thread(row._asdict()) if row else None

    async def save(self, thread: Thread) -> Thread:
        """Save a thread."""
        stmt = insert(threads_table).values(**thread_to_dict(thread))
        with store_errors():
            await self.session.execute(stmt)
        return thread
