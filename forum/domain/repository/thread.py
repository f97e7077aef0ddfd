"""Thread repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.thread import Thread
from forum.domain.value import ThreadId


class ThreadRepository(ABC):
    """Repository for Thread entity.

    Only the operations the vote subsystem needs: lookup, plus save for
    seeding data.
    """

    @abstractmethod
    async def find_by_id(self, thread_id: ThreadId) -> Optional[Thread]:
        """Find a thread by ID.

        Args:
            thread_id: The thread's unique identifier

        Returns:
            The thread if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, thread: Thread) -> Thread:
        """Save a thread (create)."""
        pass
