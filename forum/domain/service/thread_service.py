"""Thread domain service."""

import logfire

from forum.domain.model.thread import Thread
from forum.domain.repository import ThreadRepository
from forum.domain.value import ThreadId

from .base import Service


class ThreadService(Service):
    """Domain service for thread lookups."""

    def __init__(self, thread_repository: ThreadRepository) -> None:
        """Initialize thread service.

        Args:
            thread_repository: Thread repository
        """
        self.thread_repository = thread_repository

    async def get_thread_by_id(self, thread_id: ThreadId) -> Thread | None:
        """Get a thread by ID.

        Args:
            thread_id: Thread ID

        Returns:
            Thread if found, None otherwise
        """
        with logfire.span("thread_service.get_thread_by_id", thread_id=str(thread_id)):
            thread = await self.thread_repository.find_by_id(thread_id)

            if thread:
                logfire.info("Thread found", thread_id=str(thread_id))
            else:
                logfire.warn("Thread not found", thread_id=str(thread_id))

            return thread
