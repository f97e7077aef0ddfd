"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId


class CommentRepository(ABC):
    """Repository for Comment entity."""

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create)."""
        pass
