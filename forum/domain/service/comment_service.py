"""Comment domain service."""

import logfire

from forum.domain.model.comment import Comment
from forum.domain.repository import CommentRepository
from forum.domain.value import CommentId

from .base import Service


class CommentService(Service):
    """Domain service for comment lookups."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        self.comment_repository = comment_repository

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID, or None if it doesn't exist."""
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment
