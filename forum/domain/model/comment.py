"""Comment entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import CommentId, ThreadId, UserId


class Comment(DomainModel):
    """Comment entity.

    A comment belongs to a thread and is either top-level or a direct reply
    to a top-level comment (one level of nesting).
    """

    id: CommentId
    thread_id: ThreadId
    author_id: UserId
    content: str = Field(min_length=1, max_length=255)
    parent_id: Optional[CommentId] = None
    created_at: datetime = Field(default_factory=datetime.now)
