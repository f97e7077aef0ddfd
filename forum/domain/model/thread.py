"""Thread entity.

Threads are owned by the thread CRUD endpoints; the vote subsystem only
needs to know whether one exists.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import ThreadId, UserId


class Thread(DomainModel):
    """Thread entity.

    Content is either text or the URL of an uploaded image.
    """

    id: ThreadId
    author_id: UserId
    title: str = Field(min_length=3, max_length=100)
    content: str = Field(min_length=3, max_length=1000)
    image_ref: Optional[str] = None  # Media store reference when content is an image
    created_at: datetime = Field(default_factory=datetime.now)
