"""Strongly typed identifiers for forum entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
ThreadId = NewType("ThreadId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
