"""Repository interfaces for the forum domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from forum.domain.repository.comment import CommentRepository
from forum.domain.repository.receipt import VoteReceiptRepository
from forum.domain.repository.thread import ThreadRepository
from forum.domain.repository.vote import VoteRepository

__all__ = [
    "ThreadRepository",
    "CommentRepository",
    "VoteRepository",
    "VoteReceiptRepository",
]
