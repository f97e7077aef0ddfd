"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .receipt import InMemoryVoteReceiptRepository
from .thread import InMemoryThreadRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryThreadRepository",
    "InMemoryVoteReceiptRepository",
    "InMemoryVoteRepository",
]
