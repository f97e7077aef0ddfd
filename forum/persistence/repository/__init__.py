"""PostgreSQL repository implementations."""

from forum.persistence.repository.comment import PostgresCommentRepository
from forum.persistence.repository.receipt import PostgresVoteReceiptRepository
from forum.persistence.repository.thread import PostgresThreadRepository
from forum.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresThreadRepository",
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresVoteReceiptRepository",
]
