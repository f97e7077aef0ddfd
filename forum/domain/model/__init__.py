"""Domain model entities for the forum."""

from forum.domain.model.comment import Comment
from forum.domain.model.receipt import VoteReceipt
from forum.domain.model.thread import Thread
from forum.domain.model.vote import Vote

__all__ = [
    "Thread",
    "Comment",
    "Vote",
    "VoteReceipt",
]
