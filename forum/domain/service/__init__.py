"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .identity_service import IdentityService
from .thread_service import ThreadService
from .vote_aggregator import VoteAggregator
from .vote_service import CastVoteResult, VoteService
from .vote_state import CreateVote, FlipVote, RemoveVote, VoteAction, decide

__all__ = [
    "CastVoteResult",
    "CommentService",
    "CreateVote",
    "FlipVote",
    "IdentityService",
    "RemoveVote",
    "Service",
    "ThreadService",
    "VoteAction",
    "VoteAggregator",
    "VoteService",
    "decide",
]
