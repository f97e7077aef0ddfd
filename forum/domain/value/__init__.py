"""Domain value objects for the forum."""

from forum.domain.value.identifiers import CommentId, ThreadId, UserId, VoteId
from forum.domain.value.types import (
    Identity,
    Role,
    TargetKind,
    VoteDirection,
    VoteKey,
    VoteOutcome,
    VoteTarget,
    VoteTotals,
)

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "CommentId",
    "VoteId",
    # Types
    "Role",
    "Identity",
    "TargetKind",
    "VoteTarget",
    "VoteKey",
    "VoteDirection",
    "VoteOutcome",
    "VoteTotals",
]
