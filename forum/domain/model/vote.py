"""Vote entity.

A vote is one user's up or down opinion of a thread or comment.
Each user holds at most one vote per target.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import (
    TargetKind,
    UserId,
    VoteDirection,
    VoteId,
    VoteKey,
    VoteTarget,
)


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per target (enforced by database unique constraint)
    - Voter and target never change; only the direction can flip
    - Polymorphic reference to the target (thread or comment)
    """

    id: VoteId
    voter_id: UserId
    target_kind: TargetKind
    target_id: UUID  # ThreadId or CommentId (both are UUIDs)
    direction: VoteDirection
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def target(self) -> VoteTarget:
        return VoteTarget(kind=self.target_kind, id=self.target_id)

    @property
    def key(self) -> VoteKey:
        return VoteKey(voter_id=self.voter_id, target=self.target)

    def flipped(self, direction: VoteDirection) -> "Vote":
        """Return a copy of this vote pointing the other way."""
        return self.model_copy(
            update={"direction": direction, "updated_at": datetime.now()}
        )
