"""In-memory vote repository for testing."""

from typing import Optional
from uuid import UUID, uuid4

from forum.domain.error import VoteConflictError, VoteNotFoundError
from forum.domain.model.vote import Vote
from forum.domain.repository.vote import VoteRepository
from forum.domain.value import (
    TargetKind,
    UserId,
    VoteDirection,
    VoteId,
    VoteKey,
    VoteTarget,
)

_Key = tuple[UserId, TargetKind, UUID]


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Votes are indexed by (voter, kind, target id), which gives the same
    one-vote-per-key guarantee as the unique constraint in PostgreSQL.
    """

    def __init__(self) -> None:
        self._votes: dict[_Key, Vote] = {}

    @staticmethod
    def _index(key: VoteKey) -> _Key:
        return (key.voter_id, key.target.kind, key.target.id)

    async def find(self, key: VoteKey) -> Optional[Vote]:
        """Find a user's vote on a target."""
        return self._votes.get(self._index(key))

    async def create(self, key: VoteKey, direction: VoteDirection) -> Vote:
        """Create a vote.

        Raises:
            VoteConflictError: If a vote already exists for this key
        """
        index = self._index(key)
        if index in self._votes:
            raise VoteConflictError(str(key))

        vote = Vote(
            id=VoteId(uuid4()),
            voter_id=key.voter_id,
            target_kind=key.target.kind,
            target_id=key.target.id,
            direction=direction,
        )
        self._votes[index] = vote
        return vote

    async def update_direction(self, key: VoteKey, direction: VoteDirection) -> Vote:
        """Change the direction of an existing vote."""
        index = self._index(key)
        existing = self._votes.get(index)
        if existing is None:
            raise VoteNotFoundError(str(key))

        vote = existing.flipped(direction)
        self._votes[index] = vote
        return vote

    async def delete(self, key: VoteKey) -> None:
        """Delete a vote."""
        if self._votes.pop(self._index(key), None) is None:
            raise VoteNotFoundError(str(key))

    async def count_by_direction(
        self, target: VoteTarget, direction: VoteDirection
    ) -> int:
        """Count votes on a target pointing one way."""
        return sum(
            1
            for v in self._votes.values()
            if v.target == target and v.direction == direction
        )
