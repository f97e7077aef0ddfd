"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.vote import Vote
from forum.domain.value import VoteDirection, VoteKey, VoteTarget


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations. Every mutation is
    a single atomic statement keyed by (voter, target kind, target id), and
    the store guarantees at most one vote per key.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find(self, key: VoteKey) -> Optional[Vote]:
        """Find a user's vote on a target.

        Args:
            key: Voter and target

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, key: VoteKey, direction: VoteDirection) -> Vote:
        """Create a vote.

        Args:
            key: Voter and target
            direction: Direction of the new vote

        Returns:
            The created vote

        Raises:
            VoteConflictError: If a vote already exists for this key
        """
        pass

    @abstractmethod
    async def update_direction(self, key: VoteKey, direction: VoteDirection) -> Vote:
        """Change the direction of an existing vote.

        Args:
            key: Voter and target
            direction: New direction

        Returns:
            The updated vote

        Raises:
            VoteNotFoundError: If no vote exists for this key
        """
        pass

    @abstractmethod
    async def delete(self, key: VoteKey) -> None:
        """Delete a vote.

        Args:
            key: Voter and target

        Raises:
            VoteNotFoundError: If no vote exists for this key
        """
        pass

    @abstractmethod
    async def count_by_direction(
        self, target: VoteTarget, direction: VoteDirection
    ) -> int:
        """Count votes on a target pointing one way.

        Args:
            target: Thread or comment
            direction: Direction to count

        Returns:
            Number of matching votes
        """
        pass
