"""Vote aggregation domain service."""

import logfire

from forum.domain.repository import VoteRepository
from forum.domain.value import VoteDirection, VoteTarget, VoteTotals

from .base import Service


class VoteAggregator(Service):
    """Computes vote totals for a target.

    Totals are counted from the vote rows on every call; no denormalized
    counter is kept, so a read always agrees with the votes committed
    before it started.
    """

    def __init__(self, vote_repository: VoteRepository) -> None:
        """Initialize vote aggregator.

        Args:
            vote_repository: Vote repository
        """
        self.vote_repository = vote_repository

    async def compute(self, target: VoteTarget) -> VoteTotals:
        """Count upvotes and downvotes on a target.

        Args:
            target: Thread or comment

        Returns:
            Upvotes, downvotes and net score (all zero if nobody voted)
        """
        with logfire.span(
            "vote_aggregator.compute",
            target_kind=target.kind.value,
            target_id=str(target.id),
        ):
            upvotes = await self.vote_repository.count_by_direction(
                target, VoteDirection.UP
            )
            downvotes = await self.vote_repository.count_by_direction(
                target, VoteDirection.DOWN
            )
            return VoteTotals(upvotes=upvotes, downvotes=downvotes)
