"""Unit tests for VoteAggregator."""

from uuid import uuid4

import pytest

from forum.domain.repository import VoteRepository
from forum.domain.service import VoteAggregator
from forum.domain.value import (
    TargetKind,
    UserId,
    VoteDirection,
    VoteKey,
    VoteTarget,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def _cast(repo: VoteRepository, target: VoteTarget, direction: VoteDirection):
    key = VoteKey(voter_id=UserId(uuid4()), target=target)
    return await repo.create(key, direction)


class TestCompute:
    """Tests for compute method."""

    @pytest.mark.asyncio
    async def test_counts_each_direction(self, unit_env):
        """Totals count upvotes and downvotes separately."""
        aggregator = await unit_env.get(VoteAggregator)
        vote_repo = await unit_env.get(VoteRepository)
        target = VoteTarget(kind=TargetKind.THREAD, id=uuid4())

        for direction in [VoteDirection.UP] * 3 + [VoteDirection.DOWN]:
            await _cast(vote_repo, target, direction)

        totals = await aggregator.compute(target)

        assert totals.upvotes == 3
        assert totals.downvotes == 1
        assert totals.net == 2

    @pytest.mark.asyncio
    async def test_kinds_are_counted_apart(self, unit_env):
        """A thread and a comment sharing an ID don't share totals."""
        aggregator = await unit_env.get(VoteAggregator)
        vote_repo = await unit_env.get(VoteRepository)
        shared_id = uuid4()
        thread = VoteTarget(kind=TargetKind.THREAD, id=shared_id)
        comment = VoteTarget(kind=TargetKind.COMMENT, id=shared_id)

        await _cast(vote_repo, thread, VoteDirection.UP)
        await _cast(vote_repo, comment, VoteDirection.DOWN)

        assert (await aggregator.compute(thread)).net == 1
        assert (await aggregator.compute(comment)).net == -1

    @pytest.mark.asyncio
    async def test_recomputed_on_every_call(self, unit_env):
        """Totals reflect votes removed after an earlier read."""
        aggregator = await unit_env.get(VoteAggregator)
        vote_repo = await unit_env.get(VoteRepository)
        target = VoteTarget(kind=TargetKind.COMMENT, id=uuid4())

        vote = await _cast(vote_repo, target, VoteDirection.UP)
        assert (await aggregator.compute(target)).upvotes == 1

        await vote_repo.delete(vote.key)

        totals = await aggregator.compute(target)
        assert (totals.upvotes, totals.downvotes, totals.net) == (0, 0, 0)
