"""Unit tests for the in-memory vote store.

The in-memory store stands in for PostgreSQL in every other unit test, so it
has to honour the same contract: one vote per key, conflict on duplicate
insert, not-found on updating or deleting a missing vote.
"""

from uuid import uuid4

import pytest

from forum.domain.error import VoteConflictError, VoteNotFoundError
from forum.domain.value import (
    TargetKind,
    UserId,
    VoteDirection,
    VoteKey,
    VoteTarget,
)
from forum.persistence.repository.inmemory import InMemoryVoteRepository


@pytest.fixture
def repo() -> InMemoryVoteRepository:
    return InMemoryVoteRepository()


@pytest.fixture
def key() -> VoteKey:
    return VoteKey(
        voter_id=UserId(uuid4()),
        target=VoteTarget(kind=TargetKind.THREAD, id=uuid4()),
    )


class TestInMemoryVoteRepository:
    @pytest.mark.asyncio
    async def test_create_then_find(self, repo, key):
        vote = await repo.create(key, VoteDirection.UP)

        assert await repo.find(key) == vote
        assert vote.key == key

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, repo, key):
        assert await repo.find(key) is None

    @pytest.mark.asyncio
    async def test_duplicate_create_conflicts(self, repo, key):
        await repo.create(key, VoteDirection.UP)

        with pytest.raises(VoteConflictError):
            await repo.create(key, VoteDirection.DOWN)

        assert (await repo.find(key)).direction == VoteDirection.UP

    @pytest.mark.asyncio
    async def test_same_voter_different_kind_is_separate(self, repo, key):
        """Thread and comment votes on the same ID are different keys."""
        comment_key = VoteKey(
            voter_id=key.voter_id,
            target=VoteTarget(kind=TargetKind.COMMENT, id=key.target.id),
        )

        await repo.create(key, VoteDirection.UP)
        await repo.create(comment_key, VoteDirection.UP)

        assert await repo.find(comment_key) is not None

    @pytest.mark.asyncio
    async def test_update_direction(self, repo, key):
        created = await repo.create(key, VoteDirection.UP)

        updated = await repo.update_direction(key, VoteDirection.DOWN)

        assert updated.id == created.id
        assert updated.direction == VoteDirection.DOWN
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, repo, key):
        with pytest.raises(VoteNotFoundError):
            await repo.update_direction(key, VoteDirection.DOWN)

    @pytest.mark.asyncio
    async def test_delete(self, repo, key):
        await repo.create(key, VoteDirection.UP)

        await repo.delete(key)

        assert await repo.find(key) is None

    @pytest.mark.asyncio
    async def test_delete_missing_raises(self, repo, key):
        with pytest.raises(VoteNotFoundError):
            await repo.delete(key)
