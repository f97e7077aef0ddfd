"""Unit tests for VoteService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from forum.config import AuthSettings, VotingSettings
from forum.domain.error import (
    ForbiddenError,
    InvalidInputError,
    TargetNotFoundError,
    VoteConflictError,
)
from forum.domain.model import VoteReceipt
from forum.domain.repository import (
    CommentRepository,
    ThreadRepository,
    VoteReceiptRepository,
    VoteRepository,
)
from forum.domain.service import (
    CommentService,
    IdentityService,
    ThreadService,
    VoteAggregator,
    VoteService,
)
from forum.domain.value import (
    Role,
    TargetKind,
    VoteDirection,
    VoteKey,
    VoteOutcome,
    VoteTarget,
    VoteTotals,
)
from forum.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryThreadRepository,
    InMemoryVoteReceiptRepository,
    InMemoryVoteRepository,
)
from tests.factories import make_comment, make_identity, make_thread
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

UP = VoteDirection.UP.value
DOWN = VoteDirection.DOWN.value


async def _seed_thread(env):
    thread_repo = await env.get(ThreadRepository)
    return await thread_repo.save(make_thread())


class TestCastVote:
    """Tests for cast_vote method."""

    @pytest.mark.asyncio
    async def test_first_cast_creates_vote(self, unit_env, identity):
        """Casting on a target with no vote creates one."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        thread = await _seed_thread(unit_env)

        # Act
        result = await vote_service.cast_vote(
            identity, str(identity.user_id), TargetKind.THREAD, str(thread.id), UP
        )

        # Assert
        assert result.outcome == VoteOutcome.CREATED
        assert result.vote is not None
        assert result.vote.direction == VoteDirection.UP
        assert result.replayed is False

        stored = await vote_repo.find(
            VoteKey(
                voter_id=identity.user_id,
                target=VoteTarget(kind=TargetKind.THREAD, id=thread.id),
            )
        )
        assert stored == result.vote

    @pytest.mark.asyncio
    async def test_up_up_cancels(self, unit_env, identity):
        """Up then Up leaves no vote and zero upvotes."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        args = (identity, str(identity.user_id), TargetKind.THREAD, str(thread.id))

        await vote_service.cast_vote(*args, UP)
        result = await vote_service.cast_vote(*args, UP)

        assert result.outcome == VoteOutcome.REMOVED
        assert result.vote is None
        assert await vote_service.get_totals(TargetKind.THREAD, str(thread.id)) == (
            VoteTotals(upvotes=0, downvotes=0)
        )

    @pytest.mark.asyncio
    async def test_up_down_flips(self, unit_env, identity):
        """Up then Down leaves one Down vote; net drops by two."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        args = (identity, str(identity.user_id), TargetKind.THREAD, str(thread.id))

        await vote_service.cast_vote(*args, UP)
        before = await vote_service.get_totals(TargetKind.THREAD, str(thread.id))
        result = await vote_service.cast_vote(*args, DOWN)
        after = await vote_service.get_totals(TargetKind.THREAD, str(thread.id))

        assert result.outcome == VoteOutcome.UPDATED
        assert result.vote.direction == VoteDirection.DOWN
        assert after == VoteTotals(upvotes=0, downvotes=1)
        assert after.net == before.net - 2

    @pytest.mark.asyncio
    async def test_up_down_up_flips_back(self, unit_env, identity):
        """Up, Down, Up ends with a single Up vote."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        args = (identity, str(identity.user_id), TargetKind.THREAD, str(thread.id))

        await vote_service.cast_vote(*args, UP)
        await vote_service.cast_vote(*args, DOWN)
        result = await vote_service.cast_vote(*args, UP)

        assert result.outcome == VoteOutcome.UPDATED
        assert await vote_service.get_totals(TargetKind.THREAD, str(thread.id)) == (
            VoteTotals(upvotes=1, downvotes=0)
        )

    @pytest.mark.asyncio
    async def test_two_voters_scenario(self, unit_env):
        """A up, B down, A up again: totals move {1,0,1} -> {1,1,0} -> {0,1,-1}."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        alice = make_identity()
        bob = make_identity()
        target_id = str(thread.id)

        await vote_service.cast_vote(
            alice, str(alice.user_id), TargetKind.THREAD, target_id, UP
        )
        totals = await vote_service.get_totals(TargetKind.THREAD, target_id)
        assert (totals.upvotes, totals.downvotes, totals.net) == (1, 0, 1)

        await vote_service.cast_vote(
            bob, str(bob.user_id), TargetKind.THREAD, target_id, DOWN
        )
        totals = await vote_service.get_totals(TargetKind.THREAD, target_id)
        assert (totals.upvotes, totals.downvotes, totals.net) == (1, 1, 0)

        await vote_service.cast_vote(
            alice, str(alice.user_id), TargetKind.THREAD, target_id, UP
        )
        totals = await vote_service.get_totals(TargetKind.THREAD, target_id)
        assert (totals.upvotes, totals.downvotes, totals.net) == (0, 1, -1)

    @pytest.mark.asyncio
    async def test_comment_votes_follow_same_rules(self, unit_env, identity):
        """Comments cycle through the same states as threads."""
        vote_service = await unit_env.get(VoteService)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await _seed_thread(unit_env)
        comment = await comment_repo.save(make_comment(thread.id))
        args = (identity, str(identity.user_id), TargetKind.COMMENT, str(comment.id))

        created = await vote_service.cast_vote(*args, DOWN)
        flipped = await vote_service.cast_vote(*args, UP)
        removed = await vote_service.cast_vote(*args, UP)

        assert [created.outcome, flipped.outcome, removed.outcome] == [
            VoteOutcome.CREATED,
            VoteOutcome.UPDATED,
            VoteOutcome.REMOVED,
        ]
        # The thread's totals are untouched by comment votes
        assert await vote_service.get_totals(TargetKind.THREAD, str(thread.id)) == (
            VoteTotals()
        )

    @pytest.mark.asyncio
    async def test_casting_for_another_user_is_forbidden(self, unit_env, identity):
        """Casting with someone else's user ID fails and writes nothing."""
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        thread = await _seed_thread(unit_env)
        other = make_identity()

        with pytest.raises(ForbiddenError):
            await vote_service.cast_vote(
                identity, str(other.user_id), TargetKind.THREAD, str(thread.id), UP
            )

        target = VoteTarget(kind=TargetKind.THREAD, id=thread.id)
        assert await vote_repo.count_by_direction(target, VoteDirection.UP) == 0

    @pytest.mark.asyncio
    async def test_moderator_cannot_vote(self, unit_env):
        """Only the user role may vote."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        moderator = make_identity(Role.MODERATOR)

        with pytest.raises(ForbiddenError):
            await vote_service.cast_vote(
                moderator,
                str(moderator.user_id),
                TargetKind.THREAD,
                str(thread.id),
                UP,
            )

    @pytest.mark.asyncio
    async def test_invalid_target_id_raises(self, unit_env, identity):
        """A target ID that isn't a UUID is invalid input."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(InvalidInputError, match="Invalid comment ID"):
            await vote_service.cast_vote(
                identity, str(identity.user_id), TargetKind.COMMENT, "not-a-uuid", UP
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("direction", [0, 2, -2, True])
    async def test_invalid_direction_raises(self, unit_env, identity, direction):
        """Only 1 and -1 are valid directions."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)

        with pytest.raises(InvalidInputError, match="Invalid vote value"):
            await vote_service.cast_vote(
                identity,
                str(identity.user_id),
                TargetKind.THREAD,
                str(thread.id),
                direction,
            )

    @pytest.mark.asyncio
    async def test_missing_target_raises(self, unit_env, identity):
        """Voting on a thread that doesn't exist fails."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(TargetNotFoundError, match="Thread not found"):
            await vote_service.cast_vote(
                identity, str(identity.user_id), TargetKind.THREAD, str(uuid4()), UP
            )


class TestIdempotentCast:
    """Tests for casts carrying an idempotency key."""

    @pytest.mark.asyncio
    async def test_replay_returns_recorded_outcome(self, unit_env, identity):
        """Retrying with the same key doesn't toggle the vote off."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        args = (identity, str(identity.user_id), TargetKind.THREAD, str(thread.id), UP)

        first = await vote_service.cast_vote(*args, request_id="retry-1")
        replay = await vote_service.cast_vote(*args, request_id="retry-1")

        assert first.outcome == VoteOutcome.CREATED
        assert replay.outcome == VoteOutcome.CREATED
        assert replay.replayed is True
        assert replay.vote == first.vote
        assert await vote_service.get_totals(TargetKind.THREAD, str(thread.id)) == (
            VoteTotals(upvotes=1)
        )

    @pytest.mark.asyncio
    async def test_new_key_applies_again(self, unit_env, identity):
        """A fresh key is a new cast and follows the toggle rules."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        args = (identity, str(identity.user_id), TargetKind.THREAD, str(thread.id), UP)

        await vote_service.cast_vote(*args, request_id="cast-1")
        second = await vote_service.cast_vote(*args, request_id="cast-2")

        assert second.outcome == VoteOutcome.REMOVED
        assert second.replayed is False

    @pytest.mark.asyncio
    async def test_key_reused_for_other_target_raises(self, unit_env, identity):
        """A key belongs to one target."""
        vote_service = await unit_env.get(VoteService)
        first = await _seed_thread(unit_env)
        second = await _seed_thread(unit_env)
        voter = str(identity.user_id)

        await vote_service.cast_vote(
            identity, voter, TargetKind.THREAD, str(first.id), UP, request_id="k"
        )

        with pytest.raises(InvalidInputError, match="different target"):
            await vote_service.cast_vote(
                identity, voter, TargetKind.THREAD, str(second.id), UP, request_id="k"
            )

    @pytest.mark.asyncio
    async def test_key_reused_for_other_direction_raises(self, unit_env, identity):
        """A Down sent under an Up's key is rejected, not answered with the Up."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        voter = str(identity.user_id)

        await vote_service.cast_vote(
            identity, voter, TargetKind.THREAD, str(thread.id), UP, request_id="k"
        )

        with pytest.raises(InvalidInputError, match="different vote direction"):
            await vote_service.cast_vote(
                identity, voter, TargetKind.THREAD, str(thread.id), DOWN, request_id="k"
            )

        totals = await vote_service.get_totals(TargetKind.THREAD, str(thread.id))
        assert totals == VoteTotals(upvotes=1, downvotes=0)

    @pytest.mark.asyncio
    async def test_expired_key_applies_again(self, unit_env, identity):
        """Once its receipt expires, a key no longer replays."""
        vote_service = await unit_env.get(VoteService)
        receipt_repo = await unit_env.get(VoteReceiptRepository)
        thread = await _seed_thread(unit_env)
        voter = str(identity.user_id)

        await receipt_repo.save(
            VoteReceipt(
                voter_id=identity.user_id,
                request_id="k",
                target_kind=TargetKind.THREAD,
                target_id=thread.id,
                direction=VoteDirection.UP,
                outcome=VoteOutcome.CREATED,
                created_at=datetime.now() - timedelta(days=2),
            )
        )

        result = await vote_service.cast_vote(
            identity, voter, TargetKind.THREAD, str(thread.id), UP, request_id="k"
        )

        assert result.outcome == VoteOutcome.CREATED
        assert result.replayed is False
        replay = await vote_service.cast_vote(
            identity, voter, TargetKind.THREAD, str(thread.id), UP, request_id="k"
        )
        assert replay.replayed is True


class TestGetTotalsAndMyVote:
    """Tests for the read operations."""

    @pytest.mark.asyncio
    async def test_unvoted_target_has_zero_totals(self, unit_env):
        """Totals of a target nobody voted on are all zero."""
        vote_service = await unit_env.get(VoteService)

        totals = await vote_service.get_totals(TargetKind.COMMENT, str(uuid4()))

        assert (totals.upvotes, totals.downvotes, totals.net) == (0, 0, 0)

    @pytest.mark.asyncio
    async def test_totals_invalid_id_raises(self, unit_env):
        """Totals require a UUID."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(InvalidInputError, match="Invalid thread ID"):
            await vote_service.get_totals(TargetKind.THREAD, "42")

    @pytest.mark.asyncio
    async def test_get_my_vote(self, unit_env, identity):
        """The caller sees the direction they hold, or None."""
        vote_service = await unit_env.get(VoteService)
        thread = await _seed_thread(unit_env)
        args = (identity, str(identity.user_id), TargetKind.THREAD, str(thread.id))

        assert await vote_service.get_my_vote(*args) is None

        await vote_service.cast_vote(*args, DOWN)

        assert await vote_service.get_my_vote(*args) == VoteDirection.DOWN

    @pytest.mark.asyncio
    async def test_get_my_vote_for_another_user_is_forbidden(self, unit_env, identity):
        """Users can't read other users' votes."""
        vote_service = await unit_env.get(VoteService)
        other = make_identity()

        with pytest.raises(ForbiddenError):
            await vote_service.get_my_vote(
                identity, str(other.user_id), TargetKind.THREAD, str(uuid4())
            )


# ---------------------------------------------------------------------------
# Concurrency: a second request changes the row between read and write
# ---------------------------------------------------------------------------


class ConcurrentCreateVoteRepository(InMemoryVoteRepository):
    """Another request creates the vote just before our insert lands."""

    def __init__(self, competing_direction: VoteDirection) -> None:
        super().__init__()
        self.competing_direction = competing_direction
        self.create_calls = 0

    async def create(self, key, direction):
        self.create_calls += 1
        if self.create_calls == 1:
            await super().create(key, self.competing_direction)
        return await super().create(key, direction)


class ConcurrentDeleteVoteRepository(InMemoryVoteRepository):
    """Another request removes the vote just before our update lands."""

    def __init__(self) -> None:
        super().__init__()
        self.raced = False

    async def update_direction(self, key, direction):
        if not self.raced:
            self.raced = True
            await self.delete(key)
        return await super().update_direction(key, direction)


class AlwaysConflictingVoteRepository(InMemoryVoteRepository):
    """Every insert loses to a concurrent one that is never visible to reads."""

    def __init__(self) -> None:
        super().__init__()
        self.create_calls = 0

    async def create(self, key, direction):
        self.create_calls += 1
        raise VoteConflictError(str(key))


def _build_vote_service(
    vote_repository: InMemoryVoteRepository, max_apply_attempts: int = 2
):
    thread_repository = InMemoryThreadRepository()
    service = VoteService(
        vote_repository=vote_repository,
        receipt_repository=InMemoryVoteReceiptRepository(),
        vote_aggregator=VoteAggregator(vote_repository=vote_repository),
        identity_service=IdentityService(auth_settings=AuthSettings()),
        thread_service=ThreadService(thread_repository=thread_repository),
        comment_service=CommentService(comment_repository=InMemoryCommentRepository()),
        voting_settings=VotingSettings(max_apply_attempts=max_apply_attempts),
    )
    return service, thread_repository


class TestConcurrentCasts:
    """Tests for the conflict-retry path."""

    @pytest.mark.asyncio
    async def test_lost_insert_race_redecides_against_winner(self, identity):
        """If a concurrent Down wins the insert, our Up flips it."""
        vote_repo = ConcurrentCreateVoteRepository(VoteDirection.DOWN)
        vote_service, thread_repo = _build_vote_service(vote_repo)
        thread = await thread_repo.save(make_thread())

        result = await vote_service.cast_vote(
            identity, str(identity.user_id), TargetKind.THREAD, str(thread.id), UP
        )

        assert result.outcome == VoteOutcome.UPDATED
        assert result.vote.direction == VoteDirection.UP
        # Still exactly one vote for the key
        assert await vote_service.get_totals(TargetKind.THREAD, str(thread.id)) == (
            VoteTotals(upvotes=1, downvotes=0)
        )

    @pytest.mark.asyncio
    async def test_lost_insert_race_with_same_direction_removes(self, identity):
        """If a concurrent Up wins the insert, our Up toggles it off."""
        vote_repo = ConcurrentCreateVoteRepository(VoteDirection.UP)
        vote_service, thread_repo = _build_vote_service(vote_repo)
        thread = await thread_repo.save(make_thread())

        result = await vote_service.cast_vote(
            identity, str(identity.user_id), TargetKind.THREAD, str(thread.id), UP
        )

        assert result.outcome == VoteOutcome.REMOVED
        assert await vote_service.get_totals(TargetKind.THREAD, str(thread.id)) == (
            VoteTotals()
        )

    @pytest.mark.asyncio
    async def test_vote_removed_mid_flip_is_recreated(self, identity):
        """If the vote vanishes before a flip lands, the retry creates it."""
        vote_repo = ConcurrentDeleteVoteRepository()
        vote_service, thread_repo = _build_vote_service(vote_repo)
        thread = await thread_repo.save(make_thread())
        args = (identity, str(identity.user_id), TargetKind.THREAD, str(thread.id))

        await vote_service.cast_vote(*args, UP)
        result = await vote_service.cast_vote(*args, DOWN)

        assert result.outcome == VoteOutcome.CREATED
        assert await vote_service.get_totals(TargetKind.THREAD, str(thread.id)) == (
            VoteTotals(upvotes=0, downvotes=1)
        )

    @pytest.mark.asyncio
    async def test_retries_are_bounded(self, identity):
        """When every attempt conflicts the cast fails with a conflict."""
        vote_repo = AlwaysConflictingVoteRepository()
        vote_service, thread_repo = _build_vote_service(vote_repo, max_apply_attempts=3)
        thread = await thread_repo.save(make_thread())

        with pytest.raises(VoteConflictError):
            await vote_service.cast_vote(
                identity, str(identity.user_id), TargetKind.THREAD, str(thread.id), UP
            )

        assert vote_repo.create_calls == 3
