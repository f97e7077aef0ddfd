"""Unit tests for CastVoteUseCase."""

from uuid import uuid4

import pytest

from forum.application.usecase.vote import CastVoteRequest, CastVoteUseCase
from forum.domain.error import UnauthenticatedError
from forum.domain.repository import CommentRepository, ThreadRepository
from forum.domain.service import IdentityService
from forum.domain.value import TargetKind, VoteOutcome
from tests.factories import make_comment, make_thread
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCastVoteUseCase:
    """Tests for CastVoteUseCase."""

    @pytest.mark.asyncio
    async def test_cast_vote_success(self, unit_env, identity):
        """Should verify the token and report a created vote."""
        # Arrange
        use_case = await unit_env.get(CastVoteUseCase)
        identity_service = await unit_env.get(IdentityService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await thread_repo.save(make_thread())

        request = CastVoteRequest(
            token=identity_service.issue(identity),
            voter_id=str(identity.user_id),
            target_kind=TargetKind.THREAD,
            target_id=str(thread.id),
            direction=1,
        )

        # Act
        response = await use_case.execute(request)

        # Assert
        assert response.outcome == VoteOutcome.CREATED
        assert response.message == "Vote added successfully"
        assert response.replayed is False
        assert response.vote is not None
        assert response.vote.direction == 1
        assert response.vote.target_kind == TargetKind.THREAD
        assert response.vote.target_id == str(thread.id)

    @pytest.mark.asyncio
    async def test_toggle_off_reports_removal(self, unit_env, identity):
        """Casting the same direction twice removes the vote."""
        use_case = await unit_env.get(CastVoteUseCase)
        identity_service = await unit_env.get(IdentityService)
        thread_repo = await unit_env.get(ThreadRepository)
        comment_repo = await unit_env.get(CommentRepository)
        thread = await thread_repo.save(make_thread())
        comment = await comment_repo.save(make_comment(thread.id))

        request = CastVoteRequest(
            token=identity_service.issue(identity),
            voter_id=str(identity.user_id),
            target_kind=TargetKind.COMMENT,
            target_id=str(comment.id),
            direction=-1,
        )

        await use_case.execute(request)
        response = await use_case.execute(request)

        assert response.outcome == VoteOutcome.REMOVED
        assert response.message == "Vote removed successfully"
        assert response.vote is None

    @pytest.mark.asyncio
    async def test_missing_token_raises(self, unit_env):
        """Should reject unauthenticated casts."""
        use_case = await unit_env.get(CastVoteUseCase)

        request = CastVoteRequest(
            token=None,
            voter_id=str(uuid4()),
            target_kind=TargetKind.THREAD,
            target_id=str(uuid4()),
            direction=1,
        )

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(request)
