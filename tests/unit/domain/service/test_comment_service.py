"""Unit tests for CommentService and ThreadService lookups."""

from uuid import uuid4

import pytest

from forum.domain.repository import CommentRepository, ThreadRepository
from forum.domain.service import CommentService, ThreadService
from forum.domain.value import CommentId, ThreadId
from tests.factories import make_comment, make_thread
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class TestGetCommentById:
    """Tests for get_comment_by_id method."""

    @pytest.mark.asyncio
    async def test_returns_saved_comment(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(ThreadId(uuid4())))

        # Act
        result = await comment_service.get_comment_by_id(comment.id)

        # Assert
        assert result == comment

    @pytest.mark.asyncio
    async def test_missing_comment_is_none(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        assert await comment_service.get_comment_by_id(CommentId(uuid4())) is None


class TestGetThreadById:
    """Tests for get_thread_by_id method."""

    @pytest.mark.asyncio
    async def test_returns_saved_thread(self, unit_env):
        thread_service = await unit_env.get(ThreadService)
        thread_repo = await unit_env.get(ThreadRepository)
        thread = await thread_repo.save(make_thread())

        assert await thread_service.get_thread_by_id(thread.id) == thread

    @pytest.mark.asyncio
    async def test_missing_thread_is_none(self, unit_env):
        thread_service = await unit_env.get(ThreadService)

        assert await thread_service.get_thread_by_id(ThreadId(uuid4())) is None
