"""Builders for test data."""

from datetime import datetime
from uuid import uuid4

from forum.config import AuthSettings, Settings
from forum.domain.model import Comment, Thread
from forum.domain.value import CommentId, Identity, Role, ThreadId, UserId
from forum.util.jwt import create_token


def make_thread(author_id: UserId | None = None) -> Thread:
    """Build a thread for seeding repositories."""
    return Thread(
        id=ThreadId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        title="Test thread",
        content="Test thread content",
        image_ref=None,
        created_at=datetime.now(),
    )


def make_comment(thread_id: ThreadId, author_id: UserId | None = None) -> Comment:
    """Build a comment on a thread for seeding repositories."""
    return Comment(
        id=CommentId(uuid4()),
        thread_id=thread_id,
        author_id=author_id or UserId(uuid4()),
        content="Test comment",
        parent_id=None,
        created_at=datetime.now(),
    )


def make_identity(role: Role = Role.USER) -> Identity:
    """Build an authenticated caller."""
    return Identity(user_id=UserId(uuid4()), role=role)


def bearer(identity: Identity, settings: AuthSettings | None = None) -> dict[str, str]:
    """Authorization header for an identity, signed with the configured secret."""
    token = create_token(
        str(identity.user_id), identity.role, settings or Settings().auth
    )
    return {"Authorization": f"Bearer {token}"}
