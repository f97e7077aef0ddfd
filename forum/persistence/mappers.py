"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from forum.domain.model import Comment, Thread, Vote, VoteReceipt
from forum.domain.value import (
    CommentId,
    TargetKind,
    ThreadId,
    UserId,
    VoteDirection,
    VoteId,
    VoteOutcome,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_thread(row: Dict[str, Any]) -> Thread:
    """Convert database row to Thread domain model."""
    return Thread(
        id=ThreadId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        title=row["title"],
        content=row["content"],
        image_ref=row.get("image_ref"),
        created_at=row["created_at"],
    )


def thread_to_dict(thread: Thread) -> Dict[str, Any]:
    """Convert Thread domain model to database dict."""
    return thread.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(_uuid(row["id"])),
        thread_id=ThreadId(_uuid(row["thread_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        content=row["content"],
        parent_id=CommentId(_uuid(parent_id)) if parent_id else None,
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        voter_id=UserId(_uuid(row["voter_id"])),
        target_kind=TargetKind(row["target_kind"]),
        target_id=_uuid(row["target_id"]),
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Enums are stored by value: the direction as a smallint, the target
    kind as the ``target_kind`` enum label.
    """
    data = vote.model_dump()
    data["target_kind"] = vote.target_kind.value
    data["direction"] = vote.direction.value
    return data


def row_to_receipt(row: Dict[str, Any]) -> VoteReceipt:
    """Convert database row to VoteReceipt domain model."""
    return VoteReceipt(
        voter_id=UserId(_uuid(row["voter_id"])),
        request_id=row["request_id"],
        target_kind=TargetKind(row["target_kind"]),
        target_id=_uuid(row["target_id"]),
        direction=VoteDirection(row["direction"]),
        outcome=VoteOutcome(row["outcome"]),
        created_at=row["created_at"],
    )


def receipt_to_dict(receipt: VoteReceipt) -> Dict[str, Any]:
    """Convert VoteReceipt domain model to database dict.

    Enums are stored by value, like votes.
    """
    data = receipt.model_dump()
    data["target_kind"] = receipt.target_kind.value
    data["direction"] = receipt.direction.value
    data["outcome"] = receipt.outcome.value
    return data
