"""Domain value objects for the forum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import Field, computed_field

from forum.domain.error import InvalidInputError
from forum.domain.value.common import ValueObject
from forum.domain.value.identifiers import UserId


class Role(str, Enum):
    """Role carried by an authenticated principal."""

    USER = "user"
    MODERATOR = "moderator"


class TargetKind(str, Enum):
    """Type of entity that can be voted on."""

    THREAD = "thread"
    COMMENT = "comment"


class VoteDirection(int, Enum):
    """Polarity of a vote."""

    UP = 1
    DOWN = -1

    @classmethod
    def parse(cls, value: Any) -> "VoteDirection":
        """Parse a raw direction, accepting only the integers 1 and -1.

        Raises:
            InvalidInputError: If value is anything else (including booleans)
        """
        if isinstance(value, bool) or not isinstance(value, int) or value not in (1, -1):
            raise InvalidInputError(
                "Invalid vote value, vote must be 1 for upvote or -1 for downvote"
            )
        return cls(value)


class VoteOutcome(str, Enum):
    """What a cast did to the voter's vote on a target."""

    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"

    @property
    def message(self) -> str:
        """Human-readable message for API responses."""
        return {
            VoteOutcome.CREATED: "Vote added successfully",
            VoteOutcome.UPDATED: "Vote updated successfully",
            VoteOutcome.REMOVED: "Vote removed successfully",
        }[self]


class Identity(ValueObject):
    """The authenticated caller of a request."""

    user_id: UserId
    role: Role


class VoteTarget(ValueObject):
    """A thread or comment, identified by kind and id."""

    kind: TargetKind
    id: UUID

    @classmethod
    def parse(cls, kind: TargetKind, raw_id: str) -> "VoteTarget":
        """Build a target from a path-supplied id.

        Raises:
            InvalidInputError: If raw_id is not a valid UUID
        """
        try:
            target_id = UUID(str(raw_id))
        except ValueError:
            raise InvalidInputError(f"Invalid {kind.value} ID")
        return cls(kind=kind, id=target_id)

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


class VoteKey(ValueObject):
    """Identity of a vote: one voter on one target.

    At most one vote exists per key.
    """

    voter_id: UserId
    target: VoteTarget

    def __str__(self) -> str:
        return f"{self.voter_id}@{self.target}"


class VoteTotals(ValueObject):
    """Aggregate vote counts for a target."""

    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)

    @computed_field
    @property
    def net(self) -> int:
        """Net score: upvotes minus downvotes."""
        return self.upvotes - self.downvotes
