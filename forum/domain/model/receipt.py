"""Vote receipt entity.

A receipt records the outcome of a cast made with an idempotency key, so a
client retrying after a timeout gets the original answer instead of having
the cast applied a second time.
"""

from datetime import datetime, timedelta
from uuid import UUID

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import (
    TargetKind,
    UserId,
    VoteDirection,
    VoteOutcome,
    VoteTarget,
)


class VoteReceipt(DomainModel):
    """Recorded outcome of an idempotent cast.

    Business rules:
    - One receipt per voter per idempotency key
    - A key only replays a cast with the same target and direction
    - Receipts stop counting once older than the configured TTL
    """

    voter_id: UserId
    request_id: str = Field(min_length=1, max_length=255)
    target_kind: TargetKind
    target_id: UUID
    direction: VoteDirection
    outcome: VoteOutcome
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def target(self) -> VoteTarget:
        return VoteTarget(kind=self.target_kind, id=self.target_id)

    def is_expired(self, ttl: timedelta, now: datetime | None = None) -> bool:
        """Whether the receipt is older than ttl."""
        now = now or datetime.now(self.created_at.tzinfo)
        return now - self.created_at > ttl
