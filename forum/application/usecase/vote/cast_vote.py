"""Cast vote use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.model import Vote
from forum.domain.service import IdentityService, VoteService
from forum.domain.value import TargetKind, VoteOutcome


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    token: str | None  # JWT from the Authorization header or auth_token cookie
    voter_id: str  # User ID from the request path
    target_kind: TargetKind
    target_id: str  # UUID string
    direction: Any  # Raw body value, validated by the vote service
    request_id: str | None = None  # Idempotency-Key header


class VoteInfo(BaseModel):
    """Vote information for response."""

    vote_id: str
    target_kind: TargetKind
    target_id: str
    direction: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_vote(cls, vote: Vote) -> "VoteInfo":
        return cls(
            vote_id=str(vote.id),
            target_kind=vote.target_kind,
            target_id=str(vote.target_id),
            direction=vote.direction.value,
            created_at=vote.created_at,
            updated_at=vote.updated_at,
        )


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    outcome: VoteOutcome
    message: str
    vote: VoteInfo | None  # None when the cast removed the vote
    replayed: bool = False


class CastVoteUseCase(BaseUseCase):
    """Use case for casting a vote on a thread or comment."""

    def __init__(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> None:
        """Initialize cast vote use case.

        Args:
            identity_service: Identity domain service
            vote_service: Vote domain service
        """
        self.identity_service = identity_service
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Steps:
        1. Verify the caller's token
        2. Apply the cast through the vote service (create, flip or remove)
        3. Return the outcome and the resulting vote

        Args:
            request: Cast vote request

        Returns:
            Outcome of the cast

        Raises:
            UnauthenticatedError: If the token is missing or invalid
            ForbiddenError: If the caller may not vote as request.voter_id
            InvalidInputError: If the target ID or direction is malformed
            TargetNotFoundError: If the target doesn't exist
            VoteConflictError: If concurrent casts could not be reconciled
        """
        identity = self.identity_service.verify(request.token)

        result = await self.vote_service.cast_vote(
            identity=identity,
            voter_id=request.voter_id,
            target_kind=request.target_kind,
            target_id=request.target_id,
            direction=request.direction,
            request_id=request.request_id,
        )

        return CastVoteResponse(
            outcome=result.outcome,
            message=result.outcome.message,
            vote=VoteInfo.from_vote(result.vote) if result.vote else None,
            replayed=result.replayed,
        )
