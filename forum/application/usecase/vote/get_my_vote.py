"""Get my vote use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import IdentityService, VoteService
from forum.domain.value import TargetKind


class GetMyVoteRequest(BaseModel):
    """Get my vote request."""

    token: str | None
    voter_id: str  # User ID from the request path
    target_kind: TargetKind
    target_id: str  # UUID string


class GetMyVoteResponse(BaseModel):
    """The caller's vote on a target."""

    direction: int  # 1, -1, or 0 when the caller hasn't voted


class GetMyVoteUseCase(BaseUseCase):
    """Use case for reading the caller's own vote on a target."""

    def __init__(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> None:
        """Initialize get my vote use case.

        Args:
            identity_service: Identity domain service
            vote_service: Vote domain service
        """
        self.identity_service = identity_service
        self.vote_service = vote_service

    async def execute(self, request: GetMyVoteRequest) -> GetMyVoteResponse:
        """Execute get my vote flow.

        Raises:
            UnauthenticatedError: If the token is missing or invalid
            ForbiddenError: If request.voter_id is not the caller
            InvalidInputError: If the target ID is malformed
        """
        identity = self.identity_service.verify(request.token)

        direction = await self.vote_service.get_my_vote(
            identity=identity,
            voter_id=request.voter_id,
            target_kind=request.target_kind,
            target_id=request.target_id,
        )
        return GetMyVoteResponse(direction=direction.value if direction is not None else 0)
