"""Get vote totals use case."""

from pydantic import BaseModel

from forum.application.usecase.base import BaseUseCase
from forum.domain.service import VoteService
from forum.domain.value import TargetKind


class GetVoteTotalsRequest(BaseModel):
    """Get vote totals request."""

    target_kind: TargetKind
    target_id: str  # UUID string


class GetVoteTotalsResponse(BaseModel):
    """Vote totals for a target."""

    upvotes: int
    downvotes: int
    net: int


class GetVoteTotalsUseCase(BaseUseCase):
    """Use case for reading vote totals. No authentication required."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVoteTotalsRequest) -> GetVoteTotalsResponse:
        totals = await self.vote_service.get_totals(
            request.target_kind, request.target_id
        )
        return GetVoteTotalsResponse(
            upvotes=totals.upvotes,
            downvotes=totals.downvotes,
            net=totals.net,
        )
