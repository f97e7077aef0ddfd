"""Application layer DI providers."""

from dishka import Scope, provide

from forum.application.usecase.vote import (
    CastVoteUseCase,
    GetMyVoteUseCase,
    GetVoteTotalsUseCase,
)
from forum.domain.service import IdentityService, VoteService
from forum.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            identity_service=identity_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_vote_totals_use_case(
        self, vote_service: VoteService
    ) -> GetVoteTotalsUseCase:
        """Provide get vote totals use case."""
        return GetVoteTotalsUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_my_vote_use_case(
        self, identity_service: IdentityService, vote_service: VoteService
    ) -> GetMyVoteUseCase:
        """Provide get my vote use case."""
        return GetMyVoteUseCase(
            identity_service=identity_service, vote_service=vote_service
        )
