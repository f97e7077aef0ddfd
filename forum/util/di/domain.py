"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, VotingSettings
from forum.domain.repository import (
    CommentRepository,
    ThreadRepository,
    VoteReceiptRepository,
    VoteRepository,
)
from forum.domain.service import (
    CommentService,
    IdentityService,
    ThreadService,
    VoteAggregator,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_identity_service(self, auth_settings: AuthSettings) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(auth_settings=auth_settings)

    @provide
    def get_thread_service(self, thread_repository: ThreadRepository) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(thread_repository=thread_repository)

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(comment_repository=comment_repository)

    @provide
    def get_vote_aggregator(self, vote_repository: VoteRepository) -> VoteAggregator:
        """Provide vote aggregator."""
        return VoteAggregator(vote_repository=vote_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        receipt_repository: VoteReceiptRepository,
        vote_aggregator: VoteAggregator,
        identity_service: IdentityService,
        thread_service: ThreadService,
        comment_service: CommentService,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            receipt_repository=receipt_repository,
            vote_aggregator=vote_aggregator,
            identity_service=identity_service,
            thread_service=thread_service,
            comment_service=comment_service,
            voting_settings=voting_settings,
        )
