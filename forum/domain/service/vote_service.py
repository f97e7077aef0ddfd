"""Vote domain service."""

from typing import Optional

import logfire

from forum.config import VotingSettings
from forum.domain.error import (
    InvalidInputError,
    TargetNotFoundError,
    VoteConflictError,
    VoteNotFoundError,
)
from forum.domain.model.receipt import VoteReceipt
from forum.domain.model.vote import Vote
from forum.domain.repository import VoteReceiptRepository, VoteRepository
from forum.domain.value import (
    CommentId,
    Identity,
    TargetKind,
    ThreadId,
    VoteDirection,
    VoteKey,
    VoteOutcome,
    VoteTarget,
    VoteTotals,
)
from forum.domain.value.common import ValueObject

from .base import Service
from .comment_service import CommentService
from .identity_service import IdentityService
from .thread_service import ThreadService
from .vote_aggregator import VoteAggregator
from .vote_state import CreateVote, FlipVote, RemoveVote, VoteAction, decide


class CastVoteResult(ValueObject):
    """Result of casting a vote."""

    outcome: VoteOutcome
    vote: Optional[Vote] = None  # None when the vote was removed
    replayed: bool = False  # True when answered from an idempotency receipt


class VoteService(Service):
    """Domain service for vote operations.

    Binds identity checks, the vote state machine, the vote store and the
    aggregator into the operations exposed to the API.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        receipt_repository: VoteReceiptRepository,
        vote_aggregator: VoteAggregator,
        identity_service: IdentityService,
        thread_service: ThreadService,
        comment_service: CommentService,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            receipt_repository: Idempotency receipt repository
            vote_aggregator: Vote totals aggregator
            identity_service: Identity domain service
            thread_service: Thread domain service
            comment_service: Comment domain service
            voting_settings: Voting configuration
        """
        self.vote_repository = vote_repository
        self.receipt_repository = receipt_repository
        self.vote_aggregator = vote_aggregator
        self.identity_service = identity_service
        self.thread_service = thread_service
        self.comment_service = comment_service
        self.voting_settings = voting_settings

    async def cast_vote(
        self,
        identity: Identity,
        voter_id: str,
        target_kind: TargetKind,
        target_id: str,
        direction: object,
        request_id: str | None = None,
    ) -> CastVoteResult:
        """Cast a vote on a thread or comment.

        Casting with no existing vote creates one, casting the opposite
        direction flips it, and casting the same direction again removes it.

        Args:
            identity: Authenticated caller
            voter_id: User ID from the request path (must be the caller)
            target_kind: Thread or comment
            target_id: Target ID from the request path
            direction: 1 for upvote, -1 for downvote
            request_id: Optional client idempotency key

        Returns:
            What happened to the caller's vote

        Raises:
            ForbiddenError: If the caller may not vote as voter_id
            InvalidInputError: If target_id or direction is malformed
            TargetNotFoundError: If the target doesn't exist
            VoteConflictError: If concurrent casts kept racing past the retry budget
        """
        with logfire.span(
            "vote_service.cast_vote",
            voter_id=voter_id,
            target_kind=target_kind.value,
            target_id=target_id,
            direction=direction,
        ):
            # Authorization and validation happen before anything touches the store
            self.identity_service.require_role(
                identity, self.voting_settings.allowed_roles
            )
            self.identity_service.require_principal(identity, voter_id)

            target = VoteTarget.parse(target_kind, target_id)
            requested = VoteDirection.parse(direction)

            await self._ensure_target_exists(target)

            if request_id is not None:
                receipt = await self.receipt_repository.find(
                    identity.user_id, request_id
                )
                if receipt is not None:
                    return await self._replay(receipt, target, requested)

            key = VoteKey(voter_id=identity.user_id, target=target)
            outcome, vote = await self._apply_with_retry(key, requested)

            if request_id is not None:
                await self.receipt_repository.save(
                    VoteReceipt(
                        voter_id=identity.user_id,
                        request_id=request_id,
                        target_kind=target.kind,
                        target_id=target.id,
                        direction=requested,
                        outcome=outcome,
                    )
                )

            return CastVoteResult(outcome=outcome, vote=vote)

    async def get_totals(self, target_kind: TargetKind, target_id: str) -> VoteTotals:
        """Get vote totals for a thread or comment.

        A target nobody has voted on (or that doesn't exist) has all-zero
        totals.

        Raises:
            InvalidInputError: If target_id is not a valid UUID
        """
        target = VoteTarget.parse(target_kind, target_id)
        return await self.vote_aggregator.compute(target)

    async def get_my_vote(
        self,
        identity: Identity,
        voter_id: str,
        target_kind: TargetKind,
        target_id: str,
    ) -> VoteDirection | None:
        """Get the caller's current vote direction on a target.

        Args:
            identity: Authenticated caller
            voter_id: User ID from the request path (must be the caller)
            target_kind: Thread or comment
            target_id: Target ID from the request path

        Returns:
            The direction held, or None if the caller hasn't voted
        """
        self.identity_service.require_role(identity, self.voting_settings.allowed_roles)
        self.identity_service.require_principal(identity, voter_id)
        target = VoteTarget.parse(target_kind, target_id)

        vote = await self.vote_repository.find(
            VoteKey(voter_id=identity.user_id, target=target)
        )
        return vote.direction if vote else None

    async def _ensure_target_exists(self, target: VoteTarget) -> None:
        if target.kind == TargetKind.THREAD:
            found = await self.thread_service.get_thread_by_id(ThreadId(target.id))
            resource = "Thread"
        else:  # TargetKind.COMMENT
            found = await self.comment_service.get_comment_by_id(CommentId(target.id))
            resource = "Comment"

        if found is None:
            logfire.warn("Vote on non-existent target", target=str(target))
            raise TargetNotFoundError(resource, str(target.id))

    async def _apply_with_retry(
        self, key: VoteKey, requested: VoteDirection
    ) -> tuple[VoteOutcome, Optional[Vote]]:
        """Read, decide and apply, re-deciding when a concurrent cast wins.

        Between the read and the write another request for the same key may
        create, flip or delete the row. The store then reports a conflict
        (create) or a missing row (flip/remove) and the decision is made
        again against what is stored now.
        """
        attempts = self.voting_settings.max_apply_attempts
        last_error: VoteConflictError | VoteNotFoundError | None = None

        for attempt in range(1, attempts + 1):
            existing = await self.vote_repository.find(key)
            action = decide(existing, requested)

            try:
                vote = await self._apply(key, action)
            except (VoteConflictError, VoteNotFoundError) as e:
                logfire.warn(
                    "Concurrent vote change, re-deciding",
                    key=str(key),
                    attempt=attempt,
                    action=action.action,
                    error=str(e),
                )
                last_error = e
                continue

            logfire.info(
                "Vote cast",
                key=str(key),
                outcome=action.outcome.value,
                direction=requested.value,
            )
            return action.outcome, vote

        logfire.error("Vote apply retries exhausted", key=str(key), attempts=attempts)
        raise VoteConflictError(str(key)) from last_error

    async def _apply(self, key: VoteKey, action: VoteAction) -> Optional[Vote]:
        if isinstance(action, CreateVote):
            return await self.vote_repository.create(key, action.direction)
        if isinstance(action, FlipVote):
            return await self.vote_repository.update_direction(key, action.direction)
        if isinstance(action, RemoveVote):
            await self.vote_repository.delete(key)
            return None
        raise TypeError(f"Unknown vote action: {action!r}")

    async def _replay(
        self, receipt: VoteReceipt, target: VoteTarget, requested: VoteDirection
    ) -> CastVoteResult:
        if receipt.target != target:
            raise InvalidInputError(
                "Idempotency key was already used for a different target"
            )
        if receipt.direction != requested:
            raise InvalidInputError(
                "Idempotency key was already used for a different vote direction"
            )

        vote = await self.vote_repository.find(
            VoteKey(voter_id=receipt.voter_id, target=target)
        )
        logfire.info(
            "Replayed vote cast",
            voter_id=str(receipt.voter_id),
            request_id=receipt.request_id,
            outcome=receipt.outcome.value,
        )
        return CastVoteResult(
            outcome=receipt.outcome,
            vote=vote if receipt.outcome != VoteOutcome.REMOVED else None,
            replayed=True,
        )
