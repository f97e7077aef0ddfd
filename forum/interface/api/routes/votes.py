"""Vote routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Response, status
from pydantic import BaseModel

from forum.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetMyVoteRequest,
    GetMyVoteResponse,
    GetMyVoteUseCase,
    GetVoteTotalsRequest,
    GetVoteTotalsResponse,
    GetVoteTotalsUseCase,
)
from forum.domain.value import TargetKind, VoteOutcome

router = APIRouter(prefix="/vote", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    # 1 or -1. Left unvalidated here so the caller is authenticated before
    # the vote service rejects a malformed direction.
    direction: Any = None


def credential(authorization: str | None, auth_token: str | None) -> str | None:
    """Pick the caller's JWT from a bearer header or the auth cookie."""
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token.strip()
    return auth_token


@router.post(
    "/{target_kind}/{target_id}/{user_id}",
    response_model=CastVoteResponse,
    responses={status.HTTP_201_CREATED: {"model": CastVoteResponse}},
)
async def cast_vote(
    target_kind: TargetKind,
    target_id: str,
    user_id: str,
    response: Response,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    request: CastVoteAPIRequest | None = None,
    authorization: str | None = Header(default=None),
    idempotency_key: str | None = Header(default=None, min_length=1, max_length=255),
    auth_token: str | None = Cookie(default=None),
) -> CastVoteResponse:
    """Cast, flip or withdraw a vote on a thread or comment.

    Casting the direction already held removes the vote; casting the
    opposite direction flips it.

    Requires authentication as the user named in the path.

    Args:
        target_kind: "thread" or "comment"
        target_id: Thread or comment UUID
        user_id: Voter's user ID (must be the caller)
        request: Vote direction
        response: Outgoing response (status is 201 when a vote is created)
        cast_vote_use_case: Cast vote use case from DI
        authorization: "Bearer <jwt>" header
        idempotency_key: Optional key making retries of this cast safe
        auth_token: JWT token from cookie

    Returns:
        Outcome of the cast
    """
    result = await cast_vote_use_case.execute(
        CastVoteRequest(
            token=credential(authorization, auth_token),
            voter_id=user_id,
            target_kind=target_kind,
            target_id=target_id,
            direction=request.direction if request else None,
            request_id=idempotency_key,
        )
    )

    if result.outcome == VoteOutcome.CREATED:
        response.status_code = status.HTTP_201_CREATED

    return result


@router.get("/{target_kind}/{target_id}", response_model=GetVoteTotalsResponse)
async def get_vote_totals(
    target_kind: TargetKind,
    target_id: str,
    get_vote_totals_use_case: FromDishka[GetVoteTotalsUseCase],
) -> GetVoteTotalsResponse:
    """Get upvote, downvote and net counts for a thread or comment.

    Public endpoint. A target nobody voted on has all-zero totals.
    """
    return await get_vote_totals_use_case.execute(
        GetVoteTotalsRequest(target_kind=target_kind, target_id=target_id)
    )


@router.get("/{target_kind}/{target_id}/{user_id}", response_model=GetMyVoteResponse)
async def get_my_vote(
    target_kind: TargetKind,
    target_id: str,
    user_id: str,
    get_my_vote_use_case: FromDishka[GetMyVoteUseCase],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetMyVoteResponse:
    """Get the caller's own vote on a thread or comment.

    Requires authentication as the user named in the path.

    Returns:
        The direction held: 1, -1, or 0 if the caller hasn't voted
    """
    return await get_my_vote_use_case.execute(
        GetMyVoteRequest(
            token=credential(authorization, auth_token),
            voter_id=user_id,
            target_kind=target_kind,
            target_id=target_id,
        )
    )
