"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase, VoteInfo
from .get_my_vote import GetMyVoteRequest, GetMyVoteResponse, GetMyVoteUseCase
from .get_vote_totals import (
    GetVoteTotalsRequest,
    GetVoteTotalsResponse,
    GetVoteTotalsUseCase,
)

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "VoteInfo",
    "GetMyVoteRequest",
    "GetMyVoteResponse",
    "GetMyVoteUseCase",
    "GetVoteTotalsRequest",
    "GetVoteTotalsResponse",
    "GetVoteTotalsUseCase",
]
