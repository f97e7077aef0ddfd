"""Vote state machine.

A voter's relationship to a target is one of three states: no vote, up or
down. Casting a direction moves between them:

    existing   requested   action
    --------   ---------   ------------------------
    none       up/down     CreateVote(requested)
    up         up          RemoveVote   (toggle-off)
    down       down        RemoveVote   (toggle-off)
    up         down        FlipVote(down)
    down       up          FlipVote(up)

Re-casting the direction already held cancels the vote. It is neither a
no-op nor an error.
"""

from typing import ClassVar, Literal, Optional, Union

from forum.domain.model.vote import Vote
from forum.domain.value import VoteDirection, VoteOutcome
from forum.domain.value.common import ValueObject


class CreateVote(ValueObject):
    """Insert a new vote."""

    action: Literal["create"] = "create"
    direction: VoteDirection

    outcome: ClassVar[VoteOutcome] = VoteOutcome.CREATED


class FlipVote(ValueObject):
    """Point an existing vote the other way."""

    action: Literal["flip"] = "flip"
    direction: VoteDirection

    outcome: ClassVar[VoteOutcome] = VoteOutcome.UPDATED


class RemoveVote(ValueObject):
    """Delete the existing vote."""

    action: Literal["remove"] = "remove"

    outcome: ClassVar[VoteOutcome] = VoteOutcome.REMOVED


VoteAction = Union[CreateVote, FlipVote, RemoveVote]


def decide(existing: Optional[Vote], requested: VoteDirection) -> VoteAction:
    """Decide what a cast does given the voter's current vote.

    Pure function: no I/O, same answer for threads and comments.

    Args:
        existing: The voter's current vote on the target, if any
        requested: Direction being cast

    Returns:
        The action to apply to the store
    """
    if existing is None:
        return CreateVote(direction=requested)
    if existing.direction == requested:
        return RemoveVote()
    return FlipVote(direction=requested)
