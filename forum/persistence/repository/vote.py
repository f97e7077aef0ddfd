"""PostgreSQL implementation of Vote repository."""

from typing import Optional
from uuid import uuid4

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import VoteConflictError, VoteNotFoundError
from forum.domain.model import Vote
from forum.domain.repository import VoteRepository
from forum.domain.value import VoteDirection, VoteId, VoteKey, VoteTarget
from forum.persistence.database import store_errors
from forum.persistence.mappers import row_to_vote, vote_to_dict
from forum.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _target_clause(target: VoteTarget):
        return and_(
            votes_table.c.target_kind == target.kind.value,
            votes_table.c.target_id == target.id,
        )

    def _key_clause(self, key: VoteKey):
        return and_(
            votes_table.c.voter_id == key.voter_id,
            self._target_clause(key.target),
        )

    async def find(self, key: VoteKey) -> Optional[Vote]:
        """Find a user's vote on a target."""
        stmt = select(votes_table).where(self._key_clause(key))
        with store_errors():
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def create(self, key: VoteKey, direction: VoteDirection) -> Vote:
        """Create a vote.

        The insert runs inside a SAVEPOINT so a unique violation rolls back
        only this statement and the request transaction stays usable for
        the caller's retry.
        """
        vote = Vote(
            id=VoteId(uuid4()),
            voter_id=key.voter_id,
            target_kind=key.target.kind,
            target_id=key.target.id,
            direction=direction,
        )
        stmt = insert(votes_table).values(**vote_to_dict(vote))

        try:
            with store_errors():
                async with self.session.begin_nested():
                    await self.session.execute(stmt)
        except IntegrityError as e:
            raise VoteConflictError(str(key)) from e

        return vote

    async def update_direction(self, key: VoteKey, direction: VoteDirection) -> Vote:
        """Change the direction of an existing vote."""
        stmt = (
            update(votes_table)
            .where(self._key_clause(key))
            .values(direction=direction.value, updated_at=func.now())
            .returning(*votes_table.c)
        )
        with store_errors():
            result = await self.session.execute(stmt)
        row = result.fetchone()
        if row is None:
            raise VoteNotFoundError(str(key))
        return row_to_vote(row._asdict())

    async def delete(self, key: VoteKey) -> None:
        """Delete a vote."""
        stmt = delete(votes_table).where(self._key_clause(key))
        with store_errors():
            result = await self.session.execute(stmt)
        if result.rowcount == 0:  # type: ignore[attr-defined]
            raise VoteNotFoundError(str(key))

    async def count_by_direction(
        self, target: VoteTarget, direction: VoteDirection
    ) -> int:
        """Count votes on a target pointing one way."""
        stmt = (
            select(func.count())
            .select_from(votes_table)
            .where(
                and_(
                    self._target_clause(target),
                    votes_table.c.direction == direction.value,
                )
            )
        )
        with store_errors():
            result = await self.session.execute(stmt)
        return int(result.scalar_one())
