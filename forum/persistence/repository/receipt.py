"""PostgreSQL implementation of VoteReceipt repository."""

from datetime import timedelta
from typing import Optional

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from forum.domain.error import VoteConflictError
from forum.domain.model import VoteReceipt
from forum.domain.repository import VoteReceiptRepository
from forum.domain.value import UserId
from forum.persistence.database import store_errors
from forum.persistence.mappers import receipt_to_dict, row_to_receipt
from forum.persistence.tables import vote_receipts_table


class PostgresVoteReceiptRepository(VoteReceiptRepository):
    """PostgreSQL implementation of VoteReceiptRepository."""

    def __init__(self, session: AsyncSession, ttl: timedelta) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
            ttl: How long a receipt keeps replaying
        """
        self.session = session
        self.ttl = ttl

    def _live_clause(self):
        return vote_receipts_table.c.created_at > func.now() - self.ttl

    async def find(self, voter_id: UserId, request_id: str) -> Optional[VoteReceipt]:
        """Find the live receipt for a voter's idempotency key."""
        stmt = select(vote_receipts_table).where(
            and_(
                vote_receipts_table.c.voter_id == voter_id,
                vote_receipts_table.c.request_id == request_id,
                self._live_clause(),
            )
        )
        with store_errors():
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_receipt(row._asdict()) if row else None

    async def save(self, receipt: VoteReceipt) -> VoteReceipt:
        """Purge expired receipts, then save a receipt.

        Purging first frees keys whose receipt expired, so they can be
        reused. A concurrent request holding the same live key wins the
        primary key; the loser raises and its whole transaction (including
        the vote change) is rolled back by the session provider.
        """
        purge = delete(vote_receipts_table).where(~self._live_clause())
        stmt = insert(vote_receipts_table).values(**receipt_to_dict(receipt))
        try:
            with store_errors():
                await self.session.execute(purge)
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise VoteConflictError(
                f"{receipt.voter_id}/{receipt.request_id}"
            ) from e
        return receipt
