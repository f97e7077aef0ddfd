"""In-memory vote receipt repository for testing."""

from datetime import timedelta
from typing import Optional

from forum.domain.error import VoteConflictError
from forum.domain.model.receipt import VoteReceipt
from forum.domain.repository.receipt import VoteReceiptRepository
from forum.domain.value import UserId


class InMemoryVoteReceiptRepository(VoteReceiptRepository):
    """In-memory implementation of VoteReceiptRepository for testing."""

    def __init__(self, ttl: timedelta = timedelta(hours=24)) -> None:
        self.ttl = ttl
        self._receipts: dict[tuple[UserId, str], VoteReceipt] = {}

    async def find(self, voter_id: UserId, request_id: str) -> Optional[VoteReceipt]:
        """Find the live receipt for a voter's idempotency key."""
        receipt = self._receipts.get((voter_id, request_id))
        if receipt is None or receipt.is_expired(self.ttl):
            return None
        return receipt

    async def save(self, receipt: VoteReceipt) -> VoteReceipt:
        """Purge expired receipts, then save a receipt.

        Raises:
            VoteConflictError: If a live receipt already exists for this key
        """
        expired = [k for k, r in self._receipts.items() if r.is_expired(self.ttl)]
        for k in expired:
            del self._receipts[k]

        key = (receipt.voter_id, receipt.request_id)
        if key in self._receipts:
            raise VoteConflictError(f"{receipt.voter_id}/{receipt.request_id}")
        self._receipts[key] = receipt
        return receipt
