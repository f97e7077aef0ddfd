"""Vote receipt repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from forum.domain.model.receipt import VoteReceipt
from forum.domain.value import UserId


class VoteReceiptRepository(ABC):
    """Repository for VoteReceipt entity.

    Receipts live for a fixed TTL. An expired receipt is treated as absent
    by find and is purged before new receipts are saved.
    """

    @abstractmethod
    async def find(self, voter_id: UserId, request_id: str) -> Optional[VoteReceipt]:
        """Find the live receipt for a voter's idempotency key.

        Args:
            voter_id: The voter's ID
            request_id: Client-supplied idempotency key

        Returns:
            The receipt if found and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, receipt: VoteReceipt) -> VoteReceipt:
        """Purge expired receipts, then save a receipt.

        Args:
            receipt: The receipt to save

        Returns:
            The saved receipt

        Raises:
            VoteConflictError: If a live receipt already exists for this key
        """
        pass
