"""
TransactionReceipt entity - outcome of a broadcast contract call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class TransactionStatus(str, Enum):
    """Broadcast outcome reported by the bridge."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class TransactionReceipt:
    """
    Receipt of a signed and broadcast transaction.

    return_value holds the raw tagged-value tree of the invocation result,
    left undecoded so callers decode it with the expected entity schema.
    """

    tx_hash: str
    status: TransactionStatus = TransactionStatus.PENDING
    return_value: Optional[Any] = None
    ledger: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        """True when the ledger applied the transaction."""
        return self.status == TransactionStatus.SUCCESS
