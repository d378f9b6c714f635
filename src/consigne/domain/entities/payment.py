"""
Payment entity - escrowed transfer addressed to a username.
"""

from dataclasses import dataclass
from decimal import Decimal

from consigne.domain.value_objects.amount import from_stroops


@dataclass(frozen=True)
class Payment:
    """
    Payment entity as stored by the payment contract.

    Business rules (owned by the contract):
    - payment_id is unique and opaque
    - amount is in the ledger's smallest unit
    - claimed only ever goes False -> True
    """

    payment_id: int
    recipient_username: str = ""
    sender: str = ""
    token: str = ""
    amount: int = 0
    message: str = ""
    timestamp: int = 0
    claimed: bool = False

    @property
    def display_amount(self) -> Decimal:
        """Amount in human-facing units."""
        return from_stroops(self.amount)

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "payment_id": self.payment_id,
            "recipient_username": self.recipient_username,
            "sender": self.sender,
            "token": self.token,
            "amount": str(self.amount),
            "message": self.message,
            "timestamp": self.timestamp,
            "claimed": self.claimed,
        }
