"""
Domain entities.
"""

from consigne.domain.entities.payment import Payment
from consigne.domain.entities.transaction_receipt import (
    TransactionReceipt,
    TransactionStatus,
)
from consigne.domain.entities.user_profile import UserProfile

__all__ = [
    "UserProfile",
    "Payment",
    "TransactionReceipt",
    "TransactionStatus",
]
