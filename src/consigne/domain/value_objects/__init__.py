"""
Domain value objects.
"""

from consigne.domain.value_objects.amount import (
    STROOPS_PER_UNIT,
    from_stroops,
    to_stroops,
)
from consigne.domain.value_objects.username import Username
from consigne.domain.value_objects.wallet_address import AddressKind, WalletAddress

__all__ = [
    "AddressKind",
    "WalletAddress",
    "Username",
    "STROOPS_PER_UNIT",
    "to_stroops",
    "from_stroops",
]
