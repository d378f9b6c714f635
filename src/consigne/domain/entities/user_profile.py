"""
UserProfile entity - on-chain registration of a username.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserProfile:
    """
    UserProfile entity as stored by the payment contract.

    Created by the contract's register call and never modified afterwards.
    One profile per username; an address owns at most one username.
    """

    username: str
    address: str = ""
    created_at: int = 0

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "username": self.username,
            "address": self.address,
            "created_at": self.created_at,
        }
