"""
WalletAddress value object - Immutable Stellar account or contract address.
"""

from dataclasses import dataclass
from enum import Enum

from stellar_sdk import StrKey


class AddressKind(str, Enum):
    """Identity kinds distinguished by the ledger."""

    ACCOUNT = "account"
    CONTRACT = "contract"


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object representing a validated StrKey address.

    Business rules:
    - Account addresses are ed25519 public keys ("G...")
    - Contract addresses are contract ids ("C...")
    - Both are 56 characters, base32 with checksum
    - Immutable once created
    """

    address: str

    def __post_init__(self):
        """Validate address on creation."""
        if not self.address:
            raise ValueError("Wallet address cannot be empty")

        if len(self.address) != 56:
            raise ValueError(f"Invalid wallet address length: {len(self.address)}")

        # Raises ValueError on bad checksum / version byte
        self.raw_bytes()

    @property
    def kind(self) -> AddressKind:
        """Address kind derived from the StrKey version prefix."""
        if self.address.startswith("C"):
            return AddressKind.CONTRACT
        return AddressKind.ACCOUNT

    def raw_bytes(self) -> bytes:
        """Return the 32 identity bytes behind the StrKey encoding."""
        if self.address.startswith("G"):
            return StrKey.decode_ed25519_public_key(self.address)
        if self.address.startswith("C"):
            return StrKey.decode_contract(self.address)
        raise ValueError(f"Unsupported address prefix: {self.address[:1]}")

    @classmethod
    def from_raw(cls, kind: AddressKind, identity: bytes) -> "WalletAddress":
        """Build address from identity bytes and kind."""
        if kind is AddressKind.CONTRACT:
            return cls(StrKey.encode_contract(identity))
        return cls(StrKey.encode_ed25519_public_key(identity))

    def truncated(self) -> str:
        """Return truncated address for display (e.g., 'GABCDE...WXYZ')."""
        return f"{self.address[:6]}...{self.address[-4:]}"

    def __str__(self) -> str:
        """String representation returns full address."""
        return self.address
