"""
Transaction signer interface.

Signing happens in the user's wallet, outside this core.
"""

from abc import ABC, abstractmethod


class ITransactionSigner(ABC):
    """Opaque async signing capability supplied by the wallet layer."""

    @abstractmethod
    async def sign(self, unsigned_tx: str, network_passphrase: str) -> str:
        """
        Sign a prepared transaction.

        Args:
            unsigned_tx: Base64 transaction envelope from the prepare step
            network_passphrase: Network the signature is bound to

        Returns:
            Base64 signed transaction envelope

        Raises:
            Exception: Any failure, including user rejection
        """
