"""
Lookup Username use case.

Reverse lookup of the username registered by an address.
"""

from typing import Optional

from consigne.domain.services import IContractGateway
from consigne.infrastructure.contract import DecodedKind, decode, scalar_from_value
from consigne.infrastructure.contract.encoder import encode_address


class LookupUsername:
    """
    Ask the contract which username an address registered.

    The answer is not validated here; IdentityReconciler confirms it
    against the profile before using it.
    """

    def __init__(self, gateway: IContractGateway):
        self.gateway = gateway

    async def execute(self, address: str) -> Optional[str]:
        """
        Execute reverse lookup.

        Args:
            address: Account address (G...)

        Returns:
            Username or None if the address never registered

        Raises:
            ValueError: If address is not a valid StrKey
            TransientIOError: If the bridge call fails
            DecodeError: If the response is not a known shape
            TypeMismatch: If the response is not a string
        """
        raw = await self.gateway.call(
            "get_username_by_address", [encode_address(address)]
        )
        return scalar_from_value(decode(raw), DecodedKind.STRING, "username")
