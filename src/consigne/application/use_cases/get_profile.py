"""
Get Profile use case.

Fetches a user profile by username from the payment contract.
"""

from typing import Optional

from consigne.domain.entities import UserProfile
from consigne.domain.services import IContractGateway
from consigne.infrastructure.contract import decode, profile_from_value
from consigne.infrastructure.contract.encoder import encode_string


class GetProfile:
    """
    Read a profile through simulation.

    Business rules:
    - "No profile" is a normal outcome and returns None
    - Network failures raise TransientIOError, they never read as "absent"
    """

    def __init__(self, gateway: IContractGateway):
        """
        Initialize use case with dependencies.

        Args:
            gateway: Contract gateway
        """
        self.gateway = gateway

    async def execute(self, username: str) -> Optional[UserProfile]:
        """
        Execute get profile.

        Args:
            username: Username to look up (compared byte-for-byte)

        Returns:
            UserProfile or None if not registered

        Raises:
            TransientIOError: If the bridge call fails
            DecodeError: If the response is not a known shape
            MappingError: If the profile struct is malformed
        """
        raw = await self.gateway.call("get_profile", [encode_string(username)])
        return profile_from_value(decode(raw))
