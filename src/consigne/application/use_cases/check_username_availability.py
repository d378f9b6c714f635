"""
Check Username Availability use case.
"""

from consigne.application.use_cases.get_profile import GetProfile
from consigne.domain.value_objects import Username


class CheckUsernameAvailability:
    """
    Report whether a username can still be registered.

    Business rules:
    - Username must pass charset/length rules first (ValidationError)
    - Available means the contract has no profile for it
    - The contract remains authoritative at registration time
    """

    def __init__(self, get_profile: GetProfile):
        self.get_profile = get_profile

    async def execute(self, username: str) -> bool:
        """
        Execute availability check.

        Args:
            username: Candidate username

        Returns:
            True if no profile exists for the username

        Raises:
            ValidationError: If username breaks charset/length rules
            TransientIOError: If the bridge call fails
        """
        candidate = Username(username)
        profile = await self.get_profile.execute(candidate.value)
        return profile is None
