"""
Username value object - handle that identifies a payment recipient.
"""

import re
from dataclasses import dataclass

from consigne.domain.exceptions import ValidationError

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
_USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


@dataclass(frozen=True)
class Username:
    """
    Validated username.

    Business rules:
    - 3 to 30 characters
    - Letters, digits and underscore only
    - Case is preserved; the contract compares bytes exactly
    """

    value: str

    def __post_init__(self):
        """Validate username on creation."""
        if not (USERNAME_MIN_LENGTH <= len(self.value) <= USERNAME_MAX_LENGTH):
            raise ValidationError(
                "username",
                f"must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters",
            )

        if not _USERNAME_PATTERN.fullmatch(self.value):
            raise ValidationError(
                "username",
                "can only contain letters, numbers, and underscore",
            )

    def __str__(self) -> str:
        return self.value
