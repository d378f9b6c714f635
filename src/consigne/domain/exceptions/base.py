"""
Base domain exceptions.
"""


class ConsigneException(Exception):
    """Base exception for all Consigne domain errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(ConsigneException):
    """Raised when caller input fails a fail-fast check."""

    def __init__(self, field: str, reason: str):
        message = f"Validation failed for {field}: {reason}"
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.reason = reason


class RecipientNotFoundError(ConsigneException):
    """Raised when a payment targets a username with no profile."""

    def __init__(self, username: str):
        super().__init__(
            f"Recipient username does not exist: {username}",
            code="RECIPIENT_NOT_FOUND",
        )
        self.username = username
