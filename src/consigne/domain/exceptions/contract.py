"""
Contract gateway exceptions.

Defines exceptions for simulation, signing and broadcast of contract calls.
"""

from enum import IntEnum
from typing import Optional

from consigne.domain.exceptions.base import ConsigneException


class ContractErrorCode(IntEnum):
    """Error codes reported by the payment contract."""

    # User profile errors (1xx)
    USERNAME_ALREADY_EXISTS = 100
    USERNAME_NOT_FOUND = 101
    INVALID_USERNAME = 102
    USER_ALREADY_REGISTERED = 103
    DISPLAY_NAME_TOO_LONG = 104
    UNAUTHORIZED = 105

    # Payment errors (2xx)
    PAYMENT_NOT_FOUND = 200
    PAYMENT_ALREADY_CLAIMED = 201
    INVALID_AMOUNT = 202
    MESSAGE_TOO_LONG = 203
    INVALID_TOKEN = 204
    RECIPIENT_NOT_FOUND = 205
    NOT_RECIPIENT = 206

    # Security errors (3xx)
    CONTRACT_PAUSED = 300
    RATE_LIMIT_EXCEEDED = 301
    INVALID_ADDRESS = 302

    # Storage errors (4xx)
    STORAGE_ERROR = 400
    DATA_NOT_FOUND = 401

    # General errors (9xx)
    INTERNAL_ERROR = 900


ERROR_MESSAGES: dict[ContractErrorCode, str] = {
    ContractErrorCode.USERNAME_ALREADY_EXISTS: "This username is already taken",
    ContractErrorCode.USERNAME_NOT_FOUND: "Username not found",
    ContractErrorCode.INVALID_USERNAME: (
        "Username must be 3-30 characters (alphanumeric and underscore only)"
    ),
    ContractErrorCode.USER_ALREADY_REGISTERED: "You already have a profile",
    ContractErrorCode.DISPLAY_NAME_TOO_LONG: (
        "Display name must be 100 characters or less"
    ),
    ContractErrorCode.UNAUTHORIZED: (
        "You are not authorized to perform this action"
    ),
    ContractErrorCode.PAYMENT_NOT_FOUND: "Payment not found",
    ContractErrorCode.PAYMENT_ALREADY_CLAIMED: "Payment has already been claimed",
    ContractErrorCode.INVALID_AMOUNT: "Amount must be greater than zero",
    ContractErrorCode.MESSAGE_TOO_LONG: "Message must be 500 characters or less",
    ContractErrorCode.INVALID_TOKEN: "Invalid token address",
    ContractErrorCode.RECIPIENT_NOT_FOUND: "Recipient username does not exist",
    ContractErrorCode.NOT_RECIPIENT: "You are not the recipient of this payment",
    ContractErrorCode.CONTRACT_PAUSED: "Contract is currently paused",
    ContractErrorCode.RATE_LIMIT_EXCEEDED: (
        "Too many payments. Please wait a few minutes."
    ),
    ContractErrorCode.INVALID_ADDRESS: "Invalid address format",
    ContractErrorCode.STORAGE_ERROR: "Storage operation failed",
    ContractErrorCode.DATA_NOT_FOUND: "Data not found",
    ContractErrorCode.INTERNAL_ERROR: "Internal error occurred",
}


class GatewayError(ConsigneException):
    """Base exception for remote contract call failures."""


class TransientIOError(GatewayError):
    """Raised when the bridge or network failed; cause not distinguished."""

    def __init__(self, operation: str, reason: str):
        """
        Initialize transient I/O error.

        Args:
            operation: Contract method or bridge step that failed
            reason: Underlying error description
        """
        super().__init__(
            f"Transient failure during {operation}: {reason}",
            code="TRANSIENT_IO_ERROR",
        )
        self.operation = operation
        self.reason = reason


class ContractInvocationError(GatewayError):
    """Raised when the contract rejected a call (panic or error code)."""

    def __init__(
        self,
        message: str,
        contract_code: Optional[ContractErrorCode] = None,
        status_code: Optional[int] = None,
    ):
        """
        Initialize contract invocation error.

        Args:
            message: Error message
            contract_code: Contract error code, if the bridge reported one
            status_code: HTTP status code from the bridge
        """
        super().__init__(message, code="CONTRACT_INVOCATION_ERROR")
        self.contract_code = contract_code
        self.status_code = status_code

    @classmethod
    def from_code(
        cls, raw_code: int, status_code: Optional[int] = None
    ) -> "ContractInvocationError":
        """Build error with the catalogued message for a contract code."""
        try:
            code = ContractErrorCode(raw_code)
        except ValueError:
            return cls(
                f"Contract error {raw_code}",
                status_code=status_code,
            )
        return cls(ERROR_MESSAGES[code], contract_code=code, status_code=status_code)


class SignerRejected(GatewayError):
    """Raised when the external signer declined or failed to sign."""

    def __init__(self, method: str, reason: str):
        super().__init__(
            f"Signer rejected {method}: {reason}",
            code="SIGNER_REJECTED",
        )
        self.method = method
        self.reason = reason
