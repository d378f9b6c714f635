"""
Domain exceptions package.
"""

# Base exceptions
from consigne.domain.exceptions.base import (
    ConsigneException,
    RecipientNotFoundError,
    ValidationError,
)

# Contract gateway exceptions
from consigne.domain.exceptions.contract import (
    ERROR_MESSAGES,
    ContractErrorCode,
    ContractInvocationError,
    GatewayError,
    SignerRejected,
    TransientIOError,
)

# Decoding / mapping exceptions
from consigne.domain.exceptions.decoding import (
    DecodeError,
    MappingError,
    MissingRequiredField,
    TypeMismatch,
    UnsupportedValueShape,
    ValueOutOfRange,
)

__all__ = [
    # Base
    "ConsigneException",
    "ValidationError",
    "RecipientNotFoundError",
    # Decoding
    "DecodeError",
    "UnsupportedValueShape",
    "ValueOutOfRange",
    "MappingError",
    "MissingRequiredField",
    "TypeMismatch",
    # Gateway
    "GatewayError",
    "TransientIOError",
    "ContractInvocationError",
    "SignerRejected",
    "ContractErrorCode",
    "ERROR_MESSAGES",
]
