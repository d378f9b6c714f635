"""
Wire decoding and entity mapping exceptions.

DecodeError: payload matched no known tagged-value representation.
MappingError: payload decoded but did not satisfy the entity schema.
"""

from consigne.domain.exceptions.base import ConsigneException


class DecodeError(ConsigneException):
    """Base exception for tagged-value decoding failures."""


class UnsupportedValueShape(DecodeError):
    """Raised when a node carries an unknown tag or malformed payload."""

    def __init__(self, tag: object, detail: str = ""):
        """
        Initialize unsupported shape error.

        Args:
            tag: Discriminator (or sub-discriminator) that was rejected
            detail: Optional description of what was wrong
        """
        message = f"Unsupported value shape: {tag!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, code="UNSUPPORTED_VALUE_SHAPE")
        self.tag = tag
        self.detail = detail


class ValueOutOfRange(DecodeError):
    """Raised when an integer does not fit the declared wire width."""

    def __init__(self, kind: str, value: object):
        """
        Initialize out-of-range error.

        Args:
            kind: Wire integer kind (u64, i128, ...)
            value: Offending raw value
        """
        super().__init__(
            f"Value out of range for {kind}: {value!r}",
            code="VALUE_OUT_OF_RANGE",
        )
        self.kind = kind
        self.value = value


class MappingError(ConsigneException):
    """Base exception for entity mapping failures."""


class MissingRequiredField(MappingError):
    """Raised when an identity field is absent from an entity map."""

    def __init__(self, field_name: str):
        super().__init__(
            f"Missing required field: {field_name}",
            code="MISSING_REQUIRED_FIELD",
        )
        self.field_name = field_name


class TypeMismatch(MappingError):
    """Raised when a field decodes to a different kind than expected."""

    def __init__(self, field_name: str, expected: str, actual: str):
        """
        Initialize type mismatch error.

        Args:
            field_name: Entity field name
            expected: Expected DecodedKind value
            actual: Actual DecodedKind value
        """
        super().__init__(
            f"Field {field_name!r} expected {expected}, got {actual}",
            code="TYPE_MISMATCH",
        )
        self.field_name = field_name
        self.expected = expected
        self.actual = actual
