"""
Contract wire codec: tagged-value trees, decoding and entity mapping.
"""

from consigne.infrastructure.contract.decoder import decode
from consigne.infrastructure.contract.entity_mapper import (
    map_payment,
    map_profile,
    payment_from_value,
    profile_from_value,
    scalar_from_value,
)
from consigne.infrastructure.contract.tagged_value import (
    ABSENT,
    DecodedKind,
    DecodedValue,
    TaggedValue,
    ValueTag,
)

__all__ = [
    "decode",
    "map_profile",
    "map_payment",
    "profile_from_value",
    "payment_from_value",
    "scalar_from_value",
    "ABSENT",
    "DecodedKind",
    "DecodedValue",
    "TaggedValue",
    "ValueTag",
]
