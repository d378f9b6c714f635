"""
Tagged-value tree wire model.

Every node returned by the contract bridge is a JSON object carrying an
explicit discriminator:

    {"tag": "<ValueTag>", "value": <payload>}

Payloads by tag:
    void      no payload
    string    UTF-8 text (str, or bytes)
    symbol    identifier text; struct field names arrive as symbols
    u64       int or decimal string
    i128      {"hi": <int64>, "lo": <uint64>}
    bool      true / false
    address   {"tag": "account", "value": {"tag": "ed25519", "value": <hex>}}
              {"tag": "contract", "value": <hex>}
    map       [{"key": <node>, "val": <node>}, ...]
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

TaggedValue = Mapping[str, Any]

U64_MAX = (1 << 64) - 1
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1
I128_MIN = -(1 << 127)
I128_MAX = (1 << 127) - 1

IDENTITY_BYTES = 32


class ValueTag(str, Enum):
    """Top-level discriminators understood by the decoder."""

    VOID = "void"
    STRING = "string"
    SYMBOL = "symbol"
    U64 = "u64"
    I128 = "i128"
    BOOL = "bool"
    ADDRESS = "address"
    MAP = "map"


class AddressTag(str, Enum):
    """Address sub-discriminators: which identity kind is wrapped."""

    ACCOUNT = "account"
    CONTRACT = "contract"


class PublicKeyTag(str, Enum):
    """Key kinds inside an account identity."""

    ED25519 = "ed25519"


class DecodedKind(str, Enum):
    """Variants of a decoded value."""

    ABSENT = "absent"
    STRING = "string"
    BOOLEAN = "boolean"
    U64 = "u64"
    I128 = "i128"
    ADDRESS = "address"
    MAP = "map"


@dataclass(frozen=True)
class DecodedValue:
    """
    Typed result of decoding one tree node.

    value by kind:
        ABSENT   None
        STRING   str
        BOOLEAN  bool
        U64      int
        I128     int
        ADDRESS  canonical StrKey str ("G..." account, "C..." contract)
        MAP      tuple of (name, DecodedValue) pairs in wire order
    """

    kind: DecodedKind
    value: Any = None

    @property
    def is_absent(self) -> bool:
        return self.kind is DecodedKind.ABSENT


ABSENT = DecodedValue(DecodedKind.ABSENT)


def node(tag: ValueTag, value: Any = None) -> dict:
    """Build a tree node; void nodes carry no payload."""
    if tag is ValueTag.VOID:
        return {"tag": tag.value}
    return {"tag": tag.value, "value": value}
