"""
Tagged-value decoder.

Pure functions turning a tagged-value tree into DecodedValue. Dispatch is
over the closed ValueTag set; any other discriminator fails loudly with
UnsupportedValueShape instead of yielding a default.
"""

from typing import Any

from stellar_sdk import StrKey

from consigne.domain.exceptions import UnsupportedValueShape, ValueOutOfRange
from consigne.domain.value_objects.wallet_address import WalletAddress
from consigne.infrastructure.contract.tagged_value import (
    ABSENT,
    I64_MAX,
    I64_MIN,
    IDENTITY_BYTES,
    U64_MAX,
    AddressTag,
    DecodedKind,
    DecodedValue,
    PublicKeyTag,
    TaggedValue,
    ValueTag,
)


def decode(raw: TaggedValue) -> DecodedValue:
    """
    Decode one tagged-value tree.

    Args:
        raw: Tree node as received from the bridge

    Returns:
        DecodedValue; the void tag yields ABSENT

    Raises:
        UnsupportedValueShape: Unknown tag or malformed payload
        ValueOutOfRange: Integer wider than its declared wire kind
    """
    tag = _tag_of(raw, ValueTag, "value")

    if tag is ValueTag.VOID:
        return ABSENT
    if tag is ValueTag.STRING or tag is ValueTag.SYMBOL:
        return DecodedValue(DecodedKind.STRING, _decode_text(raw, tag))
    if tag is ValueTag.U64:
        return DecodedValue(DecodedKind.U64, _decode_u64(_payload(raw, tag)))
    if tag is ValueTag.I128:
        return DecodedValue(DecodedKind.I128, _decode_i128(_payload(raw, tag)))
    if tag is ValueTag.BOOL:
        return DecodedValue(DecodedKind.BOOLEAN, _decode_bool(_payload(raw, tag)))
    if tag is ValueTag.ADDRESS:
        return DecodedValue(
            DecodedKind.ADDRESS, _decode_address(_payload(raw, tag))
        )
    if tag is ValueTag.MAP:
        return DecodedValue(DecodedKind.MAP, _decode_map(_payload(raw, tag)))

    raise UnsupportedValueShape(tag, "no decoder registered")


# ================================================================
# Node helpers
# ================================================================


def _tag_of(raw: Any, tags: type, level: str):
    """Read and validate the discriminator of a node."""
    if not isinstance(raw, dict) or "tag" not in raw:
        raise UnsupportedValueShape(
            type(raw).__name__, f"{level} node without discriminator"
        )
    try:
        return tags(raw["tag"])
    except ValueError:
        raise UnsupportedValueShape(raw["tag"], f"unknown {level} tag")


def _payload(raw: TaggedValue, tag: Any) -> Any:
    if "value" not in raw:
        raise UnsupportedValueShape(tag.value, "missing payload")
    return raw["value"]


def _parse_int(value: Any, kind: str) -> int:
    """Accept JSON numbers and decimal strings; reject everything else."""
    if isinstance(value, bool):
        raise UnsupportedValueShape(kind, "boolean where integer expected")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text[:1] in ("-", "+") else text
        if digits.isascii() and digits.isdigit():
            return int(text)
    raise UnsupportedValueShape(kind, f"not an integer: {value!r}")


def _parse_bytes(value: Any, what: str) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return bytes.fromhex(value)
        except ValueError:
            raise UnsupportedValueShape(what, "identity is not hex encoded")
    raise UnsupportedValueShape(what, f"unexpected payload {type(value).__name__}")


# ================================================================
# Scalars
# ================================================================


def _decode_text(raw: TaggedValue, tag: ValueTag) -> str:
    value = _payload(raw, tag)
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            raise UnsupportedValueShape(tag.value, "payload is not UTF-8")
    raise UnsupportedValueShape(tag.value, f"not text: {type(value).__name__}")


def _decode_u64(value: Any) -> int:
    number = _parse_int(value, ValueTag.U64.value)
    if not 0 <= number <= U64_MAX:
        raise ValueOutOfRange(ValueTag.U64.value, value)
    return number


def _decode_i128(value: Any) -> int:
    """
    Decode a hi/lo pair.

    Only magnitudes that fit the low word are accepted; a nonzero high word
    is reported rather than dropped.
    """
    if not isinstance(value, dict) or "hi" not in value or "lo" not in value:
        raise UnsupportedValueShape(ValueTag.I128.value, "expected hi/lo parts")

    hi = _parse_int(value["hi"], ValueTag.I128.value)
    lo = _parse_int(value["lo"], ValueTag.I128.value)

    if not I64_MIN <= hi <= I64_MAX or not 0 <= lo <= U64_MAX:
        raise ValueOutOfRange(ValueTag.I128.value, value)
    if hi != 0:
        raise ValueOutOfRange(ValueTag.I128.value, value)
    return lo


def _decode_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise UnsupportedValueShape(ValueTag.BOOL.value, f"not a boolean: {value!r}")
    return value


# ================================================================
# Address
# ================================================================


def _decode_address(value: Any) -> str:
    """
    Unwrap an address node to its canonical StrKey string.

    inline:   address -> "G..." or "C..."
    account:  address -> account -> ed25519 -> bytes   (G...)
    contract: address -> contract -> bytes             (C...)
    """
    if isinstance(value, str):
        return _inline_address(value)

    kind = _tag_of(value, AddressTag, "address")

    if kind is AddressTag.ACCOUNT:
        key = _tag_of(_payload(value, kind), PublicKeyTag, "public key")
        if key is PublicKeyTag.ED25519:
            identity = _identity(_payload(_payload(value, kind), key), kind)
            return StrKey.encode_ed25519_public_key(identity)
        raise UnsupportedValueShape(key, "no decoder for public key type")

    if kind is AddressTag.CONTRACT:
        identity = _identity(_payload(value, kind), kind)
        return StrKey.encode_contract(identity)

    raise UnsupportedValueShape(kind, "no decoder for address type")


def _inline_address(value: str) -> str:
    """Validate an address already rendered as a StrKey string."""
    try:
        return WalletAddress(value).address
    except ValueError as e:
        raise UnsupportedValueShape(ValueTag.ADDRESS.value, f"invalid StrKey: {e}")


def _identity(value: Any, kind: AddressTag) -> bytes:
    identity = _parse_bytes(value, kind.value)
    if len(identity) != IDENTITY_BYTES:
        raise UnsupportedValueShape(
            kind.value, f"identity is {len(identity)} bytes, need {IDENTITY_BYTES}"
        )
    return identity


# ================================================================
# Map
# ================================================================


def _decode_map(value: Any) -> tuple:
    if not isinstance(value, list):
        raise UnsupportedValueShape(ValueTag.MAP.value, "entries must be a list")

    entries = []
    for entry in value:
        if not isinstance(entry, dict) or "key" not in entry or "val" not in entry:
            raise UnsupportedValueShape(ValueTag.MAP.value, "malformed map entry")

        key = decode(entry["key"])
        if key.kind is not DecodedKind.STRING:
            raise UnsupportedValueShape(
                ValueTag.MAP.value, f"map key decoded to {key.kind.value}"
            )
        entries.append((key.value, decode(entry["val"])))

    return tuple(entries)
