"""
Tagged-value encoder.

Builds tagged-value trees for contract call arguments, and the struct
trees the contract returns for profiles and payments.
"""

from typing import Iterable, Optional

from consigne.domain.entities import Payment, UserProfile
from consigne.domain.exceptions import ValueOutOfRange
from consigne.domain.value_objects import AddressKind, WalletAddress
from consigne.infrastructure.contract.tagged_value import (
    I128_MAX,
    I128_MIN,
    U64_MAX,
    AddressTag,
    PublicKeyTag,
    ValueTag,
    node,
)

_LO_MASK = (1 << 64) - 1


def encode_void() -> dict:
    return node(ValueTag.VOID)


def encode_string(value: str) -> dict:
    return node(ValueTag.STRING, value)


def encode_symbol(value: str) -> dict:
    return node(ValueTag.SYMBOL, value)


def encode_bool(value: bool) -> dict:
    return node(ValueTag.BOOL, bool(value))


def encode_u64(value: int) -> dict:
    """Encode unsigned 64-bit integer as a decimal string."""
    if not 0 <= value <= U64_MAX:
        raise ValueOutOfRange(ValueTag.U64.value, value)
    return node(ValueTag.U64, str(value))


def encode_i128(value: int) -> dict:
    """Encode signed 128-bit integer as two's-complement hi/lo words."""
    if not I128_MIN <= value <= I128_MAX:
        raise ValueOutOfRange(ValueTag.I128.value, value)
    return node(
        ValueTag.I128,
        {"hi": str(value >> 64), "lo": str(value & _LO_MASK)},
    )


def encode_address(address: str | WalletAddress) -> dict:
    """
    Encode a StrKey address with the nesting its kind requires.

    Raises:
        ValueError: If address is not a valid account or contract StrKey
    """
    wallet = address if isinstance(address, WalletAddress) else WalletAddress(address)
    identity = wallet.raw_bytes().hex()

    if wallet.kind is AddressKind.CONTRACT:
        inner = {"tag": AddressTag.CONTRACT.value, "value": identity}
    else:
        inner = {
            "tag": AddressTag.ACCOUNT.value,
            "value": {"tag": PublicKeyTag.ED25519.value, "value": identity},
        }
    return node(ValueTag.ADDRESS, inner)


def encode_map(entries: Iterable[tuple[str, dict]]) -> dict:
    """Encode struct-like map with symbol keys, preserving order."""
    return node(
        ValueTag.MAP,
        [{"key": encode_symbol(name), "val": val} for name, val in entries],
    )


def encode_profile(profile: Optional[UserProfile]) -> dict:
    """Encode Option<UserProfile> the way the contract returns it."""
    if profile is None:
        return encode_void()
    return encode_map(
        [
            ("username", encode_string(profile.username)),
            ("address", encode_address(profile.address)),
            ("created_at", encode_u64(profile.created_at)),
        ]
    )


def encode_payment(payment: Optional[Payment]) -> dict:
    """Encode Option<Payment> the way the contract returns it."""
    if payment is None:
        return encode_void()
    return encode_map(
        [
            ("payment_id", encode_u64(payment.payment_id)),
            ("recipient_username", encode_string(payment.recipient_username)),
            ("sender", encode_address(payment.sender)),
            ("token", encode_address(payment.token)),
            ("amount", encode_i128(payment.amount)),
            ("message", encode_string(payment.message)),
            ("timestamp", encode_u64(payment.timestamp)),
            ("claimed", encode_bool(payment.claimed)),
        ]
    )
