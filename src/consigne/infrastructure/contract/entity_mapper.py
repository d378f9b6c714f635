"""
Entity mapper.

Assembles domain entities from decoded contract struct maps. Fields are
looked up by exact name; unknown names are ignored so the contract can add
fields without breaking older clients.
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from consigne.domain.entities import Payment, UserProfile
from consigne.domain.exceptions import MissingRequiredField, TypeMismatch
from consigne.infrastructure.contract.tagged_value import DecodedKind, DecodedValue

Entries = Sequence[tuple[str, DecodedValue]]

ROOT_FIELD = "<root>"


@dataclass(frozen=True)
class FieldSpec:
    """Expected kind and fallback of one struct field."""

    name: str
    kind: DecodedKind
    default: Any = None
    required: bool = False


_ZERO = {
    DecodedKind.STRING: "",
    DecodedKind.ADDRESS: "",
    DecodedKind.U64: 0,
    DecodedKind.I128: 0,
    DecodedKind.BOOLEAN: False,
}


def _field(name: str, kind: DecodedKind, required: bool = False) -> FieldSpec:
    return FieldSpec(name=name, kind=kind, default=_ZERO[kind], required=required)


PROFILE_FIELDS = (
    _field("username", DecodedKind.STRING, required=True),
    _field("address", DecodedKind.ADDRESS),
    _field("created_at", DecodedKind.U64),
)

PAYMENT_FIELDS = (
    _field("payment_id", DecodedKind.U64, required=True),
    _field("recipient_username", DecodedKind.STRING),
    _field("sender", DecodedKind.ADDRESS),
    _field("token", DecodedKind.ADDRESS),
    _field("amount", DecodedKind.I128),
    _field("message", DecodedKind.STRING),
    _field("timestamp", DecodedKind.U64),
    _field("claimed", DecodedKind.BOOLEAN),
)


def map_fields(entries: Entries, schema: Sequence[FieldSpec]) -> dict:
    """
    Extract schema fields from decoded map entries.

    Args:
        entries: (name, DecodedValue) pairs in wire order
        schema: Field specs of the target entity

    Returns:
        Dict of field name to Python value

    Raises:
        MissingRequiredField: If a required field is absent
        TypeMismatch: If a present field has the wrong kind
    """
    by_name: dict[str, DecodedValue] = {}
    for name, value in entries:
        by_name.setdefault(name, value)

    result = {}
    for spec in schema:
        value = by_name.get(spec.name)
        if value is None or value.is_absent:
            if spec.required:
                raise MissingRequiredField(spec.name)
            result[spec.name] = spec.default
            continue

        if value.kind is not spec.kind:
            raise TypeMismatch(spec.name, spec.kind.value, value.kind.value)
        result[spec.name] = value.value

    return result


def map_profile(entries: Entries) -> UserProfile:
    """Build UserProfile from decoded struct entries."""
    return UserProfile(**map_fields(entries, PROFILE_FIELDS))


def map_payment(entries: Entries) -> Payment:
    """Build Payment from decoded struct entries."""
    return Payment(**map_fields(entries, PAYMENT_FIELDS))


def _entries_or_none(decoded: DecodedValue) -> Optional[Entries]:
    if decoded.is_absent:
        return None
    if decoded.kind is not DecodedKind.MAP:
        raise TypeMismatch(ROOT_FIELD, DecodedKind.MAP.value, decoded.kind.value)
    return decoded.value


def profile_from_value(decoded: DecodedValue) -> Optional[UserProfile]:
    """
    Map an Option<UserProfile> result.

    Returns:
        UserProfile, or None when the contract returned no profile
    """
    entries = _entries_or_none(decoded)
    return None if entries is None else map_profile(entries)


def payment_from_value(decoded: DecodedValue) -> Optional[Payment]:
    """
    Map an Option<Payment> result.

    Returns:
        Payment, or None when the contract returned no payment
    """
    entries = _entries_or_none(decoded)
    return None if entries is None else map_payment(entries)


def scalar_from_value(
    decoded: DecodedValue, kind: DecodedKind, field: str = ROOT_FIELD
) -> Optional[Any]:
    """Unwrap an optional scalar result, checking its kind."""
    if decoded.is_absent:
        return None
    if decoded.kind is not kind:
        raise TypeMismatch(field, kind.value, decoded.kind.value)
    return decoded.value
