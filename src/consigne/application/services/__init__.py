"""Application services."""

from consigne.application.services.identity_reconciler import IdentityReconciler
from consigne.application.services.payment_enumerator import PaymentEnumerator
from consigne.application.services.username_availability import (
    AvailabilityState,
    AvailabilityStatus,
    UsernameAvailabilityChecker,
)

__all__ = [
    "IdentityReconciler",
    "PaymentEnumerator",
    "AvailabilityState",
    "AvailabilityStatus",
    "UsernameAvailabilityChecker",
]
