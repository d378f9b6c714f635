"""Application use cases."""

from consigne.application.use_cases.check_username_availability import (
    CheckUsernameAvailability,
)
from consigne.application.use_cases.claim_payment import ClaimPayment
from consigne.application.use_cases.create_payment import (
    NATIVE_TOKEN_ADDRESS,
    CreatePayment,
    PaymentCreated,
)
from consigne.application.use_cases.get_payment import GetPayment
from consigne.application.use_cases.get_profile import GetProfile
from consigne.application.use_cases.lookup_username import LookupUsername
from consigne.application.use_cases.register_user import (
    RegisterUser,
    RegistrationResult,
)

__all__ = [
    "CheckUsernameAvailability",
    "ClaimPayment",
    "CreatePayment",
    "PaymentCreated",
    "NATIVE_TOKEN_ADDRESS",
    "GetPayment",
    "GetProfile",
    "LookupUsername",
    "RegisterUser",
    "RegistrationResult",
]
