"""
Get Payment use case.

Fetches one escrowed payment by id from the payment contract.
"""

from typing import Optional

from consigne.domain.entities import Payment
from consigne.domain.services import IContractGateway
from consigne.infrastructure.contract import decode, payment_from_value
from consigne.infrastructure.contract.encoder import encode_u64


class GetPayment:
    """Read a payment through simulation; None when it does not exist."""

    def __init__(self, gateway: IContractGateway):
        self.gateway = gateway

    async def execute(self, payment_id: int) -> Optional[Payment]:
        """
        Execute get payment.

        Args:
            payment_id: Contract-assigned payment id

        Returns:
            Payment or None if not found

        Raises:
            TransientIOError: If the bridge call fails
            DecodeError: If the response is not a known shape
            MappingError: If the payment struct is malformed
        """
        raw = await self.gateway.call("get_payment", [encode_u64(payment_id)])
        return payment_from_value(decode(raw))
