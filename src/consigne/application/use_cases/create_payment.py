"""
Create Payment use case.

Escrows tokens for a recipient username.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from consigne.application.use_cases.get_profile import GetProfile
from consigne.domain.entities import TransactionReceipt
from consigne.domain.exceptions import RecipientNotFoundError, ValidationError
from consigne.domain.services import IContractGateway, ITransactionSigner
from consigne.domain.value_objects import Username, WalletAddress, to_stroops
from consigne.infrastructure.contract import DecodedKind, decode, scalar_from_value
from consigne.infrastructure.contract.encoder import (
    encode_address,
    encode_i128,
    encode_string,
)
from consigne.infrastructure.monitoring import get_logger, set_operation_id

logger = get_logger(__name__)

MESSAGE_MAX_LENGTH = 500

# Stellar Asset Contract for the native asset (XLM)
NATIVE_TOKEN_ADDRESS = "CDLZFC3SYJYDZT7K67VZ75HPJVIEUVNIXF47ZG2FB2RMQQVU2HHGCYSC"


@dataclass
class PaymentCreated:
    """Result of a create_payment submit."""

    receipt: TransactionReceipt
    payment_id: Optional[int]
    amount: int


class CreatePayment:
    """
    Send tokens into escrow for a username.

    Business rules:
    - Recipient username must have a profile
    - Amount must be positive, at most 7 decimal places
    - Message must be at most 500 characters
    - Token defaults to the native asset contract
    """

    def __init__(
        self,
        gateway: IContractGateway,
        get_profile: GetProfile,
        native_token: str = NATIVE_TOKEN_ADDRESS,
    ):
        self.gateway = gateway
        self.get_profile = get_profile
        self.native_token = native_token

    async def execute(
        self,
        sender: str,
        recipient_username: str,
        amount: Union[Decimal, str, int],
        message: str,
        signer: ITransactionSigner,
        token: Optional[str] = None,
    ) -> PaymentCreated:
        """
        Execute payment creation.

        Args:
            sender: Sender account address (G...)
            recipient_username: Recipient username
            amount: Human-facing amount (e.g., "12.5")
            message: Note attached to the payment
            signer: External wallet signer
            token: Token contract address (defaults to native asset)

        Returns:
            PaymentCreated with receipt and contract-assigned payment id

        Raises:
            ValidationError: If username, amount or message is invalid
            RecipientNotFoundError: If recipient has no profile
            ContractInvocationError: If the contract rejects the payment
            SignerRejected: If the wallet declined
            TransientIOError: If the bridge call fails
        """
        set_operation_id()
        recipient = Username(recipient_username)
        wallet = WalletAddress(sender)
        token_address = WalletAddress(token or self.native_token)

        stroops = to_stroops(amount)
        if stroops <= 0:
            raise ValidationError("amount", "must be greater than zero")

        if len(message) > MESSAGE_MAX_LENGTH:
            raise ValidationError(
                "message", f"must be at most {MESSAGE_MAX_LENGTH} characters"
            )

        if await self.get_profile.execute(recipient.value) is None:
            raise RecipientNotFoundError(recipient.value)

        receipt = await self.gateway.submit(
            "create_payment",
            [
                encode_address(wallet),
                encode_string(recipient.value),
                encode_address(token_address),
                encode_i128(stroops),
                encode_string(message),
            ],
            source=wallet.address,
            signer=signer,
        )

        payment_id = None
        if receipt.return_value is not None:
            payment_id = scalar_from_value(
                decode(receipt.return_value), DecodedKind.U64, "payment_id"
            )

        logger.info(
            f"Payment {payment_id} created for {recipient.value}",
            extra={
                "payment_id": payment_id,
                "recipient": recipient.value,
                "amount": stroops,
                "tx_hash": receipt.tx_hash,
            },
        )

        return PaymentCreated(receipt=receipt, payment_id=payment_id, amount=stroops)
