"""
Register User use case.

Binds a username to the caller's wallet on the payment contract.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from consigne.domain.entities import TransactionReceipt, UserProfile
from consigne.domain.services import IContractGateway, ITransactionSigner
from consigne.domain.value_objects import Username, WalletAddress
from consigne.infrastructure.contract.encoder import encode_address, encode_string
from consigne.infrastructure.monitoring import get_logger, set_operation_id

if TYPE_CHECKING:
    from consigne.application.services.identity_reconciler import (
        IdentityReconciler,
    )

logger = get_logger(__name__)


@dataclass
class RegistrationResult:
    """Result of a registration submit."""

    receipt: TransactionReceipt
    profile: Optional[UserProfile]


class RegisterUser:
    """
    Register a username for a wallet.

    Business rules:
    - Username charset/length checked before any network call
    - Uniqueness is enforced by the contract (ContractInvocationError)
    - On success the identity cache is primed and the profile re-read
    """

    def __init__(
        self,
        gateway: IContractGateway,
        reconciler: "IdentityReconciler",
    ):
        """
        Initialize use case with dependencies.

        Args:
            gateway: Contract gateway
            reconciler: Identity reconciler used to prime and verify the cache
        """
        self.gateway = gateway
        self.reconciler = reconciler

    async def execute(
        self,
        address: str,
        username: str,
        signer: ITransactionSigner,
    ) -> RegistrationResult:
        """
        Execute registration.

        Args:
            address: Caller account address (G...)
            username: Requested username
            signer: External wallet signer

        Returns:
            RegistrationResult with receipt and the re-resolved profile
            (None if the ledger has not reflected it yet)

        Raises:
            ValidationError: If username breaks charset/length rules
            ValueError: If address is not a valid StrKey
            ContractInvocationError: If the contract rejects registration
            SignerRejected: If the wallet declined
            TransientIOError: If the bridge call fails
        """
        set_operation_id()
        candidate = Username(username)
        wallet = WalletAddress(address)

        receipt = await self.gateway.submit(
            "register",
            [encode_address(wallet), encode_string(candidate.value)],
            source=wallet.address,
            signer=signer,
        )

        logger.info(
            f"Registered {candidate.value} for {wallet.truncated()}",
            extra={"username": candidate.value, "tx_hash": receipt.tx_hash},
        )

        await self.reconciler.remember(wallet.address, candidate.value)
        profile = await self.reconciler.resolve_profile(wallet.address)

        return RegistrationResult(receipt=receipt, profile=profile)
