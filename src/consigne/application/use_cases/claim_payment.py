"""
Claim Payment use case.

Releases an escrowed payment to its recipient.
"""

from consigne.domain.entities import TransactionReceipt
from consigne.domain.services import IContractGateway, ITransactionSigner
from consigne.domain.value_objects import WalletAddress
from consigne.infrastructure.contract.encoder import encode_address, encode_u64
from consigne.infrastructure.monitoring import get_logger, set_operation_id

logger = get_logger(__name__)


class ClaimPayment:
    """
    Submit claim_payment for the recipient's wallet.

    Authorization (recipient owns the username, payment not yet claimed)
    is enforced by the contract and surfaces as ContractInvocationError.
    """

    def __init__(self, gateway: IContractGateway):
        self.gateway = gateway

    async def execute(
        self,
        recipient: str,
        payment_id: int,
        signer: ITransactionSigner,
    ) -> TransactionReceipt:
        """
        Execute claim.

        Args:
            recipient: Recipient account address (G...)
            payment_id: Payment to claim
            signer: External wallet signer

        Returns:
            TransactionReceipt of the broadcast

        Raises:
            ValueError: If recipient is not a valid address
            ContractInvocationError: If the contract rejects the claim
            SignerRejected: If the wallet declined
            TransientIOError: If the bridge call fails
        """
        set_operation_id()
        wallet = WalletAddress(recipient)
        receipt = await self.gateway.submit(
            "claim_payment",
            [encode_address(wallet), encode_u64(payment_id)],
            source=wallet.address,
            signer=signer,
        )

        logger.info(
            f"Payment {payment_id} claimed by {wallet.truncated()}",
            extra={"payment_id": payment_id, "tx_hash": receipt.tx_hash},
        )

        return receipt
