"""
Contract Gateway interface.

Defines how the core invokes payment-contract methods.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from consigne.domain.entities import TransactionReceipt
from consigne.domain.services.i_transaction_signer import ITransactionSigner


class IContractGateway(ABC):
    """
    Abstract interface for remote contract calls.

    Arguments and results are tagged-value trees. Read-only calls are
    simulated and never broadcast. State-changing calls are prepared,
    handed to an external signer, then broadcast. The gateway never signs
    and never retries.
    """

    @abstractmethod
    async def call(
        self,
        method: str,
        args: Sequence[Mapping[str, Any]],
    ) -> Mapping[str, Any]:
        """
        Simulate a read-only contract call.

        Args:
            method: Contract method name (e.g., "get_profile")
            args: Encoded arguments in contract parameter order

        Returns:
            Raw tagged-value tree of the return value (void when the
            simulation produced none)

        Raises:
            TransientIOError: If the bridge or network failed
            ContractInvocationError: If the contract rejected the call
        """

    @abstractmethod
    async def submit(
        self,
        method: str,
        args: Sequence[Mapping[str, Any]],
        source: str,
        signer: ITransactionSigner,
    ) -> TransactionReceipt:
        """
        Prepare, sign externally, and broadcast a state-changing call.

        Args:
            method: Contract method name (e.g., "create_payment")
            args: Encoded arguments in contract parameter order
            source: Account address paying fees and authorizing the call
            signer: External signer for the prepared transaction

        Returns:
            TransactionReceipt from the broadcast

        Raises:
            TransientIOError: If the bridge or network failed
            ContractInvocationError: If simulation or broadcast was rejected
            SignerRejected: If the signer declined or failed
        """

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
