"""
Contract bridge client implementation.

HTTP client for the bridge service that builds, simulates and broadcasts
payment-contract transactions. Single attempt per call: failures surface to
the caller as TransientIOError and are never retried here.
"""

import asyncio
from typing import Any, Mapping, Optional, Sequence

import aiohttp
from pydantic import ValidationError as SchemaValidationError

from consigne.domain.entities import TransactionReceipt, TransactionStatus
from consigne.domain.exceptions import (
    ContractInvocationError,
    SignerRejected,
    TransientIOError,
)
from consigne.domain.services import IContractGateway, ITransactionSigner
from consigne.infrastructure.blockchain.bridge_schemas import (
    BridgeErrorResponse,
    PrepareRequest,
    PrepareResponse,
    SimulateRequest,
    SimulateResponse,
    SubmitRequest,
    SubmitResponse,
)
from consigne.infrastructure.contract.encoder import encode_void
from consigne.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class ContractBridgeClient(IContractGateway):
    """
    Contract bridge HTTP client.

    Read-only calls go to /contract/simulate with bridge-side result parsing
    disabled; the raw return tree is handed back for manual decoding.
    State-changing calls run prepare -> external sign -> submit.
    """

    def __init__(
        self,
        bridge_url: str,
        contract_id: str,
        network_passphrase: str,
        total_timeout: float = 30.0,
        connect_timeout: float = 10.0,
    ):
        """
        Initialize contract bridge client.

        Args:
            bridge_url: Bridge API base URL
            contract_id: Payment contract address (C...)
            network_passphrase: Network passphrase for signing
            total_timeout: Total request timeout (default: 30s)
            connect_timeout: Connection timeout (default: 10s)
        """
        self.bridge_url = bridge_url.rstrip("/")
        self.contract_id = contract_id
        self.network_passphrase = network_passphrase
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                connector=aiohttp.TCPConnector(
                    limit=50,
                    limit_per_host=20,
                    ttl_dns_cache=300,
                ),
            )
        return self._session

    async def _post(
        self,
        endpoint: str,
        payload: dict,
        method: str,
        phase: str,
    ) -> dict:
        """
        Single HTTP request attempt.

        Args:
            endpoint: API endpoint path
            payload: Request JSON payload
            method: Contract method, for metrics and errors
            phase: simulate / prepare / submit

        Returns:
            Decoded JSON response body

        Raises:
            TransientIOError: Network error, timeout, 5xx or malformed body
            ContractInvocationError: 4xx from the bridge
        """
        session = await self._get_session()
        url = f"{self.bridge_url}{endpoint}"
        operation = f"{method}/{phase}"

        try:
            with metrics.contract_call_duration_seconds.labels(
                method=method, phase=phase
            ).time():
                async with session.post(url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        if 400 <= response.status < 500:
                            raise self._rejection(error_text, response.status)
                        raise TransientIOError(
                            operation,
                            f"bridge error {response.status}: {error_text}",
                        )

                    data = await response.json()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            metrics.contract_calls_total.labels(
                method=method, phase=phase, status="transient"
            ).inc()
            logger.warning(f"Bridge call {operation} failed: {e!r}")
            raise TransientIOError(operation, repr(e)) from e

        except ValueError as e:
            metrics.contract_calls_total.labels(
                method=method, phase=phase, status="transient"
            ).inc()
            raise TransientIOError(operation, f"malformed response: {e}") from e

        except TransientIOError:
            metrics.contract_calls_total.labels(
                method=method, phase=phase, status="transient"
            ).inc()
            raise

        except ContractInvocationError:
            metrics.contract_calls_total.labels(
                method=method, phase=phase, status="rejected"
            ).inc()
            raise

        if not isinstance(data, dict):
            raise TransientIOError(operation, "response body is not an object")

        metrics.contract_calls_total.labels(
            method=method, phase=phase, status="success"
        ).inc()
        return data

    @staticmethod
    def _rejection(error_text: str, status_code: int) -> ContractInvocationError:
        """Translate a 4xx body into ContractInvocationError."""
        try:
            body = BridgeErrorResponse.model_validate_json(error_text)
        except SchemaValidationError:
            return ContractInvocationError(error_text, status_code=status_code)

        if body.contract_error_code is not None:
            return ContractInvocationError.from_code(
                body.contract_error_code, status_code=status_code
            )
        return ContractInvocationError(body.error, status_code=status_code)

    def _parse(self, model, data: dict, operation: str):
        try:
            return model.model_validate(data)
        except SchemaValidationError as e:
            raise TransientIOError(operation, f"unexpected response: {e}") from e

    async def call(
        self,
        method: str,
        args: Sequence[Mapping[str, Any]],
    ) -> Mapping[str, Any]:
        """
        Simulate a read-only contract call.

        Args:
            method: Contract method name
            args: Encoded arguments

        Returns:
            Raw return tree; void when the simulation produced none

        Raises:
            TransientIOError: If the bridge call fails
            ContractInvocationError: If the contract rejected the call
        """
        request = SimulateRequest(
            contract_id=self.contract_id,
            method=method,
            args=list(args),
        )
        data = await self._post(
            "/contract/simulate",
            request.model_dump(by_alias=True),
            method,
            "simulate",
        )
        result = self._parse(SimulateResponse, data, f"{method}/simulate")

        if result.retval is None:
            return encode_void()
        return result.retval

    async def submit(
        self,
        method: str,
        args: Sequence[Mapping[str, Any]],
        source: str,
        signer: ITransactionSigner,
    ) -> TransactionReceipt:
        """
        Prepare, sign externally, and broadcast a contract call.

        Args:
            method: Contract method name
            args: Encoded arguments
            source: Source account address
            signer: External transaction signer

        Returns:
            TransactionReceipt

        Raises:
            TransientIOError: If a bridge call fails
            ContractInvocationError: If simulation or broadcast is rejected
            SignerRejected: If the signer declines or fails
        """
        # Phase 1: build + simulate (auth entries, fee)
        request = PrepareRequest(
            contract_id=self.contract_id,
            method=method,
            args=list(args),
            source=source,
            network_passphrase=self.network_passphrase,
        )
        data = await self._post(
            "/contract/prepare",
            request.model_dump(by_alias=True),
            method,
            "prepare",
        )
        prepared = self._parse(PrepareResponse, data, f"{method}/prepare")

        logger.info(
            f"Prepared {method} for signing",
            extra={"method": method, "fee": prepared.fee},
        )

        # Phase 2: external signature
        try:
            signed = await signer.sign(prepared.transaction, self.network_passphrase)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            metrics.contract_calls_total.labels(
                method=method, phase="sign", status="rejected"
            ).inc()
            raise SignerRejected(method, str(e) or type(e).__name__) from e

        if not signed:
            raise SignerRejected(method, "signer returned no transaction")

        # Phase 3: broadcast
        data = await self._post(
            "/transaction/submit",
            SubmitRequest(signed_transaction=signed).model_dump(by_alias=True),
            method,
            "submit",
        )
        submitted = self._parse(SubmitResponse, data, f"{method}/submit")

        try:
            status = TransactionStatus(submitted.status.lower())
        except ValueError:
            status = TransactionStatus.PENDING

        if status is TransactionStatus.FAILED:
            raise ContractInvocationError(
                f"Transaction {submitted.hash} failed on ledger"
            )

        logger.info(
            f"Submitted {method}",
            extra={"method": method, "tx_hash": submitted.hash},
        )

        return TransactionReceipt(
            tx_hash=submitted.hash,
            status=status,
            return_value=submitted.retval,
            ledger=submitted.ledger,
        )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
