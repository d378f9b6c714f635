"""
Payment Enumerator.

Lists the payments addressed to a username through the contract's
count-then-index pagination, then fetches bodies with bounded concurrency.
"""

import asyncio
import time
from typing import List, Optional

from consigne.application.services.cancellation import raise_if_cancelled
from consigne.application.use_cases.get_payment import GetPayment
from consigne.domain.entities import Payment
from consigne.domain.exceptions import DecodeError, GatewayError, MappingError
from consigne.domain.services import IContractGateway
from consigne.infrastructure.contract import DecodedKind, decode, scalar_from_value
from consigne.infrastructure.contract.encoder import encode_string, encode_u64
from consigne.infrastructure.monitoring import get_logger, log_performance, metrics

logger = get_logger(__name__)

DEFAULT_CONCURRENCY = 8
MAX_CONCURRENCY = 16

# Failures that skip one item instead of aborting the listing
_SKIPPABLE = (GatewayError, DecodeError, MappingError)


class PaymentEnumerator:
    """
    Degrading payment listing.

    Business rules:
    - Count failure yields an empty list
    - A failed or absent index is skipped, later indices still load
    - Payment bodies that are not found are dropped silently
    - Output order follows index order
    """

    def __init__(
        self,
        gateway: IContractGateway,
        get_payment: GetPayment,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        """
        Initialize enumerator.

        Args:
            gateway: Contract gateway
            get_payment: Payment read use case
            concurrency: Max in-flight payment body fetches (1-16)
        """
        if not 1 <= concurrency <= MAX_CONCURRENCY:
            raise ValueError(
                f"concurrency must be between 1 and {MAX_CONCURRENCY}, "
                f"got {concurrency}"
            )

        self.gateway = gateway
        self.get_payment = get_payment
        self.concurrency = concurrency

    async def get_payment_count(self, username: str) -> int:
        """
        Read how many payments were addressed to username.

        Raises:
            GatewayError, DecodeError, MappingError: On failure
        """
        raw = await self.gateway.call("get_payment_count", [encode_string(username)])
        count = scalar_from_value(decode(raw), DecodedKind.U64, "count")
        return count or 0

    async def list_payment_ids(
        self,
        username: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[int]:
        """
        List payment ids for username in index order.

        Args:
            username: Recipient username
            cancel_event: Optional cooperative cancellation signal

        Returns:
            Payment ids; skipped indices are omitted

        Raises:
            asyncio.CancelledError: If cancel_event is set
        """
        raise_if_cancelled(cancel_event)

        try:
            count = await self.get_payment_count(username)
        except _SKIPPABLE as e:
            logger.warning(
                f"Payment count unavailable for {username}: {e}",
                extra={"username": username, "error_type": type(e).__name__},
            )
            metrics.enumeration_skipped_total.labels(
                stage="count", reason=type(e).__name__
            ).inc()
            return []

        payment_ids: List[int] = []

        for index in range(count):
            raise_if_cancelled(cancel_event)

            try:
                raw = await self.gateway.call(
                    "get_payment_id_at",
                    [encode_string(username), encode_u64(index)],
                )
                payment_id = scalar_from_value(
                    decode(raw), DecodedKind.U64, "payment_id"
                )
            except _SKIPPABLE as e:
                logger.warning(
                    f"Skipping payment index {index} for {username}: {e}",
                    extra={
                        "username": username,
                        "index": index,
                        "error_type": type(e).__name__,
                    },
                )
                metrics.enumeration_skipped_total.labels(
                    stage="index", reason=type(e).__name__
                ).inc()
                continue

            if payment_id is None:
                logger.warning(
                    f"Payment index {index} for {username} is empty",
                    extra={"username": username, "index": index},
                )
                metrics.enumeration_skipped_total.labels(
                    stage="index", reason="absent"
                ).inc()
                continue

            payment_ids.append(payment_id)

        logger.debug(
            f"Enumerated {len(payment_ids)}/{count} payment ids for {username}"
        )
        return payment_ids

    async def list_payments(
        self,
        username: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> List[Payment]:
        """
        List payment bodies for username in index order.

        Args:
            username: Recipient username
            cancel_event: Optional cooperative cancellation signal

        Returns:
            Payments that could be fetched

        Raises:
            asyncio.CancelledError: If cancel_event is set
        """
        start_time = time.time()
        payment_ids = await self.list_payment_ids(username, cancel_event)
        if not payment_ids:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)

        async def fetch(payment_id: int) -> Optional[Payment]:
            async with semaphore:
                raise_if_cancelled(cancel_event)
                try:
                    return await self.get_payment.execute(payment_id)
                except _SKIPPABLE as e:
                    logger.warning(
                        f"Dropping payment {payment_id}: {e}",
                        extra={
                            "payment_id": payment_id,
                            "error_type": type(e).__name__,
                        },
                    )
                    metrics.enumeration_skipped_total.labels(
                        stage="payment", reason=type(e).__name__
                    ).inc()
                    return None

        tasks = [asyncio.create_task(fetch(pid)) for pid in payment_ids]
        try:
            results = await asyncio.gather(*tasks)
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        payments = [payment for payment in results if payment is not None]

        log_performance(logger, "list_payments", start_time)
        return payments
