"""
Cooperative cancellation for multi-round-trip operations.
"""

import asyncio
from typing import Optional


def raise_if_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
    """
    Abort between round trips once the caller asked to stop.

    Raises:
        asyncio.CancelledError: If cancel_event is set
    """
    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError("operation cancelled by caller")
