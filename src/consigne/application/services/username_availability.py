"""
Username Availability Checker.

Debounced, generation-stamped availability checks for as-you-type input.
Only the check started by the most recent update may publish a result.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from consigne.application.use_cases.check_username_availability import (
    CheckUsernameAvailability,
)
from consigne.domain.exceptions import ConsigneException, ValidationError
from consigne.domain.value_objects.username import USERNAME_MIN_LENGTH, Username
from consigne.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


class AvailabilityStatus(str, Enum):
    UNKNOWN = "unknown"
    INVALID = "invalid"
    CHECKING = "checking"
    AVAILABLE = "available"
    TAKEN = "taken"
    ERROR = "error"


@dataclass(frozen=True)
class AvailabilityState:
    """Latest published availability for one input generation."""

    generation: int
    username: str
    status: AvailabilityStatus
    error: Optional[str] = None


class UsernameAvailabilityChecker:
    """
    Track availability of the username being typed.

    Each update() bumps the generation and cancels the in-flight check.
    A check whose generation is no longer current is discarded, so a
    slow answer for "ali" can never overwrite the answer for "alice".
    Must be used from a running event loop.
    """

    def __init__(
        self,
        check: CheckUsernameAvailability,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        """
        Initialize checker.

        Args:
            check: Availability use case
            debounce_seconds: Quiet period before a check is issued
        """
        self.check = check
        self.debounce_seconds = debounce_seconds
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._state = AvailabilityState(0, "", AvailabilityStatus.UNKNOWN)

    @property
    def state(self) -> AvailabilityState:
        return self._state

    def update(self, value: str) -> AvailabilityState:
        """
        Register new input and schedule a debounced check.

        Args:
            value: Current input text

        Returns:
            Immediate state: UNKNOWN (too short), INVALID, or CHECKING
        """
        self._generation += 1
        generation = self._generation
        self._cancel_pending()

        if len(value) < USERNAME_MIN_LENGTH:
            self._state = AvailabilityState(
                generation, value, AvailabilityStatus.UNKNOWN
            )
            return self._state

        try:
            Username(value)
        except ValidationError as e:
            self._state = AvailabilityState(
                generation, value, AvailabilityStatus.INVALID, e.reason
            )
            return self._state

        self._state = AvailabilityState(generation, value, AvailabilityStatus.CHECKING)
        self._task = asyncio.create_task(self._run(generation, value))
        return self._state

    async def result(self) -> AvailabilityState:
        """Wait for the latest scheduled check and return the final state."""
        while self._task is not None and not self._task.done():
            await asyncio.wait([self._task])
        return self._state

    async def close(self) -> None:
        """Cancel any in-flight check."""
        task = self._task
        self._cancel_pending()
        if task is not None:
            await asyncio.wait([task])

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _run(self, generation: int, value: str) -> None:
        await asyncio.sleep(self.debounce_seconds)

        try:
            available = await self.check.execute(value)
        except ConsigneException as e:
            logger.warning(f"Username availability check failed for {value}: {e}")
            outcome = AvailabilityState(
                generation, value, AvailabilityStatus.ERROR, e.message
            )
        else:
            status = (
                AvailabilityStatus.AVAILABLE if available else AvailabilityStatus.TAKEN
            )
            outcome = AvailabilityState(generation, value, status)

        if generation != self._generation:
            logger.debug(f"Discarding stale availability result for {value}")
            return

        self._state = outcome
