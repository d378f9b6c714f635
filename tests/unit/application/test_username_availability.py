"""
Unit tests for UsernameAvailabilityChecker.

Tests debounce, generation stamping and error reporting.

Usage:
    pytest tests/unit/application/test_username_availability.py
"""

import asyncio

from consigne.application.services.username_availability import (
    AvailabilityStatus,
    UsernameAvailabilityChecker,
)
from consigne.application.use_cases.check_username_availability import (
    CheckUsernameAvailability,
)
from consigne.application.use_cases.get_profile import GetProfile
from consigne.domain.exceptions import TransientIOError
from helpers.fakes import ALICE


def make_checker(gateway, debounce: float = 0.0) -> UsernameAvailabilityChecker:
    check = CheckUsernameAvailability(GetProfile(gateway))
    return UsernameAvailabilityChecker(check, debounce_seconds=debounce)


class TestUsernameAvailabilityChecker:
    """Tests for as-you-type availability."""

    async def test_short_input_is_unknown(self, gateway):
        checker = make_checker(gateway)

        state = checker.update("al")

        assert state.status is AvailabilityStatus.UNKNOWN
        assert (await checker.result()).status is AvailabilityStatus.UNKNOWN
        assert gateway.calls == []

    async def test_invalid_charset(self, gateway):
        checker = make_checker(gateway)

        state = checker.update("al ice")

        assert state.status is AvailabilityStatus.INVALID
        assert state.error
        assert gateway.calls == []

    async def test_available(self, gateway, ledger):
        checker = make_checker(gateway)

        assert checker.update("alice").status is AvailabilityStatus.CHECKING
        state = await checker.result()

        assert state.status is AvailabilityStatus.AVAILABLE
        assert state.username == "alice"

    async def test_taken(self, gateway, ledger):
        ledger.register("alice", ALICE)
        checker = make_checker(gateway)

        checker.update("alice")

        assert (await checker.result()).status is AvailabilityStatus.TAKEN

    async def test_debounce_collapses_keystrokes(self, gateway, ledger):
        checker = make_checker(gateway, debounce=0.05)

        for prefix in ("ali", "alic", "alice"):
            checker.update(prefix)
            await asyncio.sleep(0)
        state = await checker.result()

        assert state.username == "alice"
        assert state.generation == 3
        assert gateway.calls_to("get_profile") == [["alice"]]

    async def test_stale_result_is_discarded(self, gateway, ledger):
        ledger.register("ali", ALICE)
        release = asyncio.Event()

        class SlowCheck:
            async def execute(self, username):
                if username == "ali":
                    await release.wait()
                    return False
                return True

        checker = UsernameAvailabilityChecker(SlowCheck(), debounce_seconds=0)

        checker.update("ali")
        await asyncio.sleep(0.01)
        checker.update("alice")
        release.set()
        state = await checker.result()

        assert state.username == "alice"
        assert state.status is AvailabilityStatus.AVAILABLE

    async def test_stale_completion_cannot_overwrite(self, gateway):
        started = asyncio.Event()

        class UncancellableCheck:
            async def execute(self, username):
                if username == "ali":
                    started.set()
                    try:
                        await asyncio.sleep(0.02)
                    except asyncio.CancelledError:
                        pass
                    return False
                return True

        checker = UsernameAvailabilityChecker(
            UncancellableCheck(), debounce_seconds=0
        )
        checker.update("ali")
        await started.wait()
        checker.update("alice")

        final = await checker.result()
        await asyncio.sleep(0.03)

        assert final.status is AvailabilityStatus.AVAILABLE
        assert checker.state.username == "alice"

    async def test_transient_error(self, gateway):
        gateway.on(
            "get_profile",
            lambda username: TransientIOError("get_profile/simulate", "timeout"),
        )
        checker = make_checker(gateway)

        checker.update("alice")
        state = await checker.result()

        assert state.status is AvailabilityStatus.ERROR
        assert "timeout" in state.error

    async def test_close_cancels_pending(self, gateway):
        checker = make_checker(gateway, debounce=10)

        checker.update("alice")
        await checker.close()

        assert checker.state.status is AvailabilityStatus.CHECKING
        assert gateway.calls == []
