"""
Unit tests for contract use cases.

Tests read use cases against the in-memory ledger and state-changing
use cases against the recording gateway.

Usage:
    pytest tests/unit/application/test_use_cases.py
"""

from decimal import Decimal

import pytest

from consigne.application.use_cases import (
    NATIVE_TOKEN_ADDRESS,
    CheckUsernameAvailability,
    ClaimPayment,
    CreatePayment,
    GetPayment,
    GetProfile,
    LookupUsername,
    RegisterUser,
)
from consigne.domain.entities import TransactionReceipt, TransactionStatus
from consigne.domain.exceptions import (
    ContractInvocationError,
    RecipientNotFoundError,
    SignerRejected,
    TransientIOError,
    TypeMismatch,
    ValidationError,
)
from consigne.infrastructure.contract.encoder import (
    encode_address,
    encode_i128,
    encode_string,
    encode_u64,
)
from helpers.fakes import ALICE, BOB, TOKEN, FakeSigner, make_payment


class TestReadUseCases:
    """Tests for simulation-only reads."""

    async def test_get_profile(self, gateway, ledger):
        ledger.register("alice", ALICE, created_at=1700000123)

        profile = await GetProfile(gateway).execute("alice")

        assert profile.username == "alice"
        assert profile.address == ALICE
        assert profile.created_at == 1700000123

    async def test_get_profile_absent(self, gateway, ledger):
        assert await GetProfile(gateway).execute("nobody") is None

    async def test_get_profile_is_byte_exact(self, gateway, ledger):
        ledger.register("alice", ALICE)
        assert await GetProfile(gateway).execute("Alice") is None

    async def test_get_profile_transient_failure_propagates(self, gateway):
        gateway.on(
            "get_profile",
            lambda username: TransientIOError("get_profile/simulate", "timeout"),
        )

        with pytest.raises(TransientIOError):
            await GetProfile(gateway).execute("alice")

    async def test_get_payment(self, gateway, ledger):
        ledger.add_payment(make_payment(7, message="thanks"))

        payment = await GetPayment(gateway).execute(7)

        assert payment.payment_id == 7
        assert payment.recipient_username == "alice"
        assert payment.sender == BOB
        assert payment.token == TOKEN
        assert payment.amount == 70_000_000
        assert payment.message == "thanks"
        assert payment.claimed is False
        assert gateway.calls_to("get_payment") == [[7]]

    async def test_get_payment_absent(self, gateway, ledger):
        assert await GetPayment(gateway).execute(99) is None

    async def test_lookup_username(self, gateway, ledger):
        ledger.register("alice", ALICE)

        assert await LookupUsername(gateway).execute(ALICE) == "alice"
        assert await LookupUsername(gateway).execute(BOB) is None

    async def test_lookup_username_wrong_kind(self, gateway):
        gateway.on("get_username_by_address", lambda address: encode_u64(5))

        with pytest.raises(TypeMismatch):
            await LookupUsername(gateway).execute(ALICE)

    async def test_lookup_username_rejects_bad_address(self, gateway):
        with pytest.raises(ValueError):
            await LookupUsername(gateway).execute("GNOTANADDRESS")
        assert gateway.calls == []

    async def test_check_username_availability(self, gateway, ledger):
        ledger.register("alice", ALICE)
        check = CheckUsernameAvailability(GetProfile(gateway))

        assert await check.execute("alice") is False
        assert await check.execute("alice_2") is True

    async def test_check_username_availability_validates(self, gateway):
        check = CheckUsernameAvailability(GetProfile(gateway))

        with pytest.raises(ValidationError):
            await check.execute("no spaces")
        assert gateway.calls == []


class TestRegisterUser:
    """Tests for username registration."""

    async def test_register_primes_cache(
        self, gateway, ledger, reconciler, username_cache, signer
    ):
        ledger.register("alice", ALICE)
        use_case = RegisterUser(gateway, reconciler)

        result = await use_case.execute(ALICE, "alice", signer)

        assert result.receipt.tx_hash == "a1b2c3"
        assert result.profile.username == "alice"
        assert await username_cache.get(ALICE) == "alice"

        submission = gateway.submissions[0]
        assert submission["method"] == "register"
        assert submission["source"] == ALICE
        assert submission["args"] == [encode_address(ALICE), encode_string("alice")]
        assert len(signer.requests) == 1

    async def test_register_before_ledger_reflects(
        self, gateway, ledger, reconciler, signer
    ):
        result = await RegisterUser(gateway, reconciler).execute(
            ALICE, "alice", signer
        )

        assert result.receipt.succeeded
        assert result.profile is None

    @pytest.mark.parametrize("username", ["ab", "x" * 31, "bad-name", "élise"])
    async def test_invalid_username_fails_fast(
        self, gateway, reconciler, signer, username
    ):
        with pytest.raises(ValidationError):
            await RegisterUser(gateway, reconciler).execute(ALICE, username, signer)

        assert gateway.submissions == []
        assert signer.requests == []

    async def test_signer_rejection_propagates(self, gateway, ledger, reconciler):
        class RejectingGateway(type(gateway)):
            async def submit(self, method, args, source, signer):
                raise SignerRejected(method, "declined")

        use_case = RegisterUser(RejectingGateway(), reconciler)

        with pytest.raises(SignerRejected):
            await use_case.execute(ALICE, "alice", FakeSigner())
        assert await reconciler.username_cache.get(ALICE) is None


class TestCreatePayment:
    """Tests for escrow creation."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _use_case(self, gateway) -> CreatePayment:
        return CreatePayment(gateway, GetProfile(gateway))

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_create_payment(self, gateway, ledger, signer):
        ledger.register("alice", ALICE)
        gateway.receipt = TransactionReceipt(
            tx_hash="feed",
            status=TransactionStatus.SUCCESS,
            return_value=encode_u64(42),
        )

        created = await self._use_case(gateway).execute(
            BOB, "alice", "12.5", "lunch", signer, token=TOKEN
        )

        assert created.payment_id == 42
        assert created.amount == 125_000_000
        assert gateway.submissions[0]["method"] == "create_payment"
        assert gateway.submissions[0]["source"] == BOB
        assert gateway.submissions[0]["args"] == [
            encode_address(BOB),
            encode_string("alice"),
            encode_address(TOKEN),
            encode_i128(125_000_000),
            encode_string("lunch"),
        ]

    async def test_defaults_to_native_token(self, gateway, ledger, signer):
        ledger.register("alice", ALICE)

        created = await self._use_case(gateway).execute(
            BOB, "alice", Decimal("1"), "", signer
        )

        args = gateway.submissions[0]["args"]
        assert args[2] == encode_address(NATIVE_TOKEN_ADDRESS)
        assert created.payment_id is None

    async def test_unknown_recipient(self, gateway, ledger, signer):
        with pytest.raises(RecipientNotFoundError):
            await self._use_case(gateway).execute(BOB, "nobody", "1", "", signer)

        assert gateway.submissions == []

    @pytest.mark.parametrize("amount", ["0", "-1", "0.00000001", 1.5, "abc"])
    async def test_invalid_amount(self, gateway, ledger, signer, amount):
        ledger.register("alice", ALICE)

        with pytest.raises(ValidationError):
            await self._use_case(gateway).execute(BOB, "alice", amount, "", signer)

        assert gateway.calls == []
        assert gateway.submissions == []

    async def test_message_too_long(self, gateway, ledger, signer):
        ledger.register("alice", ALICE)
        use_case = self._use_case(gateway)

        with pytest.raises(ValidationError) as exc:
            await use_case.execute(BOB, "alice", "1", "m" * 501, signer)
        assert exc.value.field == "message"

        await use_case.execute(BOB, "alice", "1", "m" * 500, signer)
        assert len(gateway.submissions) == 1


class TestClaimPayment:
    """Tests for claiming an escrowed payment."""

    async def test_claim(self, gateway, signer):
        receipt = await ClaimPayment(gateway).execute(ALICE, 7, signer)

        assert receipt.succeeded
        assert gateway.submissions[0] == {
            "method": "claim_payment",
            "args": [encode_address(ALICE), encode_u64(7)],
            "source": ALICE,
        }

    async def test_contract_rejection_propagates(self, gateway, signer):
        class RejectingGateway(type(gateway)):
            async def submit(self, method, args, source, signer):
                raise ContractInvocationError("Payment has already been claimed")

        with pytest.raises(ContractInvocationError):
            await ClaimPayment(RejectingGateway()).execute(ALICE, 7, signer)

    async def test_invalid_address(self, gateway, signer):
        with pytest.raises(ValueError):
            await ClaimPayment(gateway).execute("not-an-address", 1, signer)
        assert gateway.submissions == []
