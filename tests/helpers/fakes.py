"""
In-memory fakes for the contract gateway and wallet signer.

FakeContractGateway answers read calls through per-method handlers;
FakeLedger wires profile and payment handlers backed by plain dicts.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from stellar_sdk import StrKey

from consigne.domain.entities import (
    Payment,
    TransactionReceipt,
    TransactionStatus,
    UserProfile,
)
from consigne.domain.services import IContractGateway, ITransactionSigner
from consigne.infrastructure.contract.encoder import (
    encode_payment,
    encode_profile,
    encode_string,
    encode_u64,
    encode_void,
)

# ================================================================
# Addresses
# ================================================================


def account_address(seed: int) -> str:
    """Deterministic G... address from a one-byte seed."""
    return StrKey.encode_ed25519_public_key(bytes([seed]) * 32)


def contract_address(seed: int) -> str:
    """Deterministic C... address from a one-byte seed."""
    return StrKey.encode_contract(bytes([seed]) * 32)


ALICE = account_address(1)
BOB = account_address(2)
MALLORY = account_address(3)
TOKEN = contract_address(9)


def arg_value(node: Mapping[str, Any]) -> Any:
    """Plain value of an encoded string/u64 argument."""
    if node["tag"] == "u64":
        return int(node["value"])
    return node["value"]


# ================================================================
# Fakes
# ================================================================


class FakeContractGateway(IContractGateway):
    """
    In-memory contract gateway.

    Read handlers are registered per method; a handler receives the
    plain argument values and returns a tagged tree or an exception
    instance to raise.
    """

    def __init__(self):
        self.handlers: Dict[str, Callable[..., Any]] = {}
        self.calls: List[tuple] = []
        self.submissions: List[dict] = []
        self.receipt = TransactionReceipt(
            tx_hash="a1b2c3",
            status=TransactionStatus.SUCCESS,
            ledger=1234,
        )
        self.closed = False

    def on(self, method: str, handler: Callable[..., Any]) -> None:
        self.handlers[method] = handler

    async def call(self, method: str, args: Sequence[Mapping[str, Any]]):
        values = [arg_value(a) if a["tag"] in ("string", "u64") else a for a in args]
        self.calls.append((method, values))

        if method not in self.handlers:
            return encode_void()
        result = self.handlers[method](*values)
        if isinstance(result, Exception):
            raise result
        return result

    async def submit(
        self,
        method: str,
        args: Sequence[Mapping[str, Any]],
        source: str,
        signer: ITransactionSigner,
    ) -> TransactionReceipt:
        self.submissions.append(
            {"method": method, "args": list(args), "source": source}
        )
        await signer.sign("unsigned-xdr", "Test SDF Network ; September 2015")
        return self.receipt

    async def close(self) -> None:
        self.closed = True

    def calls_to(self, method: str) -> List[list]:
        return [values for name, values in self.calls if name == method]


class FakeLedger:
    """Profiles and payments served through a FakeContractGateway."""

    def __init__(self, gateway: FakeContractGateway):
        self.profiles: Dict[str, UserProfile] = {}
        self.usernames: Dict[str, str] = {}
        self.payments: Dict[int, Payment] = {}
        self.inbox: Dict[str, List[int]] = {}

        gateway.on("get_profile", self._profile)
        gateway.on("get_username_by_address", self._username_by_address)
        gateway.on("get_payment", lambda pid: encode_payment(self.payments.get(pid)))
        gateway.on(
            "get_payment_count",
            lambda username: encode_u64(len(self.inbox.get(username, []))),
        )
        gateway.on("get_payment_id_at", self._payment_id_at)

    def register(self, username: str, address: str, created_at: int = 1700000000):
        self.profiles[username] = UserProfile(
            username=username, address=address, created_at=created_at
        )
        self.usernames[address] = username

    def add_payment(self, payment: Payment) -> None:
        self.payments[payment.payment_id] = payment
        self.inbox.setdefault(payment.recipient_username, []).append(
            payment.payment_id
        )

    def _profile(self, username: str):
        return encode_profile(self.profiles.get(username))

    def _username_by_address(self, address_node: Mapping[str, Any]):
        identity = bytes.fromhex(address_node["value"]["value"]["value"])
        address = StrKey.encode_ed25519_public_key(identity)
        username = self.usernames.get(address)
        return encode_void() if username is None else encode_string(username)

    def _payment_id_at(self, username: str, index: int):
        ids = self.inbox.get(username, [])
        return encode_u64(ids[index]) if index < len(ids) else encode_void()


class FakeSigner(ITransactionSigner):
    """Signer returning a fixed result, or raising when told to."""

    def __init__(self, error: Optional[Exception] = None, result: str = "signed"):
        self.error = error
        self.result = result
        self.requests: List[tuple] = []

    async def sign(self, unsigned_tx: str, network_passphrase: str) -> str:
        self.requests.append((unsigned_tx, network_passphrase))
        if self.error:
            raise self.error
        return self.result


def make_payment(payment_id: int, recipient: str = "alice", **overrides) -> Payment:
    fields = dict(
        payment_id=payment_id,
        recipient_username=recipient,
        sender=BOB,
        token=TOKEN,
        amount=10_000_000 * payment_id,
        message=f"payment {payment_id}",
        timestamp=1700000000 + payment_id,
        claimed=False,
    )
    fields.update(overrides)
    return Payment(**fields)
