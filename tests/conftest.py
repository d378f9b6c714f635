"""
Test fixtures and configuration.
"""

import pytest

from consigne.application.services.identity_reconciler import IdentityReconciler
from consigne.application.use_cases.get_payment import GetPayment
from consigne.application.use_cases.get_profile import GetProfile
from consigne.application.use_cases.lookup_username import LookupUsername
from consigne.infrastructure.cache import (
    AddressUsernameCache,
    DisconnectMarker,
    FileCacheClient,
    MemoryCacheClient,
)
from helpers.fakes import FakeContractGateway, FakeLedger, FakeSigner

# ================================================================
# Fixtures
# ================================================================


@pytest.fixture
def gateway() -> FakeContractGateway:
    return FakeContractGateway()


@pytest.fixture
def ledger(gateway) -> FakeLedger:
    return FakeLedger(gateway)


@pytest.fixture
def signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def username_cache() -> AddressUsernameCache:
    return AddressUsernameCache(MemoryCacheClient())


@pytest.fixture
def disconnect_marker(tmp_path) -> DisconnectMarker:
    return DisconnectMarker(FileCacheClient(tmp_path / "session.json"))


@pytest.fixture
def reconciler(gateway, username_cache, disconnect_marker) -> IdentityReconciler:
    return IdentityReconciler(
        get_profile=GetProfile(gateway),
        lookup_username=LookupUsername(gateway),
        username_cache=username_cache,
        disconnect_marker=disconnect_marker,
    )


@pytest.fixture
def get_payment(gateway) -> GetPayment:
    return GetPayment(gateway)
