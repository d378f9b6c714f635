"""
Dependency Injection Container for Consigne.

Manages all service instances and their dependencies.
"""

from typing import Optional

from prometheus_client import start_http_server

from consigne.application.services.identity_reconciler import IdentityReconciler
from consigne.application.services.payment_enumerator import PaymentEnumerator
from consigne.application.services.username_availability import (
    UsernameAvailabilityChecker,
)
from consigne.application.use_cases.check_username_availability import (
    CheckUsernameAvailability,
)
from consigne.application.use_cases.claim_payment import ClaimPayment
from consigne.application.use_cases.create_payment import CreatePayment
from consigne.application.use_cases.get_payment import GetPayment
from consigne.application.use_cases.get_profile import GetProfile
from consigne.application.use_cases.lookup_username import LookupUsername
from consigne.application.use_cases.register_user import RegisterUser
from consigne.config.settings import get_settings
from consigne.domain.services import IContractGateway
from consigne.infrastructure.blockchain.contract_bridge_client import (
    ContractBridgeClient,
)
from consigne.infrastructure.cache.file_cache_client import FileCacheClient
from consigne.infrastructure.cache.i_cache_client import ICacheClient
from consigne.infrastructure.cache.identity_stores import (
    AddressUsernameCache,
    DisconnectMarker,
)
from consigne.infrastructure.cache.memory_cache_client import MemoryCacheClient
from consigne.infrastructure.cache.redis_cache_client import RedisCacheClient
from consigne.infrastructure.monitoring.logger import get_logger, setup_logging

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of the gateway, stores and services.
    Use cases are cheap and built per call.
    """

    def __init__(self):
        """Initialize container with None instances."""
        # Infrastructure
        self._contract_gateway: Optional[IContractGateway] = None
        self._session_cache_client: Optional[ICacheClient] = None
        self._marker_cache_client: Optional[ICacheClient] = None

        # Stores
        self._username_cache: Optional[AddressUsernameCache] = None
        self._disconnect_marker: Optional[DisconnectMarker] = None

        # Services
        self._identity_reconciler: Optional[IdentityReconciler] = None
        self._payment_enumerator: Optional[PaymentEnumerator] = None

    async def initialize(self) -> None:
        """Configure logging and metrics, and open cache connections."""
        settings = get_settings()
        setup_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

        if settings.METRICS_ENABLED:
            start_http_server(settings.METRICS_PORT, addr=settings.METRICS_HOST)
            logger.info(
                f"Metrics server started on "
                f"http://{settings.METRICS_HOST}:{settings.METRICS_PORT}/metrics"
            )

        await self.session_cache_client.connect()
        await self.marker_cache_client.connect()

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._contract_gateway:
            await self._contract_gateway.close()

        if self._session_cache_client:
            await self._session_cache_client.disconnect()

        if (
            self._marker_cache_client
            and self._marker_cache_client is not self._session_cache_client
        ):
            await self._marker_cache_client.disconnect()

    # Infrastructure Getters

    @property
    def contract_gateway(self) -> IContractGateway:
        """Get contract bridge client instance."""
        if self._contract_gateway is None:
            settings = get_settings()
            self._contract_gateway = ContractBridgeClient(
                bridge_url=settings.BRIDGE_URL,
                contract_id=settings.CONTRACT_ID,
                network_passphrase=settings.NETWORK_PASSPHRASE,
                total_timeout=settings.BRIDGE_TIMEOUT,
                connect_timeout=settings.BRIDGE_CONNECT_TIMEOUT,
            )
        return self._contract_gateway

    def _redis_client(self) -> RedisCacheClient:
        settings = get_settings()
        return RedisCacheClient(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD if settings.REDIS_PASSWORD else None,
        )

    @property
    def session_cache_client(self) -> ICacheClient:
        """Get cache client backing the username hints."""
        if self._session_cache_client is None:
            if get_settings().CACHE_BACKEND == "redis":
                self._session_cache_client = self._redis_client()
            else:
                self._session_cache_client = MemoryCacheClient()
        return self._session_cache_client

    @property
    def marker_cache_client(self) -> ICacheClient:
        """Get durable cache client backing the disconnect marker."""
        if self._marker_cache_client is None:
            settings = get_settings()
            if settings.MARKER_BACKEND == "redis":
                if settings.CACHE_BACKEND == "redis":
                    self._marker_cache_client = self.session_cache_client
                else:
                    self._marker_cache_client = self._redis_client()
            else:
                self._marker_cache_client = FileCacheClient(settings.MARKER_FILE)
        return self._marker_cache_client

    # Store Getters

    @property
    def username_cache(self) -> AddressUsernameCache:
        """Get address -> username hint store."""
        if self._username_cache is None:
            self._username_cache = AddressUsernameCache(
                self.session_cache_client,
                ttl_seconds=get_settings().IDENTITY_CACHE_TTL_SECONDS,
            )
        return self._username_cache

    @property
    def disconnect_marker(self) -> DisconnectMarker:
        """Get manual-disconnect marker."""
        if self._disconnect_marker is None:
            self._disconnect_marker = DisconnectMarker(self.marker_cache_client)
        return self._disconnect_marker

    # Service Getters

    @property
    def identity_reconciler(self) -> IdentityReconciler:
        """Get identity cache reconciler."""
        if self._identity_reconciler is None:
            self._identity_reconciler = IdentityReconciler(
                get_profile=self.get_get_profile(),
                lookup_username=self.get_lookup_username(),
                username_cache=self.username_cache,
                disconnect_marker=self.disconnect_marker,
            )
        return self._identity_reconciler

    @property
    def payment_enumerator(self) -> PaymentEnumerator:
        """Get payment enumerator."""
        if self._payment_enumerator is None:
            self._payment_enumerator = PaymentEnumerator(
                gateway=self.contract_gateway,
                get_payment=self.get_get_payment(),
                concurrency=get_settings().ENUMERATION_CONCURRENCY,
            )
        return self._payment_enumerator

    def get_username_availability_checker(self) -> UsernameAvailabilityChecker:
        """Get a fresh availability checker (one per input field)."""
        return UsernameAvailabilityChecker(
            check=self.get_check_username_availability(),
            debounce_seconds=get_settings().USERNAME_CHECK_DEBOUNCE,
        )

    # Use Case Getters

    def get_get_profile(self) -> GetProfile:
        return GetProfile(self.contract_gateway)

    def get_get_payment(self) -> GetPayment:
        return GetPayment(self.contract_gateway)

    def get_lookup_username(self) -> LookupUsername:
        return LookupUsername(self.contract_gateway)

    def get_check_username_availability(self) -> CheckUsernameAvailability:
        return CheckUsernameAvailability(self.get_get_profile())

    def get_register_user(self) -> RegisterUser:
        return RegisterUser(self.contract_gateway, self.identity_reconciler)

    def get_create_payment(self) -> CreatePayment:
        return CreatePayment(
            self.contract_gateway,
            self.get_get_profile(),
            native_token=get_settings().NATIVE_TOKEN_ADDRESS,
        )

    def get_claim_payment(self) -> ClaimPayment:
        return ClaimPayment(self.contract_gateway)


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()
