"""
Identity Cache Reconciler.

Keeps the local address -> username cache consistent with the on-chain
profile record, and owns the manual-disconnect marker.
"""

import asyncio
from typing import Optional

from consigne.application.services.cancellation import raise_if_cancelled
from consigne.application.use_cases.get_profile import GetProfile
from consigne.application.use_cases.lookup_username import LookupUsername
from consigne.domain.entities import UserProfile
from consigne.infrastructure.cache import AddressUsernameCache, DisconnectMarker
from consigne.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class IdentityReconciler:
    """
    Resolve the username bound to a wallet address.

    A cached username is only a hint. Every resolution re-reads the
    profile and compares its address exactly to the queried address.
    Entries are removed on a definitive mismatch or a missing profile,
    never on a transient failure.
    """

    def __init__(
        self,
        get_profile: GetProfile,
        lookup_username: LookupUsername,
        username_cache: AddressUsernameCache,
        disconnect_marker: DisconnectMarker,
    ):
        """
        Initialize reconciler with dependencies.

        Args:
            get_profile: Profile read use case
            lookup_username: Reverse lookup use case
            username_cache: Session-scoped address -> username hints
            disconnect_marker: Durable manual-disconnect flag
        """
        self.get_profile = get_profile
        self.lookup_username = lookup_username
        self.username_cache = username_cache
        self.disconnect_marker = disconnect_marker

    async def resolve_profile(
        self,
        address: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Optional[UserProfile]:
        """
        Resolve and validate the profile registered by address.

        Args:
            address: Account address (G...)
            cancel_event: Optional cooperative cancellation signal

        Returns:
            UserProfile whose address equals the queried address, or None

        Raises:
            TransientIOError: If the bridge call fails (cache untouched)
            asyncio.CancelledError: If cancel_event is set
        """
        username = await self.username_cache.get(address)

        if username:
            metrics.identity_cache_lookups_total.labels(result="hit").inc()
        else:
            metrics.identity_cache_lookups_total.labels(result="miss").inc()
            raise_if_cancelled(cancel_event)
            username = await self.lookup_username.execute(address)
            if not username:
                logger.debug(f"No username registered for {address}")
                return None

        raise_if_cancelled(cancel_event)
        profile = await self.get_profile.execute(username)

        if profile is None:
            await self._evict(address, username, reason="profile_missing")
            return None

        if profile.address != address:
            await self._evict(address, username, reason="address_mismatch")
            return None

        await self.username_cache.put(address, profile.username)
        return profile

    async def resolve_username(
        self,
        address: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Optional[str]:
        """
        Resolve the validated username for address.

        Returns:
            Username or None when the address has no valid profile
        """
        profile = await self.resolve_profile(address, cancel_event)
        return profile.username if profile else None

    async def validate(
        self,
        address: str,
        username: str,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> bool:
        """
        Check that username's live profile belongs to address.

        Any mismatch removes the cached entry for address.

        Returns:
            True if the profile exists and its address matches exactly

        Raises:
            TransientIOError: If the bridge call fails (cache untouched)
            asyncio.CancelledError: If cancel_event is set
        """
        raise_if_cancelled(cancel_event)
        profile = await self.get_profile.execute(username)

        if profile is not None and profile.address == address:
            return True

        reason = "profile_missing" if profile is None else "address_mismatch"
        await self._evict(address, username, reason=reason)
        return False

    async def invalidate(self, address: str) -> None:
        """Drop the cached username for address."""
        await self.username_cache.remove(address)

    async def remember(self, address: str, username: str) -> None:
        """Store a username hint, e.g. right after registration."""
        await self.username_cache.put(address, username)

    async def disconnect(self, address: Optional[str]) -> None:
        """
        Handle a manual wallet disconnect.

        Clears the session hint for address (if any) and sets the durable
        marker so the next start does not auto-reconnect.
        """
        if address:
            await self.invalidate(address)
        await self.disconnect_marker.set()
        logger.info("Wallet manually disconnected")

    async def connect(self) -> None:
        """Clear the manual-disconnect marker on an explicit connect."""
        await self.disconnect_marker.clear()

    async def should_auto_reconnect(self) -> bool:
        """True unless the user manually disconnected last time."""
        return not await self.disconnect_marker.is_set()

    async def _evict(self, address: str, username: str, reason: str) -> None:
        removed = await self.username_cache.remove(address)
        if removed:
            metrics.identity_cache_evictions_total.labels(reason=reason).inc()
        logger.warning(
            f"Identity hint for {address} rejected ({reason})",
            extra={"address": address, "username": username, "reason": reason},
        )
