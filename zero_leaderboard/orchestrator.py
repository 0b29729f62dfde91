"""Main orchestrator for the leaderboard page.

Coordinates the explorer and identity providers and produces the
LeaderboardView rendered by the web page and the CLI.
"""

import asyncio
import logging

import httpx

from .calculator.allocation import calc_allocations
from .calculator.units import base_to_common
from .core.config import LeaderboardConfig
from .core.exceptions import ValidationError
from .core.models import (
    AuditEntry,
    HolderRecord,
    HoldersPage,
    LeaderboardView,
    Token,
)
from .providers.explorer.blockscout import BlockscoutExplorerProvider
from .providers.identity.zerion import ZerionIdentityProvider

logger = logging.getLogger(__name__)


def create_http_client(
    config: LeaderboardConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """HTTP client shared by all providers for one page build."""
    return httpx.AsyncClient(
        transport=transport,
        timeout=config.http_timeout_seconds,
        follow_redirects=True,
        headers={"accept": "application/json"},
    )


class LeaderboardOrchestrator:
    """Builds the leaderboard view for one token."""

    def __init__(
        self,
        config: LeaderboardConfig,
        client: httpx.AsyncClient,
    ):
        """
        Initialize the orchestrator with both providers.

        Args:
            config: Site configuration
            client: Async HTTP client; the caller owns and closes it
        """
        self.config = config
        self.explorer = BlockscoutExplorerProvider(
            client,
            base_url=config.explorer_base_url,
            token_address=config.token_address,
        )
        self.identity = ZerionIdentityProvider(
            client,
            base_url=config.identity_base_url,
            batch_size=config.identity_batch_size,
        )

    def _collect_provider_audits(self) -> list[AuditEntry]:
        entries = self.explorer.get_audit_trail() + self.identity.get_audit_trail()
        return sorted(entries, key=lambda e: e.timestamp)

    async def _resolve_token(self, holders: HoldersPage) -> Token:
        """Token snapshot embedded in the first holder entry.

        An empty holder list carries no snapshot, so the token metadata is
        fetched explicitly instead.
        """
        if holders.items:
            return holders.items[0].token
        logger.info("Holder list is empty, fetching token metadata")
        return await self.explorer.get_token()

    async def build_view_model(self) -> LeaderboardView:
        """
        Fetch upstream data and assemble the leaderboard view.

        Any upstream failure propagates; there is no partial view.

        Returns:
            LeaderboardView with ranked holders in explorer order
        """
        logger.info(f"Building leaderboard for {self.config.token_address}")

        holders, counters = await asyncio.gather(
            self.explorer.get_holders(),
            self.explorer.get_token_counters(),
        )

        token = await self._resolve_token(holders)
        if token.total_supply is None:
            raise ValidationError("total_supply", "None", f"explorer has no supply for {token.address}")
        total_supply = base_to_common(token.total_supply, token.decimals)

        addresses = holders.addresses
        handles = await self.identity.resolve_handles(addresses)
        # explorer and identity API may disagree on checksum casing
        handles = {address.lower(): handle for address, handle in handles.items()}

        allocations = calc_allocations(
            [item.value for item in holders.items],
            token.total_supply,
        )

        records = [
            HolderRecord(
                rank=rank,
                address=item.address.hash,
                balance=item.value,
                balance_converted=base_to_common(item.value, item.token.decimals),
                allocation=allocation,
                handle=handles.get(item.address.hash.lower()),
            )
            for rank, (item, allocation) in enumerate(zip(holders.items, allocations), start=1)
        ]

        view = LeaderboardView(
            token=token,
            total_supply=total_supply,
            counters=counters,
            holders=records,
            audit_trail=self._collect_provider_audits(),
        )
        logger.info(
            f"Leaderboard ready: {len(records)} holders, {view.resolved_count} handles, "
            f"{view.allocation_shown:.2%} of supply"
        )
        return view


async def build_leaderboard(
    config: LeaderboardConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> LeaderboardView:
    """Build one view with a fresh HTTP client."""
    async with create_http_client(config, transport) as client:
        return await LeaderboardOrchestrator(config, client).build_view_model()
