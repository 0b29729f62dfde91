"""Blockscout explorer provider.

Reads the holder list, the aggregate counters and the token metadata of a
single token contract from the Blockscout v2 REST API. Only the first page
of holders is consumed; the explorer already orders it by balance,
descending.
"""

import logging

import httpx

from ...core.models import HoldersPage, Token, TokenCounters
from ...core.types import DataSource
from ..base import BaseProvider

logger = logging.getLogger(__name__)


class BlockscoutExplorerProvider(BaseProvider):
    """Fetches holders and counters for one token from a Blockscout explorer."""

    SOURCE = DataSource.BLOCKSCOUT

    def __init__(self, client: httpx.AsyncClient, base_url: str, token_address: str):
        """
        Initialize explorer provider.

        Args:
            client: Shared async HTTP client
            base_url: Explorer root, e.g. https://zero-network.calderaexplorer.xyz
            token_address: Token contract address
        """
        super().__init__(client, base_url)
        self.token_address = token_address

    @property
    def token_endpoint(self) -> str:
        return f"/api/v2/tokens/{self.token_address}"

    async def get_holders(self) -> HoldersPage:
        """First page of token holders, in explorer order."""
        endpoint = f"{self.token_endpoint}/holders"
        page = await self._get_model(HoldersPage, "holders", endpoint)
        logger.info(f"Fetched {len(page.items)} holders for {self.token_address}")
        return page

    async def get_token_counters(self) -> TokenCounters:
        """Holder and transfer counts."""
        endpoint = f"{self.token_endpoint}/counters"
        return await self._get_model(TokenCounters, "counters", endpoint)

    async def get_token(self) -> Token:
        """Token metadata, used when no holder entry embeds it."""
        endpoint = self.token_endpoint
        return await self._get_model(Token, "token", endpoint)
