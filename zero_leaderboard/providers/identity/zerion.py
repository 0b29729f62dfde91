"""Zerion wallet-meta identity provider.

Resolves wallet addresses to handles (ENS and similar names). The endpoint
accepts a comma-joined list of identifiers; addresses are sent in batches
of ten and all batches are requested concurrently.
"""

import asyncio
import logging
import uuid
from typing import Sequence, TypeVar

import httpx

from ...core.models import WalletMeta, WalletMetaResponse
from ...core.types import DataSource
from ..base import BaseProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 10
CLIENT_TYPE = "web"
CLIENT_VERSION = "1.0.0"


def split_into_chunks(items: Sequence[T], size: int) -> list[list[T]]:
    """
    Split a sequence into consecutive chunks.

    Args:
        items: Sequence to split
        size: Maximum chunk length

    Returns:
        ceil(len(items) / size) lists whose concatenation equals items
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


class ZerionIdentityProvider(BaseProvider):
    """Fetches wallet identities from the Zerion wallet-meta API."""

    SOURCE = DataSource.ZERION
    ENDPOINT = "/wallet/get-meta/v1"

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        """
        Initialize identity provider.

        Args:
            client: Shared async HTTP client
            base_url: Identity API root, e.g. https://zpi.zerion.io
            batch_size: Addresses per wallet-meta request
        """
        super().__init__(client, base_url)
        self.batch_size = batch_size

    def _headers(self) -> dict[str, str]:
        return {
            "x-request-id": str(uuid.uuid4()),
            "zerion-client-type": CLIENT_TYPE,
            "zerion-client-version": CLIENT_VERSION,
        }

    async def get_wallets_meta(self, identifiers: list[str]) -> WalletMetaResponse:
        """One wallet-meta request for a batch of identifiers."""
        return await self._get_model(
            WalletMetaResponse,
            "wallet_meta",
            self.ENDPOINT,
            params={"identifiers": ",".join(identifiers)},
            headers=self._headers(),
        )

    async def resolve_identities(self, addresses: list[str]) -> list[WalletMeta]:
        """
        Wallet metadata for all addresses.

        Batches are requested concurrently and all of them must succeed;
        the first failure propagates. Batches without data are skipped.
        """
        chunks = split_into_chunks(addresses, self.batch_size)
        if not chunks:
            return []

        logger.debug(f"Resolving {len(addresses)} addresses in {len(chunks)} batches")
        responses = await asyncio.gather(
            *(self.get_wallets_meta(chunk) for chunk in chunks)
        )

        wallets: list[WalletMeta] = []
        for response in responses:
            if response.data:
                wallets.extend(response.data)
        return wallets

    async def resolve_handles(self, addresses: list[str]) -> dict[str, str]:
        """
        Map addresses to handles.

        Only the first identity of each wallet is considered; wallets
        without a handle there are left out of the mapping.
        """
        handles: dict[str, str] = {}
        for wallet in await self.resolve_identities(addresses):
            handle = wallet.primary_handle
            if handle:
                handles[wallet.address] = handle

        logger.info(f"Resolved {len(handles)}/{len(addresses)} handles")
        return handles
