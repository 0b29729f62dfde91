"""Upstream API providers.

This module contains providers for:
- Holder lists, counters and token metadata (Blockscout explorer)
- Address handles (Zerion wallet meta)
"""

from .base import BaseProvider
from .explorer.blockscout import BlockscoutExplorerProvider
from .identity.zerion import ZerionIdentityProvider

__all__ = ["BaseProvider", "BlockscoutExplorerProvider", "ZerionIdentityProvider"]
