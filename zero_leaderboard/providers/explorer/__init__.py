"""Block-explorer providers."""

from .blockscout import BlockscoutExplorerProvider

__all__ = ["BlockscoutExplorerProvider"]
