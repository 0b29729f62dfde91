"""Core module - data models, types, configuration and exceptions."""

from .config import LeaderboardConfig
from .models import (
    AddressParam,
    AuditEntry,
    HolderItem,
    HolderRecord,
    HoldersPage,
    Identity,
    LeaderboardView,
    Token,
    TokenCounters,
    WalletMeta,
    WalletMetaResponse,
)
from .types import DataSource
from .exceptions import (
    ConfigurationError,
    DataSourceError,
    LeaderboardError,
    ValidationError,
)

__all__ = [
    # Config
    "LeaderboardConfig",
    # Models
    "AddressParam",
    "AuditEntry",
    "HolderItem",
    "HolderRecord",
    "HoldersPage",
    "Identity",
    "LeaderboardView",
    "Token",
    "TokenCounters",
    "WalletMeta",
    "WalletMetaResponse",
    # Types
    "DataSource",
    # Exceptions
    "ConfigurationError",
    "DataSourceError",
    "LeaderboardError",
    "ValidationError",
]
