"""Pydantic data models for the leaderboard.

Wire models mirror the explorer and identity API payloads; the view models
are what the presentation layer consumes. All of them are frozen after
creation.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from .types import Address, BaseUnitAmount, DataSource, Fraction01


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_base_units(value: str | None) -> str | None:
    if value is not None and not (value.isascii() and value.isdigit()):
        raise ValueError(f"expected a non-negative integer string, got {value!r}")
    return value


# ============================================================================
# Explorer (Blockscout v2) payloads
# ============================================================================


class Token(BaseModel):
    """Token snapshot as embedded in explorer responses."""

    address: Address = Field(validation_alias=AliasChoices("address", "address_hash"))
    symbol: str | None = None
    name: str | None = None
    decimals: int = 0
    total_supply: BaseUnitAmount | None = None
    holders: int | None = Field(
        default=None, validation_alias=AliasChoices("holders", "holders_count")
    )
    type: str | None = None
    icon_url: str | None = None
    exchange_rate: str | None = None
    circulating_market_cap: str | None = None

    model_config = {"frozen": True}

    @field_validator("decimals", mode="before")
    @classmethod
    def default_decimals(cls, v):
        """Explorer returns null decimals for tokens without metadata."""
        return 0 if v is None else v

    @field_validator("total_supply")
    @classmethod
    def check_total_supply(cls, v: str | None) -> str | None:
        return _check_base_units(v)


class AddressParam(BaseModel):
    """Address object of a holder entry."""

    hash: Address
    name: str | None = None
    is_contract: bool = False
    is_verified: bool | None = None
    implementation_name: str | None = None

    model_config = {"frozen": True}


class HolderItem(BaseModel):
    """One entry of the explorer's holder list."""

    address: AddressParam
    value: BaseUnitAmount
    token_id: str | None = None
    token: Token

    model_config = {"frozen": True}

    @field_validator("value")
    @classmethod
    def check_value(cls, v: str) -> str:
        return _check_base_units(v)


class HoldersPage(BaseModel):
    """First page of holders; the pagination cursor is kept but unused."""

    items: list[HolderItem] = Field(default_factory=list)
    next_page_params: dict | None = None

    model_config = {"frozen": True}

    @property
    def addresses(self) -> list[Address]:
        """Holder addresses in explorer order."""
        return [item.address.hash for item in self.items]


class TokenCounters(BaseModel):
    """Aggregate counters for the token."""

    token_holders_count: int = 0
    transfers_count: int = 0

    model_config = {"frozen": True}


# ============================================================================
# Identity (Zerion wallet meta) payloads
# ============================================================================


class Identity(BaseModel):
    """A single identity record (e.g. an ENS name) for an address."""

    provider: str | None = None
    address: Address | None = None
    handle: str | None = None

    model_config = {"frozen": True}


class WalletMeta(BaseModel):
    """Identity metadata for one wallet."""

    address: Address
    identities: list[Identity] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("identities", mode="before")
    @classmethod
    def null_identities(cls, v):
        return v or []

    @property
    def primary_handle(self) -> str | None:
        """Handle of the first identity entry, if it has one."""
        if self.identities and self.identities[0].handle:
            return self.identities[0].handle
        return None


class WalletMetaResponse(BaseModel):
    """Response envelope of the wallet-meta endpoint."""

    data: list[WalletMeta] | None = None
    errors: Any = None

    model_config = {"frozen": True}


# ============================================================================
# Audit trail and view model
# ============================================================================


class AuditEntry(BaseModel):
    """Record of one outbound API call."""

    timestamp: datetime = Field(default_factory=_utcnow)
    source: DataSource
    action: str
    endpoint: str | None = None
    success: bool = True
    error_message: str | None = None
    duration_ms: int | None = None

    model_config = {"frozen": True}


class HolderRecord(BaseModel):
    """A ranked leaderboard row."""

    rank: int
    address: Address
    balance: BaseUnitAmount
    balance_converted: Decimal
    allocation: Fraction01 = Field(ge=0.0, le=1.0)
    handle: str | None = None

    model_config = {"frozen": True}


class LeaderboardView(BaseModel):
    """Everything the leaderboard page renders."""

    token: Token
    total_supply: Decimal
    counters: TokenCounters
    holders: list[HolderRecord] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=_utcnow)
    audit_trail: list[AuditEntry] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def resolved_count(self) -> int:
        """Number of holders shown with a handle."""
        return sum(1 for h in self.holders if h.handle)

    @property
    def allocation_shown(self) -> float:
        """Combined allocation of the listed holders."""
        return sum(h.allocation for h in self.holders)
