"""Output formatting module."""

from .audit_trail import AuditTrailFormatter
from .formatters import (
    JSONFormatter,
    OutputFormatter,
    TableFormatter,
    format_compact,
    format_percent,
    holder_label,
    truncate_address,
    wallet_overview_url,
)

__all__ = [
    "AuditTrailFormatter",
    "JSONFormatter",
    "OutputFormatter",
    "TableFormatter",
    "format_compact",
    "format_percent",
    "holder_label",
    "truncate_address",
    "wallet_overview_url",
]
