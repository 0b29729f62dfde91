"""Display formatting for leaderboard values and whole views.

Number formatting follows what an English locale shows in the browser:
- Percentages: one significant digit below 1%, whole percents otherwise
- Amounts: compact notation (1.2K, 34M, 5.6B)

Output formatters:
- JSON: Machine-readable, complete view
- Table: Human-readable CLI output
"""

import json
import logging
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from io import StringIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.models import HolderRecord, LeaderboardView

logger = logging.getLogger(__name__)

WALLET_OVERVIEW_URL = "https://app.zerion.io/{address}/overview"

_COMPACT_EXPONENTS = [(12, "T"), (9, "B"), (6, "M"), (3, "K")]
_ONE = Decimal(1)


def _to_decimal(value: float | int | Decimal | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _plain(value: Decimal, grouping: bool = False) -> str:
    """Decimal without exponent notation or trailing zeros."""
    if value == 0:
        return "0"
    normalized = value.normalize()
    return f"{normalized:,f}" if grouping else f"{normalized:f}"


def _round_significant(value: Decimal, digits: int) -> Decimal:
    if value == 0:
        return value
    quantum = _ONE.scaleb(value.adjusted() - digits + 1)
    return value.quantize(quantum, rounding=ROUND_HALF_UP)


def format_percent(value: float | Decimal) -> str:
    """
    Format an allocation fraction as a percentage.

    Fractions below 0.01 keep one significant digit so small holders do
    not all collapse to "0%".

    Examples:
        0.004 -> "0.4%", 0.00456 -> "0.5%", 0.25 -> "25%", 0.5 -> "50%"
    """
    fraction = _to_decimal(value)
    percent = fraction * 100
    if fraction < Decimal("0.01"):
        return f"{_plain(_round_significant(percent, 1))}%"
    return f"{_plain(percent.quantize(_ONE, rounding=ROUND_HALF_UP), grouping=True)}%"


def _round_compact(scaled: Decimal) -> Decimal:
    # Two significant digits for a single integer digit, whole numbers above.
    if scaled >= 10:
        return scaled.quantize(_ONE, rounding=ROUND_HALF_UP)
    return _round_significant(scaled, 2)


def format_compact(value: float | int | Decimal) -> str:
    """
    Format an amount in compact notation.

    Examples:
        999 -> "999", 1234 -> "1.2K", 12345 -> "12K", 1_250_000 -> "1.3M",
        999_999 -> "1M", 0.1234 -> "0.12"
    """
    number = _to_decimal(value)
    sign = "-" if number < 0 else ""
    number = abs(number)

    exponent, suffix = 0, ""
    for exp, sfx in _COMPACT_EXPONENTS:
        if number >= _ONE.scaleb(exp):
            exponent, suffix = exp, sfx
            break

    rounded = _round_compact(number.scaleb(-exponent))

    # 999.96K rounds to 1000K; promote to the next unit
    if rounded >= 1000 and exponent < _COMPACT_EXPONENTS[0][0]:
        exponent += 3
        suffix = dict(_COMPACT_EXPONENTS)[exponent]
        rounded = _round_compact(number.scaleb(-exponent))

    return f"{sign}{_plain(rounded, grouping=True)}{suffix}"


def truncate_address(address: str, leading: int = 6, trailing: int = 4) -> str:
    """Shorten an address to its first and last characters: 0x8812…bc5e."""
    if len(address) <= leading + trailing + 1:
        return address
    return f"{address[:leading]}…{address[-trailing:]}"


def wallet_overview_url(address: str) -> str:
    """External wallet page for an address."""
    return WALLET_OVERVIEW_URL.format(address=address)


def holder_label(holder: HolderRecord) -> str:
    """Resolved handle, or the truncated address when there is none."""
    return holder.handle or truncate_address(holder.address)


class OutputFormatter(ABC):
    """Abstract base class for view formatters."""

    @abstractmethod
    def format(self, view: LeaderboardView) -> str:
        """Format the view as a string."""
        pass

    def format_to_file(self, view: LeaderboardView, filepath: str) -> None:
        """Write formatted view to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.format(view))


class JSONFormatter(OutputFormatter):
    """Formats the view as JSON."""

    def __init__(self, indent: int = 2, include_audit: bool = False):
        """
        Initialize JSON formatter.

        Args:
            indent: JSON indentation level
            include_audit: Include the outbound call log
        """
        self.indent = indent
        self.include_audit = include_audit

    def format(self, view: LeaderboardView) -> str:
        """Format view as JSON string."""
        exclude = None if self.include_audit else {"audit_trail"}
        data = view.model_dump(mode="json", exclude=exclude)
        return json.dumps(data, indent=self.indent)


class TableFormatter(OutputFormatter):
    """Formats the view as a rich table for the terminal."""

    def __init__(self, width: int = 100, limit: int | None = None):
        """
        Initialize table formatter.

        Args:
            width: Console width for rendering
            limit: Show only the top N holders
        """
        self.width = width
        self.limit = limit

    def build_table(self, view: LeaderboardView) -> Table:
        token = view.token
        title = f"{token.name or token.symbol or token.address} Leaderboard"
        table = Table(title=title)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Address")
        table.add_column("Volume", justify="right")
        table.add_column("Allocation", justify="right")

        holders = view.holders[: self.limit] if self.limit else view.holders
        for holder in holders:
            label = escape(holder_label(holder))
            if holder.handle:
                label = f"[bold]{label}[/]"
            table.add_row(
                str(holder.rank),
                label,
                format_compact(holder.balance_converted),
                format_percent(holder.allocation),
            )
        return table

    def format(self, view: LeaderboardView) -> str:
        """Render stats and holder table to a string."""
        return self._render(view, styled=True)

    def format_to_file(self, view: LeaderboardView, filepath: str) -> None:
        """Write formatted output to file."""
        # For file output, use plain format (no ANSI codes)
        content = self._render(view, styled=False)

        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)

    def _render(self, view: LeaderboardView, styled: bool) -> str:
        output = StringIO()
        console = Console(file=output, force_terminal=styled, no_color=not styled, width=self.width)

        holders_count = view.token.holders
        if holders_count is None:
            holders_count = view.counters.token_holders_count
        console.print(
            f"[bold]Holders[/] {holders_count}   "
            f"[bold]Total Supply[/] {format_compact(view.total_supply)}   "
            f"[bold]Transfers[/] {view.counters.transfers_count}"
        )
        console.print(self.build_table(view))
        return output.getvalue()
