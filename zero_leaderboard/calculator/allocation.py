"""Allocation math: a holder's share of total supply.

Shares are computed from base-unit integers with exact rational arithmetic,
then rounded once to float for display.
"""

import logging
from fractions import Fraction

from ..core.exceptions import ValidationError
from .units import parse_base_units

logger = logging.getLogger(__name__)


def calc_allocation(balance: int | str, total_supply: int | str) -> float:
    """
    Fraction of total supply held by one balance.

    Args:
        balance: Holder balance in base units
        total_supply: Token total supply in base units

    Returns:
        Allocation in [0, 1]

    Raises:
        ValidationError: If total supply is zero or smaller than the balance
    """
    balance_units = parse_base_units(balance)
    supply_units = parse_base_units(total_supply)

    if supply_units == 0:
        raise ValidationError("total_supply", "0", "cannot compute allocation of a zero supply")
    if balance_units > supply_units:
        raise ValidationError(
            "balance",
            str(balance_units),
            f"exceeds total supply {supply_units}",
        )

    return float(Fraction(balance_units, supply_units))


def calc_allocations(balances: list[int | str], total_supply: int | str) -> list[float]:
    """Allocations for a list of balances, in the same order."""
    allocations = [calc_allocation(b, total_supply) for b in balances]
    logger.debug(f"Computed {len(allocations)} allocations, combined {sum(allocations):.4f}")
    return allocations
