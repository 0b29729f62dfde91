"""Unit conversion and allocation math."""

from .allocation import calc_allocation, calc_allocations
from .units import base_to_common, parse_base_units

__all__ = [
    "base_to_common",
    "parse_base_units",
    "calc_allocation",
    "calc_allocations",
]
