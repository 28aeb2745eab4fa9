"""Bracket calculation and number formatting helpers."""

from .brackets import compute_tax, net_income
from .utils import (
    format_amount,
    format_bracket_label,
    format_percentage,
    round_currency,
)

__all__ = [
    "compute_tax",
    "format_amount",
    "format_bracket_label",
    "format_percentage",
    "net_income",
    "round_currency",
]
