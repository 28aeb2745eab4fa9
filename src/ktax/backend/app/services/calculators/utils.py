"""Utility helpers for calculator modules.

Formatting is kept apart from the arithmetic so that label and message
presentation can change without touching the bracket logic.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from ktax.backend.config.schema import TaxBracket

_CENT = Decimal("0.01")
UNBOUNDED_SUFFIX = "and above"


def format_amount(value: float, decimals: int = 0) -> str:
    """Return ``value`` with comma thousands separators, e.g. ``150,001``."""

    return f"{value:,.{decimals}f}"


def format_percentage(value: float) -> str:
    """Return a human-readable percentage label for ``value``."""

    percentage = round(value * 100, 4)
    if float(int(percentage)) == percentage:
        return f"{int(percentage)}%"
    return f"{percentage:.2f}%"


def format_bracket_label(bracket: TaxBracket) -> str:
    """Return the display label for ``bracket``.

    Bounded brackets read ``"150,001-500,000"``; the top bracket reads
    ``"2,000,001 and above"``.
    """

    floor = format_amount(bracket.min_income + 1)
    if bracket.is_unbounded:
        return f"{floor} {UNBOUNDED_SUFFIX}"
    return f"{floor}-{format_amount(bracket.max_income)}"


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals, halves away from zero."""

    amount = Decimal(str(value))
    with localcontext() as context:
        # quantize needs room for every integer digit plus the cents
        context.prec = max(context.prec, amount.adjusted() + 4)
        return float(amount.quantize(_CENT, rounding=ROUND_HALF_UP))
