"""Progressive bracket calculation for a single tax request."""

from __future__ import annotations

from collections.abc import Sequence

from ktax.backend.app.models import (
    DONATION_SLUG,
    K_RECEIPT_SLUG,
    Deduction,
    TaxLevel,
    TaxRequest,
    TaxResult,
)
from ktax.backend.app.services.deductions import clamp_allowance_amount
from ktax.backend.config.schema import TaxBracket
from ktax.backend.config.tax_config import tax_brackets

from .utils import format_bracket_label, round_currency


def net_income(
    request: TaxRequest,
    personal: Deduction,
    donation: Deduction,
    k_receipt: Deduction,
) -> float:
    """Return taxable income after the personal and allowance deductions.

    The result may be negative; brackets then yield no tax.
    """

    return (
        request.total_income
        - personal.amount
        - clamp_allowance_amount(DONATION_SLUG, request.allowances, donation)
        - clamp_allowance_amount(K_RECEIPT_SLUG, request.allowances, k_receipt)
    )


def _bracket_tax(income: float, bracket: TaxBracket) -> float:
    overflow = 0.0 if bracket.is_unbounded else income - bracket.max_income
    if overflow > 0:
        return (bracket.max_income - bracket.min_income) * bracket.rate

    remain = income - bracket.min_income
    if remain < 0:
        remain = 0.0
    return remain * bracket.rate


def compute_tax(
    request: TaxRequest,
    personal: Deduction,
    donation: Deduction,
    k_receipt: Deduction,
    brackets: Sequence[TaxBracket] | None = None,
) -> TaxResult:
    """Apply the progressive bracket table to ``request``.

    Every bracket contributes a :class:`TaxLevel`, including those with no
    tax. Withholding is settled against the bracket total once, and only the
    settled amount is rounded.
    """

    table = tax_brackets() if brackets is None else brackets
    income = net_income(request, personal, donation, k_receipt)

    total = 0.0
    levels: list[TaxLevel] = []
    for bracket in table:
        bracket_tax = _bracket_tax(income, bracket)
        total += bracket_tax
        levels.append(TaxLevel(level=format_bracket_label(bracket), tax=bracket_tax))

    if request.wht > total:
        return TaxResult(
            tax=0.0,
            tax_refund=round_currency(request.wht - total),
            tax_level=levels,
        )

    return TaxResult(tax=round_currency(total - request.wht), tax_level=levels)


__all__ = ["compute_tax", "net_income"]
