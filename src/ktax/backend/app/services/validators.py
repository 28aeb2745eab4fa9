"""Input constraint checks for tax requests and CSV rows.

Checks run in a fixed order (income, withholding, then allowances in input
order) and stop at the first violation.
"""

from __future__ import annotations

from ktax.backend.app.models import (
    ALLOWANCE_TYPES,
    DONATION_SLUG,
    K_RECEIPT_SLUG,
    Allowance,
    CsvRow,
    TaxRequest,
)

from .errors import TaxValidationError, ValidationErrorKind

TOTAL_INCOME_INVALID_MESSAGE = "total income should be more than or equal 0"
WHT_INVALID_MESSAGE = "wht should be more than or equal 0"
WHT_EXCEEDS_INCOME_MESSAGE = "wht should not more than income"
ALLOWANCE_TYPE_INVALID_MESSAGE = "allowance type should be one of 'donation', 'k-receipt'"
ALLOWANCE_AMOUNT_INVALID_MESSAGE = "allowance amount should be more than or equal 0"


def validate_total_income(total_income: float) -> None:
    if total_income < 0:
        raise TaxValidationError(
            ValidationErrorKind.TOTAL_INCOME_INVALID, TOTAL_INCOME_INVALID_MESSAGE
        )


def validate_wht(wht: float, total_income: float) -> None:
    if wht < 0:
        raise TaxValidationError(ValidationErrorKind.WHT_INVALID, WHT_INVALID_MESSAGE)
    if wht > total_income:
        raise TaxValidationError(
            ValidationErrorKind.WHT_EXCEEDS_INCOME, WHT_EXCEEDS_INCOME_MESSAGE
        )


def validate_allowance(allowance: Allowance) -> None:
    # Allowance types are matched case-sensitively.
    if allowance.allowance_type not in ALLOWANCE_TYPES:
        raise TaxValidationError(
            ValidationErrorKind.ALLOWANCE_TYPE_INVALID, ALLOWANCE_TYPE_INVALID_MESSAGE
        )
    if allowance.amount < 0:
        raise TaxValidationError(
            ValidationErrorKind.ALLOWANCE_AMOUNT_INVALID, ALLOWANCE_AMOUNT_INVALID_MESSAGE
        )


def validate_deduction_amount(slug: str, amount: float) -> None:
    if amount < 0:
        raise TaxValidationError(
            ValidationErrorKind.ALLOWANCE_AMOUNT_INVALID,
            f"{slug} amount should be more than or equal 0",
        )


def validate_tax_request(request: TaxRequest) -> None:
    """Raise :class:`TaxValidationError` for the first invalid field in ``request``."""

    validate_total_income(request.total_income)
    validate_wht(request.wht, request.total_income)
    for allowance in request.allowances:
        validate_allowance(allowance)


def validate_tax_csv_row(row: CsvRow) -> None:
    """Raise :class:`TaxValidationError` for the first invalid field in ``row``."""

    validate_total_income(row.total_income)
    validate_wht(row.wht, row.total_income)
    validate_deduction_amount(DONATION_SLUG, row.donation)
    validate_deduction_amount(K_RECEIPT_SLUG, row.k_receipt)


__all__ = [
    "ALLOWANCE_AMOUNT_INVALID_MESSAGE",
    "ALLOWANCE_TYPE_INVALID_MESSAGE",
    "TOTAL_INCOME_INVALID_MESSAGE",
    "WHT_EXCEEDS_INCOME_MESSAGE",
    "WHT_INVALID_MESSAGE",
    "validate_allowance",
    "validate_deduction_amount",
    "validate_tax_csv_row",
    "validate_tax_request",
    "validate_total_income",
    "validate_wht",
]
