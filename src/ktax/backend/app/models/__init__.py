"""Typed request/response models shared across the tax services.

Wire payloads live in :mod:`.api`; the models defined here are internal
records handed between the validator, deduction resolver, calculator and CSV
extractor.
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from ktax.backend.config.schema import (
    DONATION_SLUG,
    K_RECEIPT_SLUG,
    PERSONAL_SLUG,
    TRACKED_SLUGS,
)

from .api import (
    Allowance,
    CsvBatchResult,
    CsvResult,
    DeductionRequest,
    KReceiptDeductionResponse,
    PersonalDeductionResponse,
    TaxLevel,
    TaxRequest,
    TaxResult,
    WireModel,
    format_validation_error,
)

__all__ = [
    "ALLOWANCE_TYPES",
    "Allowance",
    "CsvBatchResult",
    "CsvResult",
    "CsvRow",
    "DONATION_SLUG",
    "Deduction",
    "DeductionConfig",
    "DeductionRequest",
    "K_RECEIPT_SLUG",
    "KReceiptDeductionResponse",
    "PERSONAL_SLUG",
    "PersonalDeductionResponse",
    "TRACKED_SLUGS",
    "TaxLevel",
    "TaxRequest",
    "TaxResult",
    "WireModel",
    "format_validation_error",
]

ALLOWANCE_TYPES: frozenset[str] = frozenset({DONATION_SLUG, K_RECEIPT_SLUG})


class Deduction(BaseModel):
    """Configured deduction row as held by the deduction store.

    ``max_amount`` of zero means the deduction has no upper bound.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slug: str
    name: str = ""
    amount: float = 0.0
    min_amount: float = Field(default=0.0, alias="minAmount")
    max_amount: float = Field(default=0.0, alias="maxAmount")


class DeductionConfig(NamedTuple):
    """Resolved deductions used for one calculation run."""

    personal: Deduction
    donation: Deduction
    k_receipt: Deduction


class CsvRow(BaseModel):
    """Numeric values extracted from one CSV data row."""

    model_config = ConfigDict(frozen=True)

    total_income: float = 0.0
    wht: float = 0.0
    donation: float = 0.0
    k_receipt: float = 0.0
