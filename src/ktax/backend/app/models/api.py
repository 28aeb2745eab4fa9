"""Pydantic models describing the public API surface."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "Allowance",
    "TaxRequest",
    "TaxLevel",
    "TaxResult",
    "CsvResult",
    "CsvBatchResult",
    "DeductionRequest",
    "PersonalDeductionResponse",
    "KReceiptDeductionResponse",
    "WireModel",
    "format_validation_error",
]


class WireModel(BaseModel):
    """Base class for payloads exchanged with HTTP clients.

    Fields use camelCase aliases on the wire; optional fields that still hold
    their default value are left out of responses.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)


class Allowance(WireModel):
    """A deduction-eligible expense claimed on a tax request."""

    allowance_type: str = Field(alias="allowanceType")
    amount: float = Field(default=0.0, strict=True)


class TaxRequest(WireModel):
    """Payload accepted by the single calculation endpoint."""

    total_income: float = Field(default=0.0, alias="totalIncome", strict=True)
    wht: float = Field(default=0.0, strict=True)
    allowances: list[Allowance] = Field(default_factory=list)

    @field_validator("wht", "total_income", mode="before")
    @classmethod
    def _default_missing_amounts(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("allowances", mode="before")
    @classmethod
    def _default_missing_allowances(cls, value: Any) -> Any:
        return [] if value is None else value


class TaxLevel(WireModel):
    """Tax collected within a single bracket."""

    level: str
    tax: float


class TaxResult(WireModel):
    """Outcome of a single tax calculation.

    At most one of ``tax`` and ``tax_refund`` is non-zero.
    """

    tax: float
    tax_refund: float = Field(default=0.0, alias="taxRefund")
    tax_level: list[TaxLevel] = Field(alias="taxLevel")


class CsvResult(WireModel):
    """Per-row outcome of a CSV batch calculation."""

    total_income: float = Field(alias="totalIncome")
    tax: float
    tax_refund: float = Field(default=0.0, alias="taxRefund")


class CsvBatchResult(WireModel):
    """Response body for the CSV upload endpoint."""

    taxes: list[CsvResult]


class DeductionRequest(WireModel):
    """Admin payload carrying a new deduction amount."""

    amount: float = Field(strict=True)


class PersonalDeductionResponse(WireModel):
    personal_deduction: float = Field(alias="personalDeduction")


class KReceiptDeductionResponse(WireModel):
    k_receipt: float = Field(alias="kReceipt")


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of binding issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid request payload: {details}"
