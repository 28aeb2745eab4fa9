"""Exception taxonomy raised by the tax computation services."""

from __future__ import annotations

from enum import Enum


class ValidationErrorKind(str, Enum):
    """Which input constraint a tax request or CSV row violated."""

    TOTAL_INCOME_INVALID = "total_income_invalid"
    WHT_INVALID = "wht_invalid"
    WHT_EXCEEDS_INCOME = "wht_exceeds_income"
    ALLOWANCE_TYPE_INVALID = "allowance_type_invalid"
    ALLOWANCE_AMOUNT_INVALID = "allowance_amount_invalid"


class TaxValidationError(ValueError):
    """Raised when client-supplied tax input is malformed."""

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class ExtractionError(ValueError):
    """Raised when an uploaded CSV cannot be turned into tax rows."""


class MissingRequiredHeaderError(ExtractionError):
    """The header row lacks one of the required columns."""

    def __init__(self, message: str = "missing required header field") -> None:
        super().__init__(message)


class EmptyValueError(ExtractionError):
    """A recognised column holds an empty cell."""

    def __init__(self, message: str = "value should not be empty") -> None:
        super().__init__(message)


class InvalidNumberError(ExtractionError):
    """A recognised column holds a value that is not a finite number."""


class CsvFormatError(ExtractionError):
    """The CSV records are structurally inconsistent."""


class DeductionInvalidError(ValueError):
    """The deduction targeted by an admin update could not be loaded."""

    def __init__(self, message: str = "invalid deduction") -> None:
        super().__init__(message)


class DeductionAmountError(ValueError):
    """An admin update amount falls outside the deduction's bounds."""


class DeductionNotFoundError(LookupError):
    """The deduction store holds no row for the requested slug(s)."""

    def __init__(self, slug: str | None = None) -> None:
        message = "data not found" if slug is None else f"deduction '{slug}' not found"
        super().__init__(message)
        self.slug = slug


class StorageError(RuntimeError):
    """The deduction store failed for reasons other than a missing row."""


__all__ = [
    "CsvFormatError",
    "DeductionAmountError",
    "DeductionInvalidError",
    "DeductionNotFoundError",
    "EmptyValueError",
    "ExtractionError",
    "InvalidNumberError",
    "MissingRequiredHeaderError",
    "StorageError",
    "TaxValidationError",
    "ValidationErrorKind",
]
