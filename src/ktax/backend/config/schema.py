"""Pydantic models describing the tax configuration schema."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PERSONAL_SLUG = "personal"
DONATION_SLUG = "donation"
K_RECEIPT_SLUG = "k-receipt"

TRACKED_SLUGS: tuple[str, ...] = (PERSONAL_SLUG, DONATION_SLUG, K_RECEIPT_SLUG)


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class TaxBracket(ImmutableModel):
    """A single progressive tax bracket.

    ``max_income`` of zero (or below) marks the unbounded top bracket.
    """

    min_income: float = Field(alias="min")
    max_income: float = Field(alias="max")
    rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> TaxBracket:
        if self.rate < 0:
            raise ConfigurationError("Tax rates must be non-negative")
        if not self.is_unbounded and self.max_income <= self.min_income:
            raise ConfigurationError("Bracket ceilings must exceed their floors")
        return self

    @property
    def is_unbounded(self) -> bool:
        return self.max_income <= 0


class DeductionSeed(ImmutableModel):
    """Initial deduction row loaded into the deduction repository."""

    slug: str
    name: str
    amount: float = Field(ge=0)
    min_amount: float = Field(default=0.0, ge=0)
    max_amount: float = Field(default=0.0, ge=0)


class TaxConfiguration(ImmutableModel):
    """Complete tax configuration bundle."""

    brackets: tuple[TaxBracket, ...]
    default_deductions: Mapping[str, float]
    seed_deductions: tuple[DeductionSeed, ...] = ()

    @field_validator("brackets")
    @classmethod
    def _require_brackets(cls, value: tuple[TaxBracket, ...]) -> tuple[TaxBracket, ...]:
        if not value:
            raise ConfigurationError("At least one tax bracket must be configured")
        return value

    @field_validator("default_deductions", mode="before")
    @classmethod
    def _coerce_defaults(cls, value: Any) -> Mapping[str, float]:
        if not isinstance(value, Mapping):
            raise ConfigurationError("Default deductions must be a mapping of slug to amount")
        return {str(slug): float(amount) for slug, amount in value.items()}

    @model_validator(mode="after")
    def _require_tracked_defaults(self) -> TaxConfiguration:
        missing = [slug for slug in TRACKED_SLUGS if slug not in self.default_deductions]
        if missing:
            raise ConfigurationError(
                f"Default deductions missing for: {', '.join(missing)}"
            )
        return self

    def default_amount(self, slug: str) -> float:
        return self.default_deductions[slug]


__all__ = [
    "ConfigurationError",
    "DONATION_SLUG",
    "DeductionSeed",
    "ImmutableModel",
    "K_RECEIPT_SLUG",
    "PERSONAL_SLUG",
    "TRACKED_SLUGS",
    "TaxBracket",
    "TaxConfiguration",
]
