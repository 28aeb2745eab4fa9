"""Configuration loader wrapping the shared schema models."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .schema import (
    DONATION_SLUG,
    K_RECEIPT_SLUG,
    PERSONAL_SLUG,
    TRACKED_SLUGS,
    ConfigurationError,
    DeductionSeed,
    TaxBracket,
    TaxConfiguration,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CONFIG_FILE = CONFIG_DIRECTORY / "tax.yaml"
CONFIG_FILE_ENV = "KTAX_CONFIG_FILE"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def resolve_config_path() -> Path:
    """Return the configuration file path, honouring ``KTAX_CONFIG_FILE``."""

    override = os.getenv(CONFIG_FILE_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE


def parse_tax_configuration(raw_config: dict[str, Any]) -> TaxConfiguration:
    """Validate a raw mapping against the configuration schema."""

    try:
        return TaxConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Configuration validation failed: {error}") from error


def load_tax_configuration_file(path: Path) -> TaxConfiguration:
    """Read and validate a configuration file without caching."""

    if not path.exists():
        raise FileNotFoundError(f"Tax configuration file missing: {path}")

    return parse_tax_configuration(_load_yaml(path))


@lru_cache(maxsize=1)
def load_tax_configuration() -> TaxConfiguration:
    """Load and cache the tax configuration from disk."""

    return load_tax_configuration_file(resolve_config_path())


def tax_brackets() -> tuple[TaxBracket, ...]:
    """Return the immutable, ascending bracket table."""

    return load_tax_configuration().brackets


def default_deduction_amounts() -> dict[str, float]:
    """Return the fallback amount for every tracked deduction slug."""

    config = load_tax_configuration()
    return {slug: config.default_amount(slug) for slug in TRACKED_SLUGS}


def seed_deductions() -> Sequence[DeductionSeed]:
    """Expose the rows used to seed the in-memory deduction repository."""

    return load_tax_configuration().seed_deductions


__all__ = [
    "CONFIG_DIRECTORY",
    "CONFIG_FILE",
    "CONFIG_FILE_ENV",
    "ConfigurationError",
    "DONATION_SLUG",
    "DeductionSeed",
    "K_RECEIPT_SLUG",
    "PERSONAL_SLUG",
    "TRACKED_SLUGS",
    "TaxBracket",
    "TaxConfiguration",
    "default_deduction_amounts",
    "load_tax_configuration",
    "load_tax_configuration_file",
    "parse_tax_configuration",
    "resolve_config_path",
    "seed_deductions",
    "tax_brackets",
]
