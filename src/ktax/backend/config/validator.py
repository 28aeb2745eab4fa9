"""Utilities for validating tax configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path
from typing import Sequence

from .tax_config import (
    TRACKED_SLUGS,
    ConfigurationError,
    DeductionSeed,
    TaxBracket,
    TaxConfiguration,
    load_tax_configuration,
    load_tax_configuration_file,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_brackets(brackets: Sequence[TaxBracket]) -> list[str]:
    errors: list[str] = []

    for index, bracket in enumerate(brackets):
        scope = f"brackets[{index}]"
        if bracket.rate > 1:
            errors.append(_format_scope(scope, f"rate {bracket.rate} must be between 0 and 1"))

        if bracket.is_unbounded and index != len(brackets) - 1:
            errors.append(_format_scope(scope, "only the last bracket may be unbounded"))

        if index > 0:
            previous = brackets[index - 1]
            if not previous.is_unbounded and bracket.min_income != previous.max_income:
                errors.append(
                    _format_scope(
                        scope,
                        (
                            f"floor {bracket.min_income:g} does not continue the previous "
                            f"ceiling {previous.max_income:g}"
                        ),
                    )
                )
            if bracket.rate < previous.rate:
                errors.append(_format_scope(scope, "rates should not decrease"))

    if brackets and not brackets[-1].is_unbounded:
        errors.append(_format_scope("brackets", "the last bracket must be unbounded"))

    return errors


def _validate_seed(scope: str, seed: DeductionSeed) -> list[str]:
    errors: list[str] = []

    if seed.amount < seed.min_amount:
        errors.append(_format_scope(scope, "amount is below the configured minimum"))

    if seed.max_amount > 0:
        if seed.amount > seed.max_amount:
            errors.append(_format_scope(scope, "amount exceeds the configured maximum"))
        if seed.min_amount > seed.max_amount:
            errors.append(_format_scope(scope, "minimum exceeds the configured maximum"))

    return errors


def _validate_seed_deductions(seeds: Sequence[DeductionSeed]) -> list[str]:
    errors: list[str] = []

    duplicates = [slug for slug, count in Counter(seed.slug for seed in seeds).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "seed_deductions",
                f"duplicate deduction slugs detected: {sorted(duplicates)}",
            )
        )

    for seed in seeds:
        if seed.slug not in TRACKED_SLUGS:
            errors.append(
                _format_scope(f"seed_deductions.{seed.slug}", "slug is not a tracked deduction")
            )
        errors.extend(_validate_seed(f"seed_deductions.{seed.slug}", seed))

    return errors


def validate_tax_configuration(config: TaxConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_brackets(config.brackets))

    for slug, amount in config.default_deductions.items():
        if amount < 0:
            errors.append(
                _format_scope(f"default_deductions.{slug}", "amount must be non-negative")
            )

    errors.extend(_validate_seed_deductions(config.seed_deductions))

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate the tax configuration and report issues helpful to contributors."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Configuration files to validate (defaults to the packaged configuration)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    targets: list[tuple[str, TaxConfiguration]] = []
    exit_code = 0

    if not args.paths:
        try:
            targets.append(("default", load_tax_configuration()))
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[default] failed to load configuration: {error}")
            return 1

    for path in args.paths:
        try:
            targets.append((str(path), load_tax_configuration_file(path)))
        except (OSError, ConfigurationError) as error:
            print(f"[{path}] failed to load configuration: {error}")
            exit_code = 1

    for label, config in targets:
        issues = validate_tax_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{label}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{label}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
