"""Orchestrate validation, deduction resolution and bracket calculation.

:class:`TaxService` is the entry point used by the HTTP layer for single
calculations and CSV batches. Each call resolves the deduction configuration
from the injected store once and then runs pure calculations, so the service
holds no per-request state.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from time import perf_counter

from ktax.backend.app.models import (
    CsvBatchResult,
    CsvResult,
    CsvRow,
    TaxRequest,
    TaxResult,
)

from .calculators import compute_tax
from .csv_extractor import CsvSource, extract_rows, row_to_tax_request
from .deductions import DeductionStore, resolve_deduction_config
from .validators import validate_tax_request

_LOGGER = logging.getLogger(__name__)

PROFILE_ENV = "KTAX_PROFILE_CALCULATIONS"


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv(PROFILE_ENV, "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _report_timings(operation: str, timings: dict[str, float] | None) -> None:
    if timings is None:
        return
    _LOGGER.debug(
        "%s timings (ms): %s",
        operation,
        {name: round(duration * 1000, 3) for name, duration in timings.items()},
    )


class TaxService:
    """Compute tax results against a deduction store."""

    def __init__(self, store: DeductionStore) -> None:
        self._store = store

    def calculate(self, request: TaxRequest) -> TaxResult:
        """Validate ``request`` and compute its tax result.

        Raises :class:`TaxValidationError` for invalid input and lets storage
        failures propagate.
        """

        timings: dict[str, float] | None = {} if _profiling_enabled() else None

        validate_tax_request(request)

        with _profile_section("resolve_deductions", timings):
            personal, donation, k_receipt = resolve_deduction_config(self._store)

        with _profile_section("compute", timings):
            result = compute_tax(request, personal, donation, k_receipt)

        _report_timings("calculate", timings)
        return result

    def extract_csv(self, source: CsvSource) -> list[CsvRow]:
        return extract_rows(source)

    def calculate_csv(self, rows: list[CsvRow]) -> CsvBatchResult:
        """Compute every row in order using one resolved deduction configuration."""

        timings: dict[str, float] | None = {} if _profiling_enabled() else None

        with _profile_section("resolve_deductions", timings):
            personal, donation, k_receipt = resolve_deduction_config(self._store)

        results: list[CsvResult] = []
        with _profile_section("compute", timings):
            for row in rows:
                output = compute_tax(row_to_tax_request(row), personal, donation, k_receipt)
                results.append(
                    CsvResult(
                        total_income=row.total_income,
                        tax=output.tax,
                        tax_refund=output.tax_refund,
                    )
                )

        _report_timings("calculate_csv", timings)
        return CsvBatchResult(taxes=results)

    def calculate_batch(self, source: CsvSource) -> CsvBatchResult:
        """Extract rows from CSV ``source`` and compute each of them."""

        return self.calculate_csv(self.extract_csv(source))


__all__ = ["PROFILE_ENV", "TaxService"]
