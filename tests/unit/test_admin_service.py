"""Unit tests for admin deduction updates."""

from __future__ import annotations

from typing import Sequence

import pytest

from ktax.backend.app.models import Deduction
from ktax.backend.app.services import AdminService
from ktax.backend.app.services.errors import (
    DeductionAmountError,
    DeductionInvalidError,
    DeductionNotFoundError,
    StorageError,
)

PERSONAL = Deduction(
    slug="personal",
    name="Personal Deduction",
    amount=60_000.0,
    min_amount=10_000.0,
    max_amount=100_000.0,
)


class _RecordingStore:
    """Deduction store double that records update calls."""

    def __init__(self, deduction: Deduction | None = None, error: Exception | None = None):
        self._deduction = deduction
        self._error = error
        self.updates: list[tuple[str, float]] = []

    def fetch_all(self) -> Sequence[Deduction]:  # pragma: no cover - unused
        return [self._deduction] if self._deduction else []

    def fetch_by_slug(self, slug: str) -> Deduction:
        if self._error is not None:
            raise self._error
        assert self._deduction is not None
        return self._deduction

    def update_amount(self, slug: str, amount: float) -> Deduction:
        self.updates.append((slug, amount))
        assert self._deduction is not None
        return self._deduction.model_copy(update={"amount": amount})


def test_amount_below_minimum_is_rejected_without_update() -> None:
    store = _RecordingStore(PERSONAL)

    with pytest.raises(DeductionAmountError) as excinfo:
        AdminService(store).update_deduction("personal", 5_000.0)

    assert str(excinfo.value) == "amount should not be less than 10,000.00"
    assert store.updates == []


def test_amount_above_maximum_is_rejected_without_update() -> None:
    store = _RecordingStore(PERSONAL)

    with pytest.raises(DeductionAmountError) as excinfo:
        AdminService(store).update_deduction("personal", 100_000.01)

    assert str(excinfo.value) == "amount should not be more than 100,000.00"
    assert store.updates == []


def test_zero_maximum_means_unbounded() -> None:
    store = _RecordingStore(PERSONAL.model_copy(update={"max_amount": 0.0}))

    updated = AdminService(store).update_deduction("personal", 5_000_000.0)

    assert updated.amount == 5_000_000.0
    assert store.updates == [("personal", 5_000_000.0)]


@pytest.mark.parametrize("amount", [10_000.0, 70_000.0, 100_000.0])
def test_amounts_within_bounds_are_stored(amount: float) -> None:
    store = _RecordingStore(PERSONAL)

    updated = AdminService(store).update_deduction("personal", amount)

    assert updated.amount == amount
    assert store.updates == [("personal", amount)]


@pytest.mark.parametrize(
    "error", [DeductionNotFoundError("personal"), StorageError("database unavailable")]
)
def test_lookup_failures_become_invalid_deduction(error: Exception) -> None:
    store = _RecordingStore(error=error)

    with pytest.raises(DeductionInvalidError) as excinfo:
        AdminService(store).validate_deduction_request("personal", 20_000.0)

    assert str(excinfo.value) == "invalid deduction"
    assert store.updates == []


class _VanishingStore(_RecordingStore):
    """Store whose row disappears between lookup and write."""

    def update_amount(self, slug: str, amount: float) -> Deduction:
        self.updates.append((slug, amount))
        raise DeductionNotFoundError(slug)


def test_row_removed_before_write_propagates_not_found() -> None:
    store = _VanishingStore(PERSONAL)

    with pytest.raises(DeductionNotFoundError):
        AdminService(store).update_deduction("personal", 20_000.0)

    assert store.updates == [("personal", 20_000.0)]
