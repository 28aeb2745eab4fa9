"""Unit tests for the in-memory deduction repository."""

from __future__ import annotations

import pytest

from ktax.backend.app.models import Deduction
from ktax.backend.app.services import InMemoryDeductionRepository
from ktax.backend.app.services.errors import DeductionNotFoundError
from ktax.backend.config.schema import DeductionSeed


def test_repository_is_seeded_from_configuration() -> None:
    repository = InMemoryDeductionRepository.from_configuration()

    deductions = {item.slug: item for item in repository.fetch_all()}

    assert list(deductions) == ["personal", "donation", "k-receipt"]
    assert deductions["personal"].min_amount == 10_000.0
    assert deductions["personal"].max_amount == 100_000.0
    assert deductions["k-receipt"].amount == 50_000.0


def test_from_seeds_copies_bounds() -> None:
    seed = DeductionSeed(slug="donation", name="Donation", amount=1.0, max_amount=2.0)

    repository = InMemoryDeductionRepository.from_seeds([seed])

    assert repository.fetch_by_slug("donation") == Deduction(
        slug="donation", name="Donation", amount=1.0, min_amount=0.0, max_amount=2.0
    )


def test_fetch_by_unknown_slug_raises_not_found() -> None:
    repository = InMemoryDeductionRepository()

    with pytest.raises(DeductionNotFoundError) as excinfo:
        repository.fetch_by_slug("personal")

    assert excinfo.value.slug == "personal"


def test_update_amount_replaces_only_the_amount() -> None:
    repository = InMemoryDeductionRepository.from_configuration()

    updated = repository.update_amount("personal", 70_000.0)

    assert updated.amount == 70_000.0
    assert updated.min_amount == 10_000.0
    assert repository.fetch_by_slug("personal").amount == 70_000.0


def test_update_unknown_slug_raises_not_found() -> None:
    repository = InMemoryDeductionRepository()

    with pytest.raises(DeductionNotFoundError):
        repository.update_amount("k-receipt", 1.0)


def test_fetch_all_returns_a_snapshot() -> None:
    repository = InMemoryDeductionRepository.from_configuration()

    snapshot = repository.fetch_all()
    repository.update_amount("donation", 1.0)

    assert next(item for item in snapshot if item.slug == "donation").amount == 100_000.0
