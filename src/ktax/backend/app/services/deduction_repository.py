"""In-memory deduction storage used as the default deduction store."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable, Sequence
from threading import Lock

from ktax.backend.app.models import Deduction
from ktax.backend.config.schema import DeductionSeed
from ktax.backend.config.tax_config import seed_deductions

from .errors import DeductionNotFoundError


class InMemoryDeductionRepository:
    """Thread-safe in-memory storage for deduction rows keyed by slug."""

    def __init__(self, deductions: Iterable[Deduction] = ()) -> None:
        self._records: "OrderedDict[str, Deduction]" = OrderedDict(
            (deduction.slug, deduction) for deduction in deductions
        )
        self._lock = Lock()

    @classmethod
    def from_seeds(cls, seeds: Iterable[DeductionSeed]) -> InMemoryDeductionRepository:
        return cls(
            Deduction(
                slug=seed.slug,
                name=seed.name,
                amount=seed.amount,
                min_amount=seed.min_amount,
                max_amount=seed.max_amount,
            )
            for seed in seeds
        )

    @classmethod
    def from_configuration(cls) -> InMemoryDeductionRepository:
        """Build a repository seeded from the packaged tax configuration."""

        return cls.from_seeds(seed_deductions())

    def fetch_all(self) -> Sequence[Deduction]:
        with self._lock:
            return list(self._records.values())

    def fetch_by_slug(self, slug: str) -> Deduction:
        with self._lock:
            deduction = self._records.get(slug)
        if deduction is None:
            raise DeductionNotFoundError(slug)
        return deduction

    def update_amount(self, slug: str, amount: float) -> Deduction:
        with self._lock:
            current = self._records.get(slug)
            if current is None:
                raise DeductionNotFoundError(slug)
            updated = current.model_copy(update={"amount": amount})
            self._records[slug] = updated
        return updated


__all__ = ["InMemoryDeductionRepository"]
