"""Validate and persist bounded deduction amount changes."""

from __future__ import annotations

from ktax.backend.app.models import Deduction

from .calculators import format_amount
from .deductions import DeductionStore
from .errors import (
    DeductionAmountError,
    DeductionInvalidError,
    DeductionNotFoundError,
    StorageError,
)


class AdminService:
    """Apply admin deduction updates against a deduction store."""

    def __init__(self, store: DeductionStore) -> None:
        self._store = store

    def validate_deduction_request(self, slug: str, amount: float) -> Deduction:
        """Check ``amount`` against the bounds stored for ``slug``.

        Lookup failures are reported as :class:`DeductionInvalidError` without
        revealing whether the slug exists.
        """

        try:
            deduction = self._store.fetch_by_slug(slug)
        except (DeductionNotFoundError, StorageError) as exc:
            raise DeductionInvalidError() from exc

        if amount < deduction.min_amount:
            raise DeductionAmountError(
                f"amount should not be less than {format_amount(deduction.min_amount, 2)}"
            )

        # max_amount of 0 means unbounded
        if deduction.max_amount > 0 and amount > deduction.max_amount:
            raise DeductionAmountError(
                f"amount should not be more than {format_amount(deduction.max_amount, 2)}"
            )

        return deduction

    def update_deduction(self, slug: str, amount: float) -> Deduction:
        """Validate and store the new ``amount`` for ``slug``.

        A row that disappears before the write surfaces as
        :class:`DeductionNotFoundError`.
        """

        self.validate_deduction_request(slug, amount)
        return self._store.update_amount(slug, amount)


__all__ = ["AdminService"]
