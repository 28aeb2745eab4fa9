"""Resolve configured deductions and cap claimed allowances."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from ktax.backend.app.models import (
    DONATION_SLUG,
    K_RECEIPT_SLUG,
    PERSONAL_SLUG,
    Allowance,
    Deduction,
    DeductionConfig,
)
from ktax.backend.config.tax_config import default_deduction_amounts

from .errors import DeductionNotFoundError

_DEFAULT_NAMES: Mapping[str, str] = {
    PERSONAL_SLUG: "Personal Deduction",
    DONATION_SLUG: "Donation",
    K_RECEIPT_SLUG: "K-Receipt",
}


class DeductionStore(Protocol):
    """Capability interface onto persisted deduction rows.

    Implementations raise :class:`DeductionNotFoundError` when no row matches
    and :class:`StorageError` for any other backend failure.
    """

    def fetch_all(self) -> Sequence[Deduction]:
        ...

    def fetch_by_slug(self, slug: str) -> Deduction:
        ...

    def update_amount(self, slug: str, amount: float) -> Deduction:
        ...


def default_deduction(slug: str, amounts: Mapping[str, float] | None = None) -> Deduction:
    """Return the unbounded fallback deduction for ``slug``."""

    defaults = default_deduction_amounts() if amounts is None else amounts
    return Deduction(
        slug=slug,
        name=_DEFAULT_NAMES.get(slug, slug),
        amount=defaults[slug],
    )


def resolve_deduction_config(store: DeductionStore) -> DeductionConfig:
    """Merge stored deductions with defaults for every tracked slug.

    A store reporting no rows is treated like an empty result. Any other
    storage failure propagates to the caller.
    """

    try:
        stored: Iterable[Deduction] = store.fetch_all()
    except DeductionNotFoundError:
        stored = ()

    # Presence is decided by slug, so a stored amount of 0 is kept as is.
    by_slug = {deduction.slug: deduction for deduction in stored}
    defaults = default_deduction_amounts()

    def _pick(slug: str) -> Deduction:
        found = by_slug.get(slug)
        return found if found is not None else default_deduction(slug, defaults)

    return DeductionConfig(
        personal=_pick(PERSONAL_SLUG),
        donation=_pick(DONATION_SLUG),
        k_receipt=_pick(K_RECEIPT_SLUG),
    )


def clamp_allowance_amount(
    allowance_type: str,
    allowances: Iterable[Allowance],
    deduction: Deduction,
) -> float:
    """Sum the allowances of ``allowance_type`` and cap them at the deduction amount.

    A deduction amount of zero leaves the sum uncapped.
    """

    amount = sum(
        allowance.amount
        for allowance in allowances
        if allowance.allowance_type == allowance_type
    )
    if deduction.amount != 0 and amount > deduction.amount:
        return deduction.amount
    return float(amount)


__all__ = [
    "DeductionStore",
    "clamp_allowance_amount",
    "default_deduction",
    "resolve_deduction_config",
]
