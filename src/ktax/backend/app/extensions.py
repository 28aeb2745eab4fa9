"""Access to per-application collaborators registered by the app factory."""

from __future__ import annotations

from flask import Flask, current_app

from ktax.backend.app.services import AdminService, DeductionStore, TaxService

DEDUCTION_STORE_KEY = "ktax.deduction_store"


def init_deduction_store(app: Flask, store: DeductionStore) -> None:
    app.extensions[DEDUCTION_STORE_KEY] = store


def current_deduction_store() -> DeductionStore:
    return current_app.extensions[DEDUCTION_STORE_KEY]


def current_tax_service() -> TaxService:
    return TaxService(current_deduction_store())


def current_admin_service() -> AdminService:
    return AdminService(current_deduction_store())
