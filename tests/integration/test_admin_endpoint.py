"""Integration tests for the admin deduction endpoints."""

from __future__ import annotations

from http import HTTPStatus

import pytest
from flask.testing import FlaskClient

from ktax.backend.app import create_app
from ktax.backend.app.services import InMemoryDeductionRepository
from ktax.backend.app.services.errors import DeductionNotFoundError, StorageError


def test_update_personal_deduction(client: FlaskClient, deduction_store) -> None:
    response = client.post("/admin/deductions/personal", json={"amount": 70000.0})

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"personalDeduction": 70000.0}
    assert deduction_store.fetch_by_slug("personal").amount == 70000.0


def test_update_k_receipt_deduction(client: FlaskClient) -> None:
    response = client.post("/admin/deductions/k-receipt", json={"amount": 60000.0})

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"kReceipt": 60000.0}


@pytest.mark.parametrize(
    ("amount", "message"),
    [
        (9999.99, "amount should not be less than 10,000.00"),
        (100000.01, "amount should not be more than 100,000.00"),
    ],
)
def test_out_of_bounds_amount_is_rejected(
    client: FlaskClient, deduction_store, amount: float, message: str
) -> None:
    response = client.post("/admin/deductions/personal", json={"amount": amount})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {"error": "validation_error", "message": message}
    assert deduction_store.fetch_by_slug("personal").amount == 60000.0


def test_donation_cannot_be_configured(client: FlaskClient) -> None:
    response = client.post("/admin/deductions/donation", json={"amount": 1000.0})

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json()["error"] == "not_found"


def test_missing_amount_is_rejected(client: FlaskClient) -> None:
    response = client.post("/admin/deductions/personal", json={})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "bad_request"


def test_unseeded_store_reports_invalid_deduction() -> None:
    app = create_app(InMemoryDeductionRepository())
    app.config.update(TESTING=True)

    response = app.test_client().post("/admin/deductions/personal", json={"amount": 1.0})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {"error": "validation_error", "message": "invalid deduction"}


class _BrokenStore:
    def fetch_all(self):
        raise StorageError("database unavailable")

    def fetch_by_slug(self, slug):
        raise StorageError("database unavailable")

    def update_amount(self, slug, amount):
        raise StorageError("database unavailable")


def test_storage_failure_during_calculation_is_opaque() -> None:
    app = create_app(_BrokenStore())
    app.config.update(TESTING=True)

    response = app.test_client().post("/tax/calculations", json={"totalIncome": 1.0})

    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json() == {
        "error": "internal_error",
        "message": "Internal Server Error",
    }


class _VanishingStore(InMemoryDeductionRepository):
    """Repository whose rows disappear between lookup and write."""

    def update_amount(self, slug, amount):
        raise DeductionNotFoundError(slug)


def test_row_removed_before_write_returns_not_found() -> None:
    app = create_app(_VanishingStore.from_configuration())
    app.config.update(TESTING=True)

    response = app.test_client().post("/admin/deductions/personal", json={"amount": 20000.0})

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json() == {"error": "not_found", "message": "data not found"}
