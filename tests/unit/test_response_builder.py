"""Unit tests for response formatting helpers."""

from __future__ import annotations

from flask import Flask

from ktax.backend.app.models import PersonalDeductionResponse
from ktax.backend.services.response_builder import build_model_response


def test_build_model_response_returns_json(app: Flask) -> None:
    """Formatting helper should generate a JSON response tuple."""

    with app.app_context():
        response, status = build_model_response(
            PersonalDeductionResponse(personal_deduction=70_000.0)
        )

    assert status == 200
    assert response.get_json() == {"personalDeduction": 70_000.0}


def test_build_model_response_honours_status(app: Flask) -> None:
    with app.app_context():
        _, status = build_model_response(
            PersonalDeductionResponse(personal_deduction=1.0), status=201
        )

    assert status == 201
