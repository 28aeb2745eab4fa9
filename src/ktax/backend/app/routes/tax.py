"""REST endpoints for tax calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from ktax.backend.app.extensions import current_tax_service
from ktax.backend.services import build_model_response, parse_tax_request, read_csv_upload

blueprint = Blueprint("tax", __name__, url_prefix="/tax")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Calculate tax for the submitted JSON payload."""

    tax_request = parse_tax_request(request)
    result = current_tax_service().calculate(tax_request)

    return build_model_response(result)


@blueprint.post("/calculations/upload-csv")
def upload_calculations() -> tuple[Any, int]:
    """Calculate tax for every row of an uploaded CSV file."""

    content = read_csv_upload(request)
    result = current_tax_service().calculate_batch(content)

    return build_model_response(result)
