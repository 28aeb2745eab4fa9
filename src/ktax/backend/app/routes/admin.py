"""Admin endpoints for adjusting configured deduction amounts."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from flask import Blueprint, request

from ktax.backend.app.extensions import current_admin_service
from ktax.backend.app.http import not_found_problem
from ktax.backend.app.models import (
    K_RECEIPT_SLUG,
    PERSONAL_SLUG,
    KReceiptDeductionResponse,
    PersonalDeductionResponse,
    WireModel,
)
from ktax.backend.services import build_model_response, parse_deduction_request

blueprint = Blueprint("admin", __name__, url_prefix="/admin")

# Slugs an admin may adjust, with the response shape for each.
_RESPONSE_BUILDERS: Mapping[str, Callable[[float], WireModel]] = {
    PERSONAL_SLUG: lambda amount: PersonalDeductionResponse(personal_deduction=amount),
    K_RECEIPT_SLUG: lambda amount: KReceiptDeductionResponse(k_receipt=amount),
}


@blueprint.post("/deductions/<string:slug>")
def update_deduction(slug: str) -> tuple[Any, int]:
    """Set a new amount for the ``slug`` deduction within its bounds."""

    build_response = _RESPONSE_BUILDERS.get(slug)
    if build_response is None:
        return not_found_problem(f"deduction '{slug}' cannot be configured").to_response()

    body = parse_deduction_request(request)
    deduction = current_admin_service().update_deduction(slug, body.amount)

    return build_model_response(build_response(deduction.amount))
