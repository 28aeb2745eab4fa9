"""Expose the bracket table and deduction defaults to API consumers."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from ktax.backend.app.services.calculators import format_bracket_label, format_percentage
from ktax.backend.config.tax_config import (
    default_deduction_amounts,
    load_tax_configuration,
    tax_brackets,
)
from ktax.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata surfaced by the health endpoint."""

    return {
        "version": get_project_version(),
        "bracket_count": len(load_tax_configuration().brackets),
    }


@blueprint.get("/tax-brackets")
def list_tax_brackets():
    """Return the progressive bracket table with display labels."""

    brackets = [
        {
            "level": format_bracket_label(bracket),
            "minIncome": bracket.min_income,
            "maxIncome": None if bracket.is_unbounded else bracket.max_income,
            "rate": bracket.rate,
            "rateLabel": format_percentage(bracket.rate),
        }
        for bracket in tax_brackets()
    ]
    return jsonify(
        {
            "brackets": brackets,
            "defaultDeductions": default_deduction_amounts(),
        }
    ), 200
