"""Utilities for serialising service results."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Tuple

from flask import jsonify

from ktax.backend.app.models import WireModel

ResponseTuple = Tuple[Any, int]


def build_model_response(model: WireModel, status: int = HTTPStatus.OK) -> ResponseTuple:
    """Return a Flask JSON response for ``model`` using its wire aliases."""

    return jsonify(model.to_payload()), int(status)
