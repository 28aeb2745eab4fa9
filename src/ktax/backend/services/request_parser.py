"""Helpers for binding incoming requests to typed models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from flask import Request
from pydantic import ValidationError
from werkzeug.exceptions import BadRequest

from ktax.backend.app.models import (
    DeductionRequest,
    TaxRequest,
    WireModel,
    format_validation_error,
)

CSV_UPLOAD_FIELD = "taxFile"
CSV_MIME_TYPES = frozenset({"text/csv", "application/csv"})

_ModelT = TypeVar("_ModelT", bound=WireModel)


def parse_json_payload(req: Request) -> dict[str, Any]:
    """Extract a JSON object from ``req``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    return dict(data)


def _bind(req: Request, model: type[_ModelT]) -> _ModelT:
    payload = parse_json_payload(req)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise BadRequest(format_validation_error(exc)) from exc


def parse_tax_request(req: Request) -> TaxRequest:
    """Bind the body of ``req`` to a :class:`TaxRequest`."""

    return _bind(req, TaxRequest)


def parse_deduction_request(req: Request) -> DeductionRequest:
    """Bind the body of ``req`` to a :class:`DeductionRequest`."""

    return _bind(req, DeductionRequest)


def read_csv_upload(req: Request, field: str = CSV_UPLOAD_FIELD) -> bytes:
    """Return the raw bytes of the CSV file uploaded under ``field``."""

    upload = req.files.get(field)
    if upload is None or not upload.filename:
        raise BadRequest(f"Request must include a CSV file in the '{field}' field")

    if upload.mimetype not in CSV_MIME_TYPES:
        raise BadRequest("support only csv file")

    return upload.read()


__all__ = [
    "CSV_MIME_TYPES",
    "CSV_UPLOAD_FIELD",
    "parse_deduction_request",
    "parse_json_payload",
    "parse_tax_request",
    "read_csv_upload",
]
