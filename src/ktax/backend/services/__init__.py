"""Request parsing and response helpers for the K-Tax HTTP layer."""

from .request_parser import (
    parse_deduction_request,
    parse_json_payload,
    parse_tax_request,
    read_csv_upload,
)
from .response_builder import build_model_response

__all__ = [
    "build_model_response",
    "parse_deduction_request",
    "parse_json_payload",
    "parse_tax_request",
    "read_csv_upload",
]
