"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify

INTERNAL_ERROR_MESSAGE = "Internal Server Error"
NOT_FOUND_MESSAGE = "data not found"


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload carrying a machine-readable code and a message."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the serialisable payload for this problem response."""

        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Convert the problem payload into a Flask response tuple."""

        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Convenience factory mirroring Flask's ``jsonify`` interface."""

    additional: Mapping[str, Any] | None = extra or None
    return ProblemResponse(error=error, status=int(status), message=message, extra=additional)


def validation_problem(message: str, **extra: Any) -> ProblemResponse:
    return problem_response(
        "validation_error", status=HTTPStatus.BAD_REQUEST, message=message, **extra
    )


def not_found_problem(message: str = NOT_FOUND_MESSAGE) -> ProblemResponse:
    return problem_response("not_found", status=HTTPStatus.NOT_FOUND, message=message)


def internal_error_problem() -> ProblemResponse:
    """Opaque response for storage and other unexpected failures."""

    return problem_response(
        "internal_error",
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        message=INTERNAL_ERROR_MESSAGE,
    )


__all__ = [
    "INTERNAL_ERROR_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "ProblemResponse",
    "internal_error_problem",
    "not_found_problem",
    "problem_response",
    "validation_problem",
]
