"""Application factory for the K-Tax backend."""

from __future__ import annotations

import logging
import os
from http import HTTPStatus
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from ktax.backend.app.services import DeductionStore, InMemoryDeductionRepository
from ktax.backend.app.services.errors import DeductionNotFoundError, StorageError
from ktax.backend.config.schema import ConfigurationError

from .extensions import init_deduction_store
from .http import (
    internal_error_problem,
    not_found_problem,
    problem_response,
    validation_problem,
)

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS_ENV = "KTAX_ALLOWED_ORIGINS"


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app(deduction_store: DeductionStore | None = None) -> Flask:
    """Create and configure the Flask application instance.

    ``deduction_store`` defaults to an in-memory repository seeded from the
    packaged tax configuration.
    """

    # Routes pull in the request helpers, which import the models package.
    from .routes import register_routes
    from .routes.config import get_configuration_metadata

    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(os.getenv(ALLOWED_ORIGINS_ENV))

    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    origins = sorted(allowed_origins)
    CORS(
        app,
        resources={
            r"/tax/*": {"origins": origins},
            r"/admin/*": {"origins": origins},
            r"/config/*": {"origins": origins},
        },
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    store = deduction_store if deduction_store is not None else (
        InMemoryDeductionRepository.from_configuration()
    )
    init_deduction_store(app, store)

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_configuration_metadata()}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        logger.info("Rejected malformed request: %s", message)
        return problem_response(
            "bad_request", status=HTTPStatus.BAD_REQUEST, message=message
        ).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Surface domain validation errors to clients."""

        logger.info("Rejected invalid input: %s", error)
        return validation_problem(str(error)).to_response()

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error: ConfigurationError):
        """Treat a broken tax configuration as a server fault, not client input."""

        logger.error("Tax configuration failure: %s", error, exc_info=error)
        return internal_error_problem().to_response()

    @app.errorhandler(DeductionNotFoundError)
    def handle_not_found(error: DeductionNotFoundError):
        logger.warning("Deduction lookup failed: %s", error)
        return not_found_problem().to_response()

    @app.errorhandler(StorageError)
    def handle_storage_error(error: StorageError):
        """Hide storage failures behind an opaque internal error."""

        logger.error("Deduction store failure: %s", error, exc_info=error)
        return internal_error_problem().to_response()

    return app
