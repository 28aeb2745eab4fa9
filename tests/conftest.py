"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from ktax.backend.app import create_app  # noqa: E402
from ktax.backend.app.services import InMemoryDeductionRepository  # noqa: E402

DATA_DIR = ROOT / "tests" / "data"


@pytest.fixture()
def deduction_store() -> InMemoryDeductionRepository:
    """Return a fresh repository seeded from the packaged configuration."""

    return InMemoryDeductionRepository.from_configuration()


@pytest.fixture()
def app(deduction_store: InMemoryDeductionRepository) -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app(deduction_store)
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
