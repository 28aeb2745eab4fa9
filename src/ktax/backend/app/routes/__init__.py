"""Blueprint registrations for application routes."""

from flask import Flask

from .admin import blueprint as admin_blueprint
from .config import blueprint as config_blueprint
from .tax import blueprint as tax_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(tax_blueprint)
    app.register_blueprint(admin_blueprint)
    app.register_blueprint(config_blueprint)
