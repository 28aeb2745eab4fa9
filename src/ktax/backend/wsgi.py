"""WSGI entrypoint for serving the K-Tax API."""

from ktax.backend.app import create_app

# WSGI servers look up a module-level variable named ``application``.
application = create_app()
