"""Backend services for the K-Tax API."""
