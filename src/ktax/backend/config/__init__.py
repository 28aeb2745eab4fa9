"""Tax configuration loading and validation."""
