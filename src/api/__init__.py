"""HTTP service boundary: intake webhook and draft endpoints."""

from src.api.server import create_app

__all__ = ["create_app"]
