"""HTTP API for the task graph engine."""

from .api import create_app

__all__ = ["create_app"]
