"""HTTP surface for the release calendar."""

from .app import create_app

__all__ = ["create_app"]
