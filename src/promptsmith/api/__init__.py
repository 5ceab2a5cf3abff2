"""HTTP API for formatting and inspecting templates."""

from .app import create_app

__all__ = ["create_app"]
