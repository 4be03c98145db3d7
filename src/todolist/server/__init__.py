"""REST server for the relational task table."""

from .app import create_app

__all__ = ["create_app"]
