"""
Noodle API package.

Provides the FastAPI application for the Noodle student productivity service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
