"""
Debatrix API package.

Provides the FastAPI application for the Debatrix debate orchestration service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
