"""HTTP surface: estimate, confirm and health endpoints."""

from .app import create_app
from .routes import health_router, router

__all__ = ["create_app", "router", "health_router"]
