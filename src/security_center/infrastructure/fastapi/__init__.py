"""FastAPI application factory and service container."""

from .app import create_app
from .container import ServiceContainer

__all__ = ["ServiceContainer", "create_app"]
