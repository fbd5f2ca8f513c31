"""FastAPI backend for dishwasher control."""

from .app import create_app

__all__ = [
    "create_app",
]
