"""FastAPI REST API for cut list optimization.

Usage:
    uvicorn excut.web:app --reload
"""

from excut.web.app import app, create_app

__all__ = ["app", "create_app"]
