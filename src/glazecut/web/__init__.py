"""FastAPI REST API for cutting list layouts.

Usage:
    uvicorn glazecut.web:app --reload
"""

from glazecut.web.app import app, create_app

__all__ = ["app", "create_app"]
