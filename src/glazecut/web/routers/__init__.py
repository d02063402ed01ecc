"""API routers for the REST API."""

from glazecut.web.routers.export import router as export_router
from glazecut.web.routers.layouts import router as layouts_router

__all__ = [
    "export_router",
    "layouts_router",
]
