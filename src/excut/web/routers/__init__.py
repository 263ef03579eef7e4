"""API routers."""

from .cutlist import router as cutlist_router

__all__ = ["cutlist_router"]
