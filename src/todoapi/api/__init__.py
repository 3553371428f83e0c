"""HTTP API routers."""

from todoapi.api.routes import router

__all__ = ["router"]
