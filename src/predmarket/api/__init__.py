"""HTTP API: routers and exception handlers."""

from predmarket.api.errors import register_exception_handlers
from predmarket.api.router import api_router

__all__ = ["api_router", "register_exception_handlers"]
