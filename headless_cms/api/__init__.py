"""HTTP API: router and dependencies."""

from headless_cms.api.router import api_router

__all__ = ["api_router"]
