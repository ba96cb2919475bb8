"""API routes package."""

from .edge_routes import router as edge_router, get_behavior_router

__all__ = ["edge_router", "get_behavior_router"]
