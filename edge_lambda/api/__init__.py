"""API 엔드포인트 패키지 - export only."""

from .routes import edge_router, get_behavior_router

__all__ = ["edge_router", "get_behavior_router"]
