"""Services implementation package."""

from .cache_service import CacheService
from .origin_service import Origin

__all__ = ["CacheService", "Origin"]
