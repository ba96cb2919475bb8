"""Repository implementations package."""

from .cache_entry_repository import CacheEntryRepository

__all__ = ["CacheEntryRepository"]
