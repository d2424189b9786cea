"""
Client-side cache bindings.
"""

from .binding import (
    CacheBinding,
    CacheEntry,
    Fetcher,
)

__all__ = [
    "CacheBinding",
    "CacheEntry",
    "Fetcher",
]
