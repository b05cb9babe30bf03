"""Caching module for promptline."""

from .memory import MemoryCache

__all__ = [
    "MemoryCache",
]
