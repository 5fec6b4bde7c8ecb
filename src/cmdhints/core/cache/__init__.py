"""Caching implementations for cmdhints."""

from cmdhints.core.cache.result_cache import CacheEntry, ResultCache

__all__ = [
    "CacheEntry",
    "ResultCache",
]
