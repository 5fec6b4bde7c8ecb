"""Persistence infrastructure."""

from cmdhints.infrastructure.json_store import JsonFileStore

__all__ = [
    "JsonFileStore",
]
