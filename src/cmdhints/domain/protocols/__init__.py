"""Protocols describing the seams between components."""

from cmdhints.domain.protocols.cache import Cache
from cmdhints.domain.protocols.metadata import MetadataStore

__all__ = [
    "Cache",
    "MetadataStore",
]
