"""Command metadata ingestion and lookup."""

from cmdhints.metadata.parser import MetadataParser
from cmdhints.metadata.store import CommandMetadataStore

__all__ = [
    "MetadataParser",
    "CommandMetadataStore",
]
