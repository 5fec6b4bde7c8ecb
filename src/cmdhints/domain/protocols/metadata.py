"""Metadata store protocol consumed by completion and hints."""

from typing import Optional, Protocol

from cmdhints.domain.models import CommandMetadata

__all__ = ["MetadataStore"]


class MetadataStore(Protocol):
    """Read-only view of the known commands.

    Completion and hint components only ever read through this protocol;
    ingestion (parsing command files, registering records) happens elsewhere.
    """

    def get_command(self, name: str) -> Optional[CommandMetadata]:
        """Return the metadata for ``name`` or None when unknown."""
        ...

    def get_all_commands(self) -> dict[str, CommandMetadata]:
        """Return all commands keyed by name, in registration order."""
        ...

    def has_command(self, name: str) -> bool:
        ...
