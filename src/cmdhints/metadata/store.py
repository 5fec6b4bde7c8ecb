"""In-memory registry of command metadata."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from cmdhints.core.cache import ResultCache
from cmdhints.domain.errors import ParseError
from cmdhints.domain.models import CommandMetadata, FlagMetadata, union_flags
from cmdhints.domain.protocols.metadata import MetadataStore
from cmdhints.domain.result import Ok, Result
from cmdhints.logger import get_logger
from cmdhints.metadata.parser import MetadataParser

logger = get_logger("metadata.store")


class CommandMetadataStore(MetadataStore):
    """Keeps every known command keyed by name, in registration order.

    Parsed files are memoized by path so re-loading an unchanged command
    within ``cache_ttl`` milliseconds skips the disk.
    """

    def __init__(
        self,
        max_cache_size: int = 100,
        cache_ttl: float = 3_600_000,
        *,
        parser: Optional[MetadataParser] = None,
    ) -> None:
        self._parser = parser or MetadataParser()
        self._cache: ResultCache[CommandMetadata] = ResultCache(max_size=max_cache_size, ttl=cache_ttl)
        self._commands: dict[str, CommandMetadata] = {}

    def register_command(self, metadata: CommandMetadata) -> None:
        self._commands[metadata.name] = metadata

    def get_command(self, name: str) -> Optional[CommandMetadata]:
        return self._commands.get(name)

    def has_command(self, name: str) -> bool:
        return name in self._commands

    def get_all_commands(self) -> dict[str, CommandMetadata]:
        return dict(self._commands)

    def all_flags(self) -> list[FlagMetadata]:
        """Union of every command's flags; the first definition of a name wins."""
        return union_flags(self._commands.values())

    def find_flag(self, flag: str) -> Optional[FlagMetadata]:
        """Look a flag up by name or alias across all commands."""
        for candidate in self.all_flags():
            if candidate.matches(flag):
                return candidate
        return None

    async def load_command(self, path: str | Path) -> Result[CommandMetadata, ParseError]:
        key = str(Path(path).resolve())
        cached = self._cache.get(key)
        if cached is not None:
            return Ok(cached)

        result = await self._parser.parse_command_file(path)
        if result.ok:
            self._cache.set(key, result.value)
            self.register_command(result.value)
        return result

    async def load_commands_from_directory(
        self, directory: str | Path
    ) -> Result[dict[str, CommandMetadata], ParseError]:
        result = await self._parser.load_directory(directory)
        if result.ok:
            for metadata in result.value.values():
                self.register_command(metadata)
            logger.info(f"Registered {len(result.value)} command(s) from {directory}")
        else:
            logger.warning(f"Cannot load commands from {directory}")
        return result

    def clear(self) -> None:
        self._cache.clear()
        self._commands.clear()

    def __len__(self) -> int:
        return len(self._commands)
