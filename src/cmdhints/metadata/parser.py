"""Markdown command definitions with YAML front matter.

A command file looks like::

    ---
    description: Framework-detecting project builder
    description-ja: フレームワーク検出付きプロジェクトビルダー
    category: Development
    argument-hint: "[target] [--flags]"
    allowed-tools: [Read, Bash]
    flags:
      - plan
      - {name: uc, alias: ultracompressed, description: Token-efficient output}
    ---
    # /build
    ...

The file's base name is the command name.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from cmdhints.domain.errors import ErrorCode, ParseError
from cmdhints.domain.models import CommandMetadata, FlagMetadata
from cmdhints.domain.result import Err, Ok, Result
from cmdhints.logger import get_logger

logger = get_logger("metadata.parser")

FRONT_MATTER_RE = re.compile(r"^---\s*\n(.*?)\n---", re.DOTALL)

_LOCALIZED_DESCRIPTION = "description-"
_LOCALIZED_ARGUMENT_HINT = "argument-hint-"


def _localized(data: dict[str, Any], prefix: str) -> dict[str, str]:
    return {
        key[len(prefix):]: str(value)
        for key, value in data.items()
        if isinstance(key, str) and key.startswith(prefix) and value is not None
    }


def _tools(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [tool.strip() for tool in value.split(",") if tool.strip()]
    return [str(tool) for tool in value]


def _flags(value: Any) -> list[FlagMetadata]:
    flags: list[FlagMetadata] = []
    for item in value or []:
        if isinstance(item, str):
            flags.append(FlagMetadata(name=item))
        elif isinstance(item, dict):
            flags.append(
                FlagMetadata(
                    name=item.get("name", ""),
                    alias=item.get("alias"),
                    description=item.get("description"),
                    localized_descriptions=_localized(item, _LOCALIZED_DESCRIPTION),
                )
            )
    return flags


class MetadataParser:
    """Turns command definition files into :class:`CommandMetadata`."""

    def extract_front_matter(self, content: str) -> str:
        """Return the YAML between the leading ``---`` fences, or an empty string."""
        match = FRONT_MATTER_RE.match(content)
        if match and match.group(1):
            return match.group(1).strip()
        return ""

    def parse_yaml(self, text: str) -> Result[dict[str, Any], ParseError]:
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as e:
            line = getattr(getattr(e, "problem_mark", None), "line", None)
            message = f"{e}" if line is None else f"line {line + 1}: {e}"
            return Err(ParseError(type=ErrorCode.YAML_PARSE_ERROR, message=message))

        if not isinstance(parsed, dict):
            return Err(
                ParseError(type=ErrorCode.YAML_PARSE_ERROR, message="Front matter is not a mapping")
            )
        return Ok(parsed)

    def build_metadata(self, name: str, data: dict[str, Any]) -> Result[CommandMetadata, ParseError]:
        try:
            metadata = CommandMetadata(
                name=name,
                description=str(data.get("description") or ""),
                localized_descriptions=_localized(data, _LOCALIZED_DESCRIPTION),
                category=data.get("category"),
                argument_hint=data.get("argument-hint"),
                localized_argument_hints=_localized(data, _LOCALIZED_ARGUMENT_HINT),
                allowed_tools=_tools(data.get("allowed-tools")),
                flags=_flags(data.get("flags")),
            )
        except ValidationError as e:
            return Err(ParseError(type=ErrorCode.YAML_PARSE_ERROR, message=str(e)))
        return Ok(metadata)

    async def parse_command_file(self, path: str | Path) -> Result[CommandMetadata, ParseError]:
        """Parse one ``<name>.md`` file."""
        path = Path(path)
        try:
            content = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Cannot read command file {path}: {e}")
            return Err(ParseError(type=ErrorCode.FILE_READ_ERROR, path=str(path)))

        front_matter = self.extract_front_matter(content)
        if not front_matter:
            return Err(
                ParseError(type=ErrorCode.YAML_PARSE_ERROR, message="No YAML front matter found", path=str(path))
            )

        parsed = self.parse_yaml(front_matter)
        if not parsed.ok:
            return parsed

        return self.build_metadata(path.stem, parsed.value)

    async def load_directory(self, directory: str | Path) -> Result[dict[str, CommandMetadata], ParseError]:
        """Recursively parse every ``*.md`` file below ``directory``.

        Files that fail to parse and unreadable subdirectories are skipped.
        """
        directory = Path(directory)
        if not directory.is_dir():
            return Err(ParseError(type=ErrorCode.FILE_READ_ERROR, path=str(directory)))

        commands: dict[str, CommandMetadata] = {}
        await self._scan(directory, commands)
        logger.debug(f"Loaded {len(commands)} command(s) from {directory}")
        return Ok(commands)

    async def _scan(self, directory: Path, commands: dict[str, CommandMetadata]) -> None:
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            logger.debug(f"Skipping unreadable directory {directory}: {e}")
            return

        for entry in entries:
            if entry.is_dir():
                await self._scan(entry, commands)
            elif entry.is_file() and entry.suffix == ".md":
                result = await self.parse_command_file(entry)
                if result.ok:
                    commands[result.value.name] = result.value
                else:
                    logger.debug(f"Skipping {entry}: {result.error.type.value}")
