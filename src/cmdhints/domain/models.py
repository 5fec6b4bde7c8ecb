"""Domain models for commands, flags, translations, candidates and history."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "FlagMetadata",
    "CommandMetadata",
    "union_flags",
    "TranslationResource",
    "CandidateKind",
    "CompletionCandidate",
    "HistoryEntry",
    "HistoryRecord",
    "HistoryFile",
    "SEMVER_PATTERN",
    "REQUIRED_SECTIONS",
    "OPTIONAL_SECTIONS",
]

SEMVER_PATTERN = r"^\d+\.\d+\.\d+$"

REQUIRED_SECTIONS = ("commands", "flags", "errors")
OPTIONAL_SECTIONS = ("arguments", "flag_suggestions", "flag_examples", "conflicts", "labels")


def _bare_flag(value: Any) -> Any:
    if isinstance(value, str):
        return value.removeprefix("--")
    return value


class FlagMetadata(BaseModel):
    """A flag accepted by a command. Names are stored without the ``--``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    alias: Optional[str] = None
    description: Optional[str] = None
    localized_descriptions: dict[str, str] = Field(default_factory=dict)

    @field_validator("name", "alias", mode="before")
    @classmethod
    def _strip_dashes(cls, value: Any) -> Any:
        return _bare_flag(value)

    @property
    def option(self) -> str:
        """Full flag as typed on the command line."""
        return f"--{self.name}"

    def description_for(self, locale: str) -> Optional[str]:
        return self.localized_descriptions.get(locale)

    def matches(self, flag: str) -> bool:
        """Check a typed flag (with or without ``--``) against name and alias."""
        bare = flag.removeprefix("--")
        return bare == self.name or (self.alias is not None and bare == self.alias)


class CommandMetadata(BaseModel):
    """Read-only description of one slash command."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    localized_descriptions: dict[str, str] = Field(default_factory=dict)
    category: Optional[str] = None
    argument_hint: Optional[str] = None
    localized_argument_hints: dict[str, str] = Field(default_factory=dict)
    allowed_tools: list[str] = Field(default_factory=list)
    flags: list[FlagMetadata] = Field(default_factory=list)

    def description_for(self, locale: str) -> Optional[str]:
        return self.localized_descriptions.get(locale)

    def argument_hint_for(self, locale: str) -> Optional[str]:
        return self.localized_argument_hints.get(locale)

    def find_flag(self, flag: str) -> Optional[FlagMetadata]:
        for candidate in self.flags:
            if candidate.matches(flag):
                return candidate
        return None


def union_flags(commands: Iterable[CommandMetadata]) -> list[FlagMetadata]:
    """Flags of every command; the first definition of a name wins."""
    seen: dict[str, FlagMetadata] = {}
    for command in commands:
        for flag in command.flags:
            seen.setdefault(flag.name, flag)
    return list(seen.values())


class TranslationResource(BaseModel):
    """One locale bundle, validated on load.

    Sections are free-form nested objects; leaves are display strings
    addressed with dotted keys such as ``commands.build.description``.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    version: str = Field(..., pattern=SEMVER_PATTERN)
    commands: dict[str, Any]
    flags: dict[str, Any]
    errors: dict[str, Any]
    arguments: dict[str, Any] = Field(default_factory=dict)
    flag_suggestions: dict[str, Any] = Field(default_factory=dict)
    flag_examples: dict[str, Any] = Field(default_factory=dict)
    conflicts: dict[str, Any] = Field(default_factory=dict)
    labels: dict[str, Any] = Field(default_factory=dict)

    def tree(self) -> dict[str, Any]:
        """Top-level mapping walked by :meth:`lookup`."""
        root: dict[str, Any] = {"version": self.version}
        for section in REQUIRED_SECTIONS + OPTIONAL_SECTIONS:
            root[section] = getattr(self, section)
        root.update(self.model_extra or {})
        return root

    def lookup(self, key: str) -> Optional[str]:
        """Resolve a dotted key, failing closed on a missing segment or non-string leaf."""
        node: Any = self.tree()
        for segment in key.split("."):
            if isinstance(node, dict) and segment in node:
                node = node[segment]
            else:
                return None
        return node if isinstance(node, str) else None


class CandidateKind(str, Enum):
    COMMAND = "command"
    FLAG = "flag"
    ARGUMENT = "argument"
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(slots=True)
class CompletionCandidate:
    """A scored suggestion returned to the caller. Never persisted."""

    name: str
    description: str = ""
    score: float = 0.0
    category: Optional[str] = None
    alias: Optional[str] = None
    kind: CandidateKind = CandidateKind.COMMAND

    @property
    def value(self) -> str:
        return self.name


@dataclass(slots=True)
class HistoryEntry:
    """Usage ledger record, mutated only while the ledger lock is held."""

    command: str
    frequency: int
    last_used: float  # epoch milliseconds

    def to_record(self) -> dict[str, Any]:
        return {"command": self.command, "frequency": self.frequency, "lastUsed": self.last_used}


class HistoryRecord(BaseModel):
    """On-disk shape of a ledger entry."""

    model_config = ConfigDict(populate_by_name=True)

    command: str = Field(..., min_length=1)
    frequency: int = Field(..., ge=0)
    last_used: float = Field(..., alias="lastUsed")

    def to_entry(self) -> HistoryEntry:
        return HistoryEntry(command=self.command, frequency=self.frequency, last_used=self.last_used)


class HistoryFile(BaseModel):
    """On-disk shape of the whole ledger."""

    version: str = "1.0.0"
    entries: list[HistoryRecord] = Field(default_factory=list)
