"""Related-flag suggestions and conflict detection.

The relation and conflict tables are static. Display text comes from the
``flag_suggestions``, ``flag_examples`` and ``conflicts`` translation
sections, with the raw reason or a generated sentence as fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cmdhints.i18n.resolver import TranslationResolver

__all__ = [
    "ConflictSeverity",
    "FlagRelation",
    "FlagSuggestion",
    "FlagConflict",
    "FlagExample",
    "FLAG_RELATIONS",
    "FLAG_CONFLICTS",
    "FlagCombinationSuggestor",
]


class ConflictSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class FlagRelation:
    flag: str
    reason: str


@dataclass(frozen=True, slots=True)
class FlagSuggestion:
    flag: str
    reason: str
    description: str
    example: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FlagConflict:
    flags: tuple[str, str]
    severity: ConflictSeverity
    message: str


@dataclass(frozen=True, slots=True)
class FlagExample:
    suggestion: str
    example: str
    description: str


FLAG_RELATIONS: dict[str, tuple[FlagRelation, ...]] = {
    "--think": (
        FlagRelation("--seq", "complex_analysis"),
        FlagRelation("--persona-analyzer", "root_cause_analysis"),
    ),
    "--think-hard": (
        FlagRelation("--seq", "deep_analysis"),
        FlagRelation("--c7", "pattern_research"),
        FlagRelation("--persona-architect", "architectural_analysis"),
    ),
    "--ultrathink": (
        FlagRelation("--seq", "critical_analysis"),
        FlagRelation("--c7", "comprehensive_research"),
        FlagRelation("--all-mcp", "maximum_capability"),
    ),
    "--magic": (
        FlagRelation("--persona-frontend", "ui_development"),
        FlagRelation("--c7", "component_patterns"),
    ),
    "--play": (
        FlagRelation("--persona-qa", "testing_workflow"),
        FlagRelation("--seq", "test_planning"),
    ),
    "--uc": (FlagRelation("--think", "token_optimization"),),
}

# (first, second, severity, message key)
FLAG_CONFLICTS: tuple[tuple[str, str, ConflictSeverity, str], ...] = (
    ("--no-mcp", "--seq", ConflictSeverity.ERROR, "conflicts.no_mcp_with_mcp_flag"),
    ("--no-mcp", "--c7", ConflictSeverity.ERROR, "conflicts.no_mcp_with_mcp_flag"),
    ("--no-mcp", "--magic", ConflictSeverity.ERROR, "conflicts.no_mcp_with_mcp_flag"),
    ("--no-mcp", "--play", ConflictSeverity.ERROR, "conflicts.no_mcp_with_mcp_flag"),
    ("--uc", "--verbose", ConflictSeverity.WARNING, "conflicts.uc_with_verbose"),
    ("--answer-only", "--plan", ConflictSeverity.WARNING, "conflicts.answer_only_with_plan"),
)


def _option(flag: str) -> str:
    return flag if flag.startswith("--") else f"--{flag}"


def _example_key(current: str, suggested: str) -> str:
    return f"flag_examples.{current.removeprefix('--')}_{suggested.removeprefix('--')}"


class FlagCombinationSuggestor:
    """Suggests flags that pair well with a given flag and flags that clash."""

    def __init__(self, resolver: TranslationResolver) -> None:
        self._resolver = resolver

    def suggest_related_flags(self, flag: str) -> list[FlagSuggestion]:
        """Flags commonly combined with ``flag``; empty when it has no relations."""
        current = _option(flag)
        suggestions = []
        for relation in FLAG_RELATIONS.get(current, ()):
            example_key = _example_key(current, relation.flag)
            example = self._resolver.translate(example_key)
            suggestions.append(
                FlagSuggestion(
                    flag=relation.flag,
                    reason=relation.reason,
                    description=self._resolver.text(
                        f"flag_suggestions.{relation.reason}", default=relation.reason
                    ),
                    example=example.value if example.ok else None,
                )
            )
        return suggestions

    def detect_conflicts(self, flags: list[str]) -> list[FlagConflict]:
        """Every conflicting pair present in ``flags``, in table order."""
        present = {_option(flag) for flag in flags}
        conflicts = []
        for first, second, severity, message_key in FLAG_CONFLICTS:
            if first in present and second in present:
                conflicts.append(
                    FlagConflict(
                        flags=(first, second),
                        severity=severity,
                        message=self._resolver.text(
                            message_key, default=f"Conflict between {first} and {second}"
                        ),
                    )
                )
        return conflicts

    def conflicts_with(self, flag: str) -> set[str]:
        """Flags that must not be combined with ``flag``."""
        option = _option(flag)
        clashing = set()
        for first, second, _severity, _key in FLAG_CONFLICTS:
            if option == first:
                clashing.add(second)
            elif option == second:
                clashing.add(first)
        return clashing

    def suggestion_with_example(self, current_flag: str, suggested_flag: str) -> FlagExample:
        current = _option(current_flag)
        suggested = _option(suggested_flag)
        reason = next(
            (r.reason for r in FLAG_RELATIONS.get(current, ()) if r.flag == suggested),
            "",
        )
        return FlagExample(
            suggestion=suggested,
            example=self._resolver.text(_example_key(current, suggested), default=f"{current} {suggested}"),
            description=self._resolver.text(f"flag_suggestions.{reason}", default=reason)
            if reason
            else "",
        )
