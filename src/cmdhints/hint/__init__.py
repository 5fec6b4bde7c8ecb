"""Localized hints built on the translation fallback chain."""

from cmdhints.hint.context import (
    CommandContext,
    CommandContextAnalyzer,
    ContextualHint,
    HintType,
    InputStage,
)
from cmdhints.hint.flags import (
    ConflictSeverity,
    FlagCombinationSuggestor,
    FlagConflict,
    FlagExample,
    FlagSuggestion,
)
from cmdhints.hint.provider import HintProvider

__all__ = [
    "CommandContext",
    "CommandContextAnalyzer",
    "ConflictSeverity",
    "ContextualHint",
    "FlagCombinationSuggestor",
    "FlagConflict",
    "FlagExample",
    "FlagSuggestion",
    "HintProvider",
    "HintType",
    "InputStage",
]
