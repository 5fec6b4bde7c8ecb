"""Command, flag and argument completion."""

from cmdhints.completion.engine import CompletionEngine
from cmdhints.completion.history import UsageHistory
from cmdhints.completion.paths import PathCompleter, is_path_input
from cmdhints.completion.registry import ArgumentRegistry, ArgumentValue

__all__ = [
    "ArgumentRegistry",
    "ArgumentValue",
    "CompletionEngine",
    "PathCompleter",
    "UsageHistory",
    "is_path_input",
]
