"""Predefined argument values offered when the input is not a path."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union

__all__ = ["ArgumentValue", "ArgumentRegistry", "ENVIRONMENT_VALUES"]

ArgumentKey = Union[str, int, None]


@dataclass(frozen=True, slots=True)
class ArgumentValue:
    value: str
    description: str
    category: Optional[str] = None


ENVIRONMENT_VALUES: tuple[ArgumentValue, ...] = (
    ArgumentValue("production", "Production environment", "environment"),
    ArgumentValue("staging", "Staging environment", "environment"),
    ArgumentValue("development", "Development environment", "environment"),
    ArgumentValue("test", "Test environment", "environment"),
    ArgumentValue("local", "Local environment", "environment"),
)


class ArgumentRegistry:
    """Values keyed by argument name or position, with a shared default set."""

    def __init__(self, default_values: Iterable[ArgumentValue] = ENVIRONMENT_VALUES) -> None:
        self._default = tuple(default_values)
        self._by_argument: dict[ArgumentKey, tuple[ArgumentValue, ...]] = {}

    def register(self, argument: ArgumentKey, values: Iterable[ArgumentValue]) -> None:
        self._by_argument[argument] = tuple(values)

    def values_for(self, argument: ArgumentKey = None) -> tuple[ArgumentValue, ...]:
        return self._by_argument.get(argument, self._default)
