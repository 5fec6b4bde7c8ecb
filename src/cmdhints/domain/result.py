"""Explicit success/failure results returned across component boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar, Union

__all__ = ["Ok", "Err", "Result"]

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T
    ok: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying a structured error record."""

    error: E
    ok: ClassVar[bool] = False


Result = Union[Ok[T], Err[E]]
