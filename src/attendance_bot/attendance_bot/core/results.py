from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True)
class NotFound:
    """The requested record does not exist or belongs to someone else."""


@dataclass(frozen=True)
class Failure:
    """An unexpected error was caught at the dispatch boundary."""

    detail: str


Outcome = Union[Success[T], NotFound, Failure]
