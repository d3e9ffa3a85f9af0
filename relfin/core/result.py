"""Result type used across the release pipeline.

Every step that talks to sentry-cli or the filesystem returns a Result
instead of raising. Callers branch on the variant and stop at the first Err:

    created = client.new_release(release)
    if isinstance(created, Err):
        return created.map_err(wrap)

    match client.finalize(release):
        case Ok(value):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying `value`."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying `error`."""

    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the carried error (used to wrap client errors)."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
