"""Error types for the release pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relfin.release.config import ERROR_PREFIX

ClientErrorKind = Literal["cli_missing", "cli_failed"]

ReleaseErrorKind = Literal[
    "include_missing",
    "version_unresolved",
    "remote_failed",
]


@dataclass(frozen=True, slots=True)
class ClientError:
    """Failure of a single release service call."""

    kind: ClientErrorKind
    message: str
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """The single error reported for a failed finalization.

    `message` always starts with the fixed ERROR_PREFIX so build logs show
    where the failure came from.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    @classmethod
    def wrap(
        cls,
        kind: ReleaseErrorKind,
        message: str,
        hint: str | None = None,
    ) -> ReleaseError:
        return cls(kind=kind, message=f"{ERROR_PREFIX}: {message}", hint=hint)

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


@dataclass(frozen=True, slots=True)
class HousekeepingError:
    message: str
    path: str | None = None
