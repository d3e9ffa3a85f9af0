"""Release identifier resolution."""

from __future__ import annotations

from dataclasses import dataclass

from relfin.core.result import Err
from relfin.release.client import ReleaseClient


@dataclass(frozen=True, slots=True)
class VersionResolution:
    """Outcome of resolving the release identifier.

    `value` is None when nothing usable was found; `cause` then keeps the
    proposal failure text (if any) so it can be shown as a hint.
    """

    value: str | None
    cause: str | None = None

    @property
    def resolved(self) -> bool:
        return bool(self.value)


def resolve_release(explicit: str | None, client: ReleaseClient) -> VersionResolution:
    """Use `explicit` (trimmed) when given, otherwise ask the client to propose one.

    Proposal failures never propagate: they resolve to an empty value and
    surface later as a single precondition failure.
    """
    if explicit:
        # An explicit but blank release is unresolved; no proposal is made.
        return VersionResolution(value=explicit.strip() or None)

    proposed = client.propose_version()
    if isinstance(proposed, Err):
        return VersionResolution(value=None, cause=proposed.error.message)

    version = proposed.value.strip()
    return VersionResolution(value=version or None)
