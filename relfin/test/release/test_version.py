from __future__ import annotations

from relfin.release.version import VersionResolution, resolve_release

from ._fakes import RecordingClient


def test_explicit_release_is_trimmed_and_not_proposed() -> None:
    client = RecordingClient()
    assert resolve_release("  1.2.3\n", client) == VersionResolution(value="1.2.3")
    assert client.calls == []


def test_whitespace_release_is_unresolved_without_proposal() -> None:
    client = RecordingClient()

    resolution = resolve_release("   ", client)

    assert resolution.value is None
    assert resolution.cause is None
    assert client.calls == []


def test_empty_release_falls_back_to_proposal() -> None:
    client = RecordingClient(proposed=" abc \n")
    assert resolve_release("", client).value == "abc"
    assert client.ops == ["propose_version"]


def test_proposal_failure_keeps_cause() -> None:
    client = RecordingClient()
    client.fail("propose_version", message="sentry-cli: not found")

    resolution = resolve_release(None, client)

    assert resolution.value is None
    assert resolution.cause == "sentry-cli: not found"
    assert not resolution.resolved
