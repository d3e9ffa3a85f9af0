from __future__ import annotations

from dataclasses import dataclass, field

from relfin.core.result import Err, Ok, Result
from relfin.release.errors import ClientError
from relfin.release.model import CommitOptions, DeployOptions, DeployRecord
from relfin.release.options import ReleaseOptions


def _calls() -> list[tuple[str, object]]:
    return []


def _failures() -> dict[str, ClientError]:
    return {}


@dataclass
class RecordingClient:
    """ReleaseClient double that records calls and fails on demand."""

    proposed: str = "abc123"
    calls: list[tuple[str, object]] = field(default_factory=_calls)
    failures: dict[str, ClientError] = field(default_factory=_failures)

    def fail(self, op: str, message: str = "boom", stderr: str = "") -> None:
        self.failures[op] = ClientError(kind="cli_failed", message=message, stderr=stderr)

    @property
    def ops(self) -> list[str]:
        return [name for name, _ in self.calls]

    def _record(self, op: str, arg: object) -> ClientError | None:
        self.calls.append((op, arg))
        return self.failures.get(op)

    def propose_version(self) -> Result[str, ClientError]:
        err = self._record("propose_version", None)
        return Err(err) if err else Ok(self.proposed)

    def new_release(self, release: str) -> Result[str, ClientError]:
        err = self._record("new_release", release)
        return Err(err) if err else Ok(release)

    def delete_all_files(self, release: str) -> Result[str, ClientError]:
        err = self._record("delete_all_files", release)
        return Err(err) if err else Ok(release)

    def upload_artifacts(self, release: str, options: ReleaseOptions) -> Result[str, ClientError]:
        err = self._record("upload_artifacts", (release, options.include_paths))
        return Err(err) if err else Ok(release)

    def set_commits(self, release: str, commits: CommitOptions) -> Result[str, ClientError]:
        err = self._record("set_commits", (release, commits))
        return Err(err) if err else Ok(release)

    def finalize(self, release: str) -> Result[str, ClientError]:
        err = self._record("finalize", release)
        return Err(err) if err else Ok(release)

    def new_deploy(self, release: str, deploy: DeployOptions) -> Result[DeployRecord, ClientError]:
        err = self._record("new_deploy", (release, deploy))
        return Err(err) if err else Ok(DeployRecord.from_options(release, deploy))
