"""Release service clients.

ReleaseClient is the seam between the finalizer and sentry-cli. The
production SentryCliClient shells out once per call; DryRunClient is a
drop-in variant that logs each call and returns its input, so the full
sequence can run without touching the remote service.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relfin.core.result import Err, Ok, Result
from relfin.output.console import ConsoleProtocol
from relfin.platform.process import merged_env
from relfin.platform.process import run as run_process
from relfin.release.config import DRY_RUN_PLACEHOLDER_VERSION, SENTRY_CLI_BIN
from relfin.release.errors import ClientError
from relfin.release.model import (
    ClientSettings,
    CommitOptions,
    DeployOptions,
    DeployRecord,
    IncludeEntry,
)
from relfin.release.options import ReleaseOptions
from relfin.release.timeouts import (
    SENTRY_CLI_TIMEOUT_SECONDS,
    SENTRY_CLI_UPLOAD_TIMEOUT_SECONDS,
)

__all__ = [
    "ReleaseClient",
    "SentryCliClient",
    "DryRunClient",
    "build_client",
    "upload_sourcemaps_args",
    "set_commits_args",
    "new_deploy_args",
]


class ReleaseClient(Protocol):
    """Remote operations the finalizer relies on.

    Every call returns a Result; the finalizer only inspects Ok vs Err.
    """

    def propose_version(self) -> Result[str, ClientError]: ...

    def new_release(self, release: str) -> Result[str, ClientError]: ...

    def delete_all_files(self, release: str) -> Result[str, ClientError]: ...

    def upload_artifacts(
        self, release: str, options: ReleaseOptions
    ) -> Result[str, ClientError]: ...

    def set_commits(self, release: str, commits: CommitOptions) -> Result[str, ClientError]: ...

    def finalize(self, release: str) -> Result[str, ClientError]: ...

    def new_deploy(
        self, release: str, deploy: DeployOptions
    ) -> Result[DeployRecord, ClientError]: ...


def upload_sourcemaps_args(
    release: str,
    entry: IncludeEntry,
    options: ReleaseOptions,
) -> list[str]:
    """Arguments for one upload-sourcemaps call.

    Entry-level ignores replace the global ones rather than adding to them.
    """
    upload = options.upload
    args = ["releases", "files", release, "upload-sourcemaps", *entry.paths]

    for pattern in entry.ignore or upload.ignore:
        args.extend(["--ignore", pattern])
    if upload.ignore_file:
        args.extend(["--ignore-file", upload.ignore_file])
    if upload.rewrite:
        args.append("--rewrite")
    if upload.url_prefix:
        args.extend(["--url-prefix", upload.url_prefix])
    if upload.url_suffix:
        args.extend(["--url-suffix", upload.url_suffix])
    for prefix in upload.strip_prefix:
        args.extend(["--strip-prefix", prefix])
    if upload.strip_common_prefix:
        args.append("--strip-common-prefix")
    if upload.validate:
        args.append("--validate")
    for ext in upload.ext:
        args.extend(["--ext", ext])
    if upload.dist:
        args.extend(["--dist", upload.dist])
    if not upload.source_map_reference:
        args.append("--no-sourcemap-reference")
    return args


def set_commits_args(release: str, commits: CommitOptions) -> list[str]:
    args = ["releases", "set-commits", release]
    if commits.auto:
        args.append("--auto")
    elif commits.previous_commit:
        args.extend(["--commit", f"{commits.repo}@{commits.previous_commit}..{commits.commit}"])
    else:
        args.extend(["--commit", f"{commits.repo}@{commits.commit}"])

    if commits.ignore_missing:
        args.append("--ignore-missing")
    if commits.ignore_empty:
        args.append("--ignore-empty")
    return args


def new_deploy_args(release: str, deploy: DeployOptions) -> list[str]:
    args = ["releases", "deploys", release, "new", "--env", deploy.env or ""]
    if deploy.started is not None:
        args.extend(["--started", str(deploy.started)])
    if deploy.finished is not None:
        args.extend(["--finished", str(deploy.finished)])
    if deploy.time is not None:
        args.extend(["--time", str(deploy.time)])
    if deploy.name:
        args.extend(["--name", deploy.name])
    if deploy.url:
        args.extend(["--url", deploy.url])
    return args


class SentryCliClient:
    """ReleaseClient backed by the sentry-cli executable."""

    def __init__(
        self,
        settings: ClientSettings,
        *,
        cwd: Path | None = None,
        binary: str = SENTRY_CLI_BIN,
    ) -> None:
        self._settings = settings
        self._cwd = cwd or Path.cwd()
        self._binary = binary

    def _env(self) -> dict[str, str]:
        s = self._settings
        return merged_env(
            {
                "SENTRY_ORG": s.org,
                "SENTRY_PROJECT": s.project,
                "SENTRY_AUTH_TOKEN": s.auth_token,
                "SENTRY_URL": s.url,
                "SENTRY_VCS_REMOTE": s.vcs_remote,
                "SENTRY_PROPERTIES": s.config_file,
            }
        )

    def _execute(
        self,
        args: list[str],
        *,
        timeout: float = SENTRY_CLI_TIMEOUT_SECONDS,
    ) -> Result[str, ClientError]:
        cmd = [self._binary, *args]
        result = run_process(cmd, cwd=self._cwd, env=self._env(), timeout=timeout)
        if isinstance(result, Ok):
            return result

        e = result.error
        if e.missing:
            return Err(
                ClientError(
                    kind="cli_missing",
                    message=f"{self._binary}: not found (install @sentry/cli or sentry-cli)",
                    stderr=e.stderr,
                )
            )
        return Err(ClientError(kind="cli_failed", message=e.detail, stderr=e.stderr))

    def propose_version(self) -> Result[str, ClientError]:
        return self._execute(["releases", "propose-version"])

    def new_release(self, release: str) -> Result[str, ClientError]:
        return self._execute(["releases", "new", release])

    def delete_all_files(self, release: str) -> Result[str, ClientError]:
        return self._execute(
            ["releases", "files", release, "delete", "--all"],
            timeout=SENTRY_CLI_UPLOAD_TIMEOUT_SECONDS,
        )

    def upload_artifacts(self, release: str, options: ReleaseOptions) -> Result[str, ClientError]:
        # One invocation per include entry, strictly one after another.
        outputs: list[str] = []
        for entry in options.include:
            result = self._execute(
                upload_sourcemaps_args(release, entry, options),
                timeout=SENTRY_CLI_UPLOAD_TIMEOUT_SECONDS,
            )
            if isinstance(result, Err):
                return result
            outputs.append(result.value)
        return Ok("".join(outputs))

    def set_commits(self, release: str, commits: CommitOptions) -> Result[str, ClientError]:
        return self._execute(set_commits_args(release, commits))

    def finalize(self, release: str) -> Result[str, ClientError]:
        return self._execute(["releases", "finalize", release])

    def new_deploy(self, release: str, deploy: DeployOptions) -> Result[DeployRecord, ClientError]:
        result = self._execute(new_deploy_args(release, deploy))
        if isinstance(result, Err):
            return result
        return Ok(DeployRecord.from_options(release, deploy))


class DryRunClient:
    """ReleaseClient that performs no remote mutation.

    Each mutating call is reported through `console.debug` and returns its
    input. `propose_version` asks `proposer` (a read-only lookup) when one
    is given and falls back to a placeholder version.
    """

    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        proposer: ReleaseClient | None = None,
    ) -> None:
        self._console = console
        self._proposer = proposer

    def propose_version(self) -> Result[str, ClientError]:
        version = DRY_RUN_PLACEHOLDER_VERSION
        if self._proposer is not None:
            proposed = self._proposer.propose_version()
            if isinstance(proposed, Ok) and proposed.value.strip():
                version = proposed.value
        self._console.debug("Proposed version:\n", version)
        return Ok(version)

    def new_release(self, release: str) -> Result[str, ClientError]:
        self._console.debug("Creating new release:\n", release)
        return Ok(release)

    def delete_all_files(self, release: str) -> Result[str, ClientError]:
        self._console.debug("Deleting all release files:\n", release)
        return Ok(release)

    def upload_artifacts(self, release: str, options: ReleaseOptions) -> Result[str, ClientError]:
        for entry in options.include:
            self._console.debug(
                "Calling upload-sourcemaps with:\n",
                upload_sourcemaps_args(release, entry, options),
            )
        return Ok(release)

    def set_commits(self, release: str, commits: CommitOptions) -> Result[str, ClientError]:
        self._console.debug("Calling set-commits with:\n", commits)
        return Ok(release)

    def finalize(self, release: str) -> Result[str, ClientError]:
        self._console.debug("Finalizing release:\n", release)
        return Ok(release)

    def new_deploy(self, release: str, deploy: DeployOptions) -> Result[DeployRecord, ClientError]:
        self._console.debug("Calling deploy with:\n", deploy)
        return Ok(DeployRecord.from_options(release, deploy))


def build_client(
    options: ReleaseOptions,
    console: ConsoleProtocol,
    *,
    cwd: Path | None = None,
) -> ReleaseClient:
    """Pick the client variant for `options`."""
    cli = SentryCliClient(options.client, cwd=cwd)
    if options.dry_run:
        console.debug("DRY Run Mode")
        return DryRunClient(console, proposer=cli)
    return cli
