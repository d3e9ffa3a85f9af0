"""The release publish sequence.

    register -> [delete old files] -> upload -> [set commits]
             -> [finalize] -> [deploy]

Steps run strictly in order and the first failure stops the sequence.
Nothing is rolled back: a release left registered but not finalized is a
visible state the caller fixes by re-running.
"""

from __future__ import annotations

from pathlib import Path

from relfin.core.result import Err, Ok, Result
from relfin.output.console import ConsoleProtocol
from relfin.release.client import ReleaseClient, build_client
from relfin.release.config import VERSION_HINT_URL
from relfin.release.errors import ClientError, ReleaseError
from relfin.release.model import DeployRecord
from relfin.release.options import ReleaseOptions
from relfin.release.version import VersionResolution, resolve_release

__all__ = ["ReleaseFinalizer"]


def _remote_failure(error: ClientError) -> ReleaseError:
    stderr = error.stderr.strip()
    hint = stderr if stderr and stderr != error.message else None
    return ReleaseError.wrap("remote_failed", error.message, hint=hint)


class ReleaseFinalizer:
    """Creates and finalizes one release through a ReleaseClient.

    The release identifier is resolved on first use and cached for the
    lifetime of the instance, so every step references the same value.
    """

    def __init__(
        self,
        client: ReleaseClient,
        console: ConsoleProtocol,
        *,
        release: str | None = None,
    ) -> None:
        self._client = client
        self._console = console
        self._explicit_release = release
        self._resolution: VersionResolution | None = None

    @classmethod
    def from_options(
        cls,
        options: ReleaseOptions,
        console: ConsoleProtocol,
        *,
        cwd: Path | None = None,
    ) -> ReleaseFinalizer:
        client = build_client(options, console, cwd=cwd)
        return cls(client, console, release=options.release)

    def release_id(self) -> VersionResolution:
        if self._resolution is None:
            self._resolution = resolve_release(self._explicit_release, self._client)
        return self._resolution

    def finalize_release(
        self, options: ReleaseOptions
    ) -> Result[DeployRecord | None, ReleaseError]:
        """Run the publish sequence for `options`.

        The release identifier comes from the constructor (see `from_options`);
        `options.release` is not consulted here.

        Returns:
            Ok(DeployRecord) when a deploy was recorded, Ok(None) otherwise,
            Err(ReleaseError) for the first failing precondition or step.
        """
        if not options.include_paths:
            return Err(ReleaseError.wrap("include_missing", "`include` option is required"))

        resolution = self.release_id()
        if not resolution.value:
            return Err(
                ReleaseError.wrap(
                    "version_unresolved",
                    "Unable to determine version. Make sure to include `release` option "
                    f"or use the environment that supports auto-detection {VERSION_HINT_URL}",
                    hint=resolution.cause,
                )
            )
        release = resolution.value
        client = self._client

        created = client.new_release(release)
        if isinstance(created, Err):
            return created.map_err(_remote_failure)

        if options.clean_artifacts:
            deleted = client.delete_all_files(release)
            if isinstance(deleted, Err):
                return deleted.map_err(_remote_failure)

        uploaded = client.upload_artifacts(release, options)
        if isinstance(uploaded, Err):
            return uploaded.map_err(_remote_failure)

        if options.set_commits.applicable:
            linked = client.set_commits(release, options.set_commits)
            if isinstance(linked, Err):
                return linked.map_err(_remote_failure)

        if options.finalize:
            finalized = client.finalize(release)
            if isinstance(finalized, Err):
                return finalized.map_err(_remote_failure)

        if not options.deploy.applicable:
            return Ok(None)

        deployed = client.new_deploy(release, options.deploy)
        if isinstance(deployed, Err):
            return deployed.map_err(_remote_failure)
        return Ok(deployed.value)
