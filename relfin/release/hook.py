"""Build host lifecycle glue.

A bundler calls `config_resolved` once its configuration is final and
`close_bundle` after the output is written. The hook never raises: a
failed publish is reported as a warning so the build itself still passes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relfin.core.result import Err, Ok, Result
from relfin.output.console import ConsoleProtocol
from relfin.release.errors import ReleaseError
from relfin.release.finalizer import ReleaseFinalizer
from relfin.release.housekeeping import delete_artifacts
from relfin.release.model import DeployRecord
from relfin.release.options import ReleaseOptions


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """The slice of the bundler configuration the hook needs."""

    out_dir: str | None = None
    assets_dir: str = ""

    def assets_path(self, root: Path) -> Path | None:
        if not self.out_dir:
            return None
        return (root / self.out_dir / self.assets_dir).resolve()


class ReleaseHook:
    def __init__(
        self,
        options: ReleaseOptions,
        console: ConsoleProtocol,
        *,
        finalizer: ReleaseFinalizer | None = None,
        root: Path | None = None,
    ) -> None:
        self._options = options
        self._console = console
        self._root = root or Path.cwd()
        self._finalizer = finalizer or ReleaseFinalizer.from_options(
            options, console, cwd=self._root
        )
        self._build = BuildConfig()

    def config_resolved(self, build: BuildConfig) -> None:
        self._build = build

    def close_bundle(self) -> Result[DeployRecord | None, ReleaseError]:
        options = self._options
        if self._build.out_dir:
            options = options.with_default_include([self._build.out_dir])

        result = self._finalizer.finalize_release(options)
        if isinstance(result, Err):
            self._console.warning(result.error.pretty())
            return result

        if options.delete_after_compile:
            self._cleanup(options)
        return result

    def _cleanup(self, options: ReleaseOptions) -> None:
        assets = self._build.assets_path(self._root)
        if assets is None:
            self._console.warning("delete_after_compile is set but the build has no out_dir")
            return

        deleted = delete_artifacts(assets, options.delete_pattern, self._console)
        match deleted:
            case Ok(paths):
                self._console.debug("Deleted local artifacts:\n", [str(p) for p in paths])
            case Err(error):
                self._console.warning(error.message)
