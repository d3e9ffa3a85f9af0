from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IncludeEntry:
    """One upload root, optionally with its own ignore globs."""

    paths: tuple[str, ...]
    ignore: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CommitOptions:
    commit: str | None = None
    previous_commit: str | None = None
    repo: str | None = None
    auto: bool = False
    ignore_missing: bool = False
    ignore_empty: bool = False

    @property
    def applicable(self) -> bool:
        """Commits are attached only with `auto` or an explicit repo+commit pair."""
        return self.auto or bool(self.repo and self.commit)


@dataclass(frozen=True, slots=True)
class DeployOptions:
    env: str | None = None
    # Unix timestamps / durations in seconds, passed through to sentry-cli.
    started: int | None = None
    finished: int | None = None
    time: int | None = None
    name: str | None = None
    url: str | None = None

    @property
    def applicable(self) -> bool:
        return bool(self.env)


@dataclass(frozen=True, slots=True)
class UploadOptions:
    """Passthrough flags for `sentry-cli releases files upload-sourcemaps`."""

    ignore: tuple[str, ...] = ()
    ignore_file: str | None = None
    rewrite: bool = True
    url_prefix: str | None = None
    url_suffix: str | None = None
    strip_prefix: tuple[str, ...] = ()
    strip_common_prefix: bool = False
    validate: bool = False
    ext: tuple[str, ...] = ()
    dist: str | None = None
    source_map_reference: bool = True


@dataclass(frozen=True, slots=True)
class ClientSettings:
    """sentry-cli connection settings, forwarded as SENTRY_* variables."""

    org: str | None = None
    project: str | None = None
    auth_token: str | None = None
    url: str | None = None
    vcs_remote: str | None = None
    config_file: str | None = None


@dataclass(frozen=True, slots=True)
class DeployRecord:
    release: str
    env: str
    name: str | None = None
    url: str | None = None
    started: int | None = None
    finished: int | None = None
    time: int | None = None

    @classmethod
    def from_options(cls, release: str, deploy: DeployOptions) -> DeployRecord:
        return cls(
            release=release,
            env=deploy.env or "",
            name=deploy.name,
            url=deploy.url,
            started=deploy.started,
            finished=deploy.finished,
            time=deploy.time,
        )
