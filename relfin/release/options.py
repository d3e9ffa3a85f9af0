"""Typed release options and their TOML loader.

Options come from `relfin.toml`, from CLI flags, or from a build host
handing over a plain mapping. All three end up in ReleaseOptions, an
immutable value the finalizer only reads.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import cast

from relfin.core.result import Err, Ok, Result
from relfin.core.structured import (
    StrDict,
    as_str_dict,
    get_bool,
    get_int,
    get_raw_str,
    get_str,
    get_str_list,
    get_table,
    to_str_tuple,
)
from relfin.release.config import DEFAULT_DELETE_PATTERN
from relfin.release.model import (
    ClientSettings,
    CommitOptions,
    DeployOptions,
    IncludeEntry,
    UploadOptions,
)

__all__ = [
    "ConfigError",
    "ReleaseOptions",
    "load_options",
    "load_options_or_default",
    "parse_include",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when an options file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    include: tuple[IncludeEntry, ...] = ()
    release: str | None = None
    clean_artifacts: bool = False
    finalize: bool = True
    set_commits: CommitOptions = field(default_factory=CommitOptions)
    deploy: DeployOptions = field(default_factory=DeployOptions)
    upload: UploadOptions = field(default_factory=UploadOptions)
    client: ClientSettings = field(default_factory=ClientSettings)
    dry_run: bool = False
    silent: bool = False
    delete_after_compile: bool = False
    delete_pattern: str = DEFAULT_DELETE_PATTERN

    @property
    def include_paths(self) -> tuple[str, ...]:
        return tuple(p for entry in self.include for p in entry.paths)

    def with_default_include(self, paths: Iterable[str]) -> ReleaseOptions:
        """Return options whose include falls back to `paths` when unset."""
        if self.include_paths:
            return self
        entries = tuple(IncludeEntry(paths=(p,)) for p in paths if p)
        if not entries:
            return self
        return replace(self, include=entries)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseOptions:
        """Create ReleaseOptions from a mapping (parsed TOML)."""
        # Without a [set_commits] table the commit keys live at top level.
        commits: Mapping[str, object] = get_table(data, "set_commits") or data
        deploy: StrDict = get_table(data, "deploy") or {}
        upload: StrDict = get_table(data, "upload") or {}

        return cls(
            include=parse_include(data.get("include")),
            release=get_raw_str(data, "release"),
            clean_artifacts=get_bool(data, "clean_artifacts") or False,
            finalize=_bool_or(data, "finalize", True),
            set_commits=CommitOptions(
                commit=get_str(commits, "commit"),
                previous_commit=get_str(commits, "previous_commit"),
                repo=get_str(commits, "repo"),
                auto=get_bool(commits, "auto") or False,
                ignore_missing=get_bool(commits, "ignore_missing") or False,
                ignore_empty=get_bool(commits, "ignore_empty") or False,
            ),
            deploy=DeployOptions(
                env=get_str(deploy, "env"),
                started=get_int(deploy, "started"),
                finished=get_int(deploy, "finished"),
                time=get_int(deploy, "time"),
                name=get_str(deploy, "name"),
                url=get_str(deploy, "url"),
            ),
            upload=UploadOptions(
                # Top-level `ignore` is accepted as a shorthand.
                ignore=get_str_list(upload, "ignore") or get_str_list(data, "ignore"),
                ignore_file=get_str(upload, "ignore_file"),
                rewrite=_bool_or(upload, "rewrite", True),
                url_prefix=get_str(upload, "url_prefix"),
                url_suffix=get_str(upload, "url_suffix"),
                strip_prefix=get_str_list(upload, "strip_prefix"),
                strip_common_prefix=get_bool(upload, "strip_common_prefix") or False,
                validate=get_bool(upload, "validate") or False,
                ext=get_str_list(upload, "ext"),
                dist=get_str(upload, "dist"),
                source_map_reference=_bool_or(upload, "source_map_reference", True),
            ),
            client=ClientSettings(
                org=get_str(data, "org"),
                project=get_str(data, "project"),
                auth_token=get_str(data, "auth_token"),
                url=get_str(data, "url"),
                vcs_remote=get_str(data, "vcs_remote"),
                config_file=get_str(data, "config_file"),
            ),
            dry_run=get_bool(data, "dry_run") or False,
            silent=get_bool(data, "silent") or False,
            delete_after_compile=get_bool(data, "delete_after_compile") or False,
            delete_pattern=get_str(data, "delete_pattern") or DEFAULT_DELETE_PATTERN,
        )


def _bool_or(table: Mapping[str, object], key: str, default: bool) -> bool:
    value = get_bool(table, key)
    return default if value is None else value


def parse_include(value: object) -> tuple[IncludeEntry, ...]:
    """Normalize the loose `include` shapes into IncludeEntry values.

    Accepted: "dist", ["dist", "lib"], or tables such as
    {paths = ["dist"], ignore = "node_modules"}.
    """
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        items = cast(list[object], list(value))
    else:
        items = [value]

    entries: list[IncludeEntry] = []
    for item in items:
        if isinstance(item, str):
            if item.strip():
                entries.append(IncludeEntry(paths=(item,)))
            continue

        table = as_str_dict(item)
        if table is None:
            continue
        paths = get_str_list(table, "paths")
        if not paths:
            continue
        entries.append(IncludeEntry(paths=paths, ignore=to_str_tuple(table.get("ignore"))))

    return tuple(entries)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Options root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Options file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading options: {e}", path=path))


def load_options(path: Path) -> Result[ReleaseOptions, ConfigError]:
    """Load release options from a TOML file.

    Args:
        path: Path to relfin.toml

    Returns:
        Ok(ReleaseOptions) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseOptions.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid options structure: {e}", path=path))


def load_options_or_default(path: Path) -> ReleaseOptions:
    """Load options, falling back to defaults when the file is absent or broken."""
    result = load_options(path)
    if isinstance(result, Ok):
        return result.value
    return ReleaseOptions()
