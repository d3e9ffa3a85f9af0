from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import typer

from relfin.cli.commands._helpers import exit_on_error, release_error_exit_code
from relfin.cli.context import build_context
from relfin.core.result import Err
from relfin.output.console import Style
from relfin.release.finalizer import ReleaseFinalizer
from relfin.release.model import CommitOptions, DeployOptions
from relfin.release.options import ReleaseOptions, parse_include


def apply_overrides(
    options: ReleaseOptions,
    *,
    paths: list[str] | None,
    release: str | None,
    clean_artifacts: bool,
    no_finalize: bool,
    auto_commits: bool,
    repo: str | None,
    commit: str | None,
    previous_commit: str | None,
    deploy_env: str | None,
    deploy_name: str | None,
    deploy_url: str | None,
    dry_run: bool,
    silent: bool,
) -> ReleaseOptions:
    """Layer CLI flags on top of file options. Unset flags keep file values."""
    commits = options.set_commits
    if auto_commits or repo or commit or previous_commit:
        commits = CommitOptions(
            commit=commit or commits.commit,
            previous_commit=previous_commit or commits.previous_commit,
            repo=repo or commits.repo,
            auto=auto_commits or commits.auto,
            ignore_missing=commits.ignore_missing,
            ignore_empty=commits.ignore_empty,
        )

    deploy = options.deploy
    if deploy_env or deploy_name or deploy_url:
        deploy = DeployOptions(
            env=deploy_env or deploy.env,
            started=deploy.started,
            finished=deploy.finished,
            time=deploy.time,
            name=deploy_name or deploy.name,
            url=deploy_url or deploy.url,
        )

    return replace(
        options,
        include=parse_include(paths) if paths else options.include,
        release=release if release is not None else options.release,
        clean_artifacts=clean_artifacts or options.clean_artifacts,
        finalize=options.finalize and not no_finalize,
        set_commits=commits,
        deploy=deploy,
        dry_run=dry_run or options.dry_run,
        silent=silent or options.silent,
    )


def finalize(
    paths: list[str] | None = typer.Argument(None, help="Directories to upload (include)."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to relfin.toml"),
    release: str | None = typer.Option(None, "--release", help="Release identifier."),
    clean_artifacts: bool = typer.Option(
        False, "--clean-artifacts", help="Delete previously uploaded files first."
    ),
    no_finalize: bool = typer.Option(False, "--no-finalize", help="Leave the release open."),
    auto_commits: bool = typer.Option(False, "--auto-commits", help="Associate commits automatically."),
    repo: str | None = typer.Option(None, "--repo", help="Repository for --commit."),
    commit: str | None = typer.Option(None, "--commit", help="Head commit of the release."),
    previous_commit: str | None = typer.Option(None, "--previous-commit"),
    deploy_env: str | None = typer.Option(None, "--deploy-env", help="Record a deploy to ENV."),
    deploy_name: str | None = typer.Option(None, "--deploy-name"),
    deploy_url: str | None = typer.Option(None, "--deploy-url"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Log calls instead of executing them."),
    silent: bool = typer.Option(False, "--silent", help="Suppress debug output."),
) -> None:
    """Create, upload and finalize a release."""
    ctx = build_context(config=config, silent=silent)
    options = apply_overrides(
        ctx.options,
        paths=paths,
        release=release,
        clean_artifacts=clean_artifacts,
        no_finalize=no_finalize,
        auto_commits=auto_commits,
        repo=repo,
        commit=commit,
        previous_commit=previous_commit,
        deploy_env=deploy_env,
        deploy_name=deploy_name,
        deploy_url=deploy_url,
        dry_run=dry_run,
        silent=silent,
    )

    finalizer = ReleaseFinalizer.from_options(options, ctx.console, cwd=ctx.root)
    result = finalizer.finalize_release(options)
    if isinstance(result, Err):
        exit_on_error(result, ctx, release_error_exit_code(result.error))
        return

    ctx.console.success(f"release {finalizer.release_id().value} published")
    if result.value is not None:
        ctx.console.print(f"deploy: {result.value.env}", Style.DIM)
