from __future__ import annotations

from pathlib import Path

import typer

from relfin.cli.commands._helpers import exit_with_code, release_error_exit_code
from relfin.cli.context import build_context
from relfin.core.result import Err
from relfin.release.hook import BuildConfig, ReleaseHook


def hook(
    out_dir: str = typer.Option(..., "--out-dir", help="Bundler output directory."),
    assets_dir: str = typer.Option("", "--assets-dir", help="Assets directory inside out-dir."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to relfin.toml"),
    silent: bool = typer.Option(False, "--silent", help="Suppress debug output."),
) -> None:
    """Run the post-build hook (finalize, then local cleanup)."""
    ctx = build_context(config=config, silent=silent)

    release_hook = ReleaseHook(ctx.options, ctx.console, root=ctx.root)
    release_hook.config_resolved(BuildConfig(out_dir=out_dir, assets_dir=assets_dir))

    result = release_hook.close_bundle()
    if isinstance(result, Err):
        # The hook already reported the failure as a warning.
        exit_with_code(int(release_error_exit_code(result.error)))
