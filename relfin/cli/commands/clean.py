from __future__ import annotations

from pathlib import Path

import typer

from relfin.cli.commands._helpers import exit_on_error
from relfin.cli.context import build_context
from relfin.core.errors import ErrorCode
from relfin.core.result import Err
from relfin.output.console import Style
from relfin.release.housekeeping import delete_artifacts


def clean(
    assets_dir: Path = typer.Argument(..., help="Directory holding emitted assets."),
    pattern: str | None = typer.Option(None, "--pattern", help="Regex of files to delete."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to relfin.toml"),
) -> None:
    """Delete local artifacts (source maps by default)."""
    ctx = build_context(config=config)

    result = delete_artifacts(assets_dir, pattern or ctx.options.delete_pattern, ctx.console)
    if isinstance(result, Err):
        exit_on_error(result, ctx, ErrorCode.IO_ERROR)
        return

    for path in result.value:
        ctx.console.print(f"deleted {path}", Style.DIM)
    ctx.console.success(f"{len(result.value)} file(s) deleted")
