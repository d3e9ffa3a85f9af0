from __future__ import annotations

from pathlib import Path

import typer

from relfin.cli.commands._helpers import exit_on_error
from relfin.cli.context import build_context
from relfin.core.errors import ErrorCode
from relfin.core.result import Err
from relfin.release.client import SentryCliClient


def propose_version(
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to relfin.toml"),
) -> None:
    """Print the version sentry-cli would propose for this checkout."""
    ctx = build_context(config=config, silent=True)
    client = SentryCliClient(ctx.options.client, cwd=ctx.root)

    result = client.propose_version()
    if isinstance(result, Err):
        code = ErrorCode.ENV_ERROR if result.error.kind == "cli_missing" else ErrorCode.RELEASE_ERROR
        exit_on_error(result, ctx, code)
        return

    typer.echo(result.value.strip())
