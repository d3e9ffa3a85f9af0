from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from relfin.core.errors import ErrorCode
from relfin.core.result import Err
from relfin.output.console import ConsoleProtocol, RichConsole
from relfin.release.config import OPTIONS_FILENAME
from relfin.release.options import ReleaseOptions, load_options


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    options: ReleaseOptions
    console: ConsoleProtocol


def build_context(*, config: Path | None, silent: bool = False) -> CLIContext:
    """Load options and set up the console.

    An explicit `--config` must load; the implicit ./relfin.toml is optional.
    """
    root = Path.cwd()
    path = config if config is not None else root / OPTIONS_FILENAME

    options = ReleaseOptions()
    if config is not None or path.exists():
        loaded = load_options(path)
        if isinstance(loaded, Err):
            typer.echo(f"error: {loaded.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        options = loaded.value
        root = path.resolve().parent

    return CLIContext(
        root=root,
        options=options,
        console=RichConsole(silent=silent or options.silent),
    )
