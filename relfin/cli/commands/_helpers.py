"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relfin.core.errors import ErrorCode
from relfin.core.result import Err, Result
from relfin.output.console import Style
from relfin.release.errors import ReleaseError

if TYPE_CHECKING:
    from relfin.cli.context import CLIContext


T = TypeVar("T")
E = TypeVar("E")


def release_error_exit_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "include_missing" | "version_unresolved":
            return ErrorCode.USER_ERROR
        case "remote_failed":
            return ErrorCode.RELEASE_ERROR
    return ErrorCode.RELEASE_ERROR


def exit_on_error(
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.RELEASE_ERROR,
) -> None:
    """Exit with error if result is Err, otherwise return.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        ctx.console.error(message)
        if hint:
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
