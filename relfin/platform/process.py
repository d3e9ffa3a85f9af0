"""Subprocess execution with Result-based error handling.

sentry-cli is driven one process per release step. `run` captures its
output and turns every failure mode (non-zero exit, timeout, missing
executable) into a ProcessError value.

Usage:
    result = run(["sentry-cli", "releases", "new", "1.0.0"], cwd=Path("."))
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from relfin.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "merged_env"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 when the process never ran to completion.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
        missing: True when the executable could not be found.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    missing: bool = False

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.missing:
            return f"{self.command[0]}: not found"
        return f"{cmd_str} failed (exit {self.returncode})"

    @property
    def detail(self) -> str:
        """Most useful human-readable failure text."""
        return self.stderr.strip() or self.stdout.strip() or str(self)


def merged_env(overrides: Mapping[str, str | None]) -> dict[str, str]:
    """Current environment plus non-empty overrides."""
    env = dict(os.environ)
    for key, value in overrides.items():
        if value:
            env[key] = value
    return env


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout=e.stdout if isinstance(e.stdout, str) else "",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except FileNotFoundError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
                missing=e.filename == cmd[0],
            )
        )
    except OSError as e:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=str(e),
            )
        )

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)
