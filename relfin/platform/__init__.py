"""Platform adapters (subprocess, filesystem)."""

from .process import ProcessError, run

__all__ = ["ProcessError", "run"]
