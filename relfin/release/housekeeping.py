"""Local artifact cleanup after a successful publish.

Source maps are uploaded to the release service and usually should not be
shipped alongside the bundle. `delete_artifacts` removes them from the
build output directory.
"""

from __future__ import annotations

import re
from pathlib import Path

from relfin.core.result import Err, Ok, Result
from relfin.output.console import ConsoleProtocol
from relfin.release.errors import HousekeepingError

__all__ = ["asset_path", "delete_artifacts"]


def asset_path(assets_dir: Path, name: str) -> Path:
    """Path of an emitted asset; bundlers may append a `?query` to names."""
    return assets_dir / name.split("?", 1)[0]


def delete_artifacts(
    assets_dir: Path,
    pattern: str,
    console: ConsoleProtocol,
) -> Result[list[Path], HousekeepingError]:
    try:
        regex = re.compile(pattern)
    except re.error as e:
        return Err(HousekeepingError(f"invalid delete pattern {pattern!r}: {e}"))

    try:
        names = sorted(p.name for p in assets_dir.iterdir())
    except FileNotFoundError:
        return Err(
            HousekeepingError(f"assets directory not found: {assets_dir}", path=str(assets_dir))
        )
    except OSError as e:
        return Err(HousekeepingError(f"cannot list {assets_dir}: {e}", path=str(assets_dir)))

    deleted: list[Path] = []
    for name in names:
        if not regex.search(name):
            continue

        path = asset_path(assets_dir, name)
        if not path.is_file():
            console.warning(
                f"unable to delete '{name}'. File does not exist; it may not have been "
                "created due to a build error."
            )
            continue

        try:
            path.unlink()
        except OSError as e:
            return Err(HousekeepingError(f"failed to delete {path}: {e}", path=str(path)))
        deleted.append(path)

    return Ok(deleted)
