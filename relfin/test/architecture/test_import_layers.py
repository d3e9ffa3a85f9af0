from __future__ import annotations

import pytest

from ._utils import iter_source_files, matches_prefix, package_root, parse_imports


@pytest.mark.parametrize(
    ("layer", "forbidden"),
    [
        ("core", ("relfin.platform", "relfin.output", "relfin.release", "relfin.cli")),
        ("platform", ("relfin.output", "relfin.release", "relfin.cli")),
        ("output", ("relfin.release", "relfin.cli")),
        ("release", ("relfin.cli", "typer")),
    ],
)
def test_lower_layers_do_not_import_upper_layers(layer: str, forbidden: tuple[str, ...]) -> None:
    root = package_root()
    offenders: list[str] = []

    for file_path in iter_source_files(root / layer):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, prefix) for prefix in forbidden):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{layer} layering violations:\n" + "\n".join(offenders)


@pytest.mark.parametrize(
    ("library", "allowlist"),
    [
        ("subprocess", {"platform/process.py"}),
        ("rich", {"output/console.py"}),
    ],
)
def test_library_usage_is_confined(library: str, allowlist: set[str]) -> None:
    root = package_root()
    offenders: list[str] = []

    for file_path in iter_source_files(root):
        rel = file_path.relative_to(root).as_posix()
        if rel in allowlist:
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, library):
                offenders.append(f"{rel}:{item.line}: direct {library} import")

    assert not offenders, "\n".join(offenders)
