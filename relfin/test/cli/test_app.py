"""CLI tests driven through typer's CliRunner."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from relfin import __version__
from relfin.cli.app import app
from relfin.cli.commands.finalize import apply_overrides
from relfin.core.result import Err, Ok, Result
from relfin.platform.process import ProcessError
from relfin.release import client as client_mod
from relfin.release.model import CommitOptions, IncludeEntry
from relfin.release.options import ReleaseOptions

runner = CliRunner()


class _Recorder:
    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[list[str]] = []
        self._fail_on = fail_on

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, env, timeout
        self.calls.append(cmd)
        if self._fail_on is not None and self._fail_on in cmd:
            return Err(ProcessError(tuple(cmd), 1, "", "error: API request failed"))
        return Ok("")


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_finalize_runs_sentry_cli_sequence(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = _Recorder()
    monkeypatch.setattr(client_mod, "run_process", recorder)

    result = runner.invoke(app, ["finalize", "dist", "--release", " 2.3.4 "])

    assert result.exit_code == 0, result.output
    assert [cmd[1:3] for cmd in recorder.calls] == [
        ["releases", "new"],
        ["releases", "files"],
        ["releases", "finalize"],
    ]
    assert all("2.3.4" in cmd for cmd in recorder.calls)


def test_finalize_dry_run_makes_no_calls(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = _Recorder()
    monkeypatch.setattr(client_mod, "run_process", recorder)

    result = runner.invoke(
        app,
        ["finalize", "dist", "--release", "1.0.0", "--deploy-env", "prod", "--dry-run"],
    )

    assert result.exit_code == 0, result.output
    assert recorder.calls == []


def test_finalize_without_include_is_user_error(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = _Recorder()
    monkeypatch.setattr(client_mod, "run_process", recorder)

    result = runner.invoke(app, ["finalize", "--release", "1.0.0"])

    assert result.exit_code == 1
    assert recorder.calls == []


def test_finalize_blank_release_is_user_error(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = _Recorder()
    monkeypatch.setattr(client_mod, "run_process", recorder)

    result = runner.invoke(app, ["finalize", "dist", "--release", "  "])

    assert result.exit_code == 1
    assert recorder.calls == []


def test_finalize_remote_failure_is_release_error(
    workdir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    recorder = _Recorder(fail_on="upload-sourcemaps")
    monkeypatch.setattr(client_mod, "run_process", recorder)

    result = runner.invoke(app, ["finalize", "dist", "--release", "1.0.0"])

    assert result.exit_code == 3
    assert len(recorder.calls) == 2


def test_finalize_reads_options_file(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    recorder = _Recorder()
    monkeypatch.setattr(client_mod, "run_process", recorder)
    (workdir / "relfin.toml").write_text(
        'include = ["build"]\nrelease = "9.9.9"\nfinalize = false\n', encoding="utf-8"
    )

    result = runner.invoke(app, ["finalize"])

    assert result.exit_code == 0, result.output
    assert [cmd[2] for cmd in recorder.calls] == ["new", "files"]
    assert "build" in recorder.calls[1]


def test_invalid_config_is_user_error(workdir: Path) -> None:
    bad = workdir / "bad.toml"
    bad.write_text("include = [", encoding="utf-8")

    result = runner.invoke(app, ["finalize", "--config", str(bad)])

    assert result.exit_code == 1


def test_hook_uses_out_dir_and_cleans(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    recorder = _Recorder()
    monkeypatch.setattr(client_mod, "run_process", recorder)
    assets = workdir / "dist" / "assets"
    assets.mkdir(parents=True)
    (assets / "main.js").write_text("x")
    (assets / "main.js.map").write_text("x")
    (workdir / "relfin.toml").write_text(
        'release = "1.0.0"\ndelete_after_compile = true\n', encoding="utf-8"
    )

    result = runner.invoke(app, ["hook", "--out-dir", "dist", "--assets-dir", "assets"])

    assert result.exit_code == 0, result.output
    assert "dist" in recorder.calls[1]
    assert sorted(p.name for p in assets.iterdir()) == ["main.js"]


def test_clean_command(workdir: Path) -> None:
    (workdir / "a.js.map").write_text("x")
    (workdir / "a.js").write_text("x")

    result = runner.invoke(app, ["clean", str(workdir)])

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in workdir.iterdir()) == ["a.js"]


def test_clean_missing_dir_is_io_error(workdir: Path) -> None:
    result = runner.invoke(app, ["clean", str(workdir / "missing")])
    assert result.exit_code == 5


def test_propose_version_prints_trimmed(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return Ok("  abc123\n")

    monkeypatch.setattr(client_mod, "run_process", fake_run)

    result = runner.invoke(app, ["propose-version"])

    assert result.exit_code == 0
    assert result.output.strip() == "abc123"


def test_propose_version_missing_cli(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        return Err(ProcessError(tuple(cmd), -1, "", "not found", missing=True))

    monkeypatch.setattr(client_mod, "run_process", fake_run)

    assert runner.invoke(app, ["propose-version"]).exit_code == 2


class TestApplyOverrides:
    def _apply(self, options: ReleaseOptions, **flags: object) -> ReleaseOptions:
        defaults: dict[str, object] = {
            "paths": None,
            "release": None,
            "clean_artifacts": False,
            "no_finalize": False,
            "auto_commits": False,
            "repo": None,
            "commit": None,
            "previous_commit": None,
            "deploy_env": None,
            "deploy_name": None,
            "deploy_url": None,
            "dry_run": False,
            "silent": False,
        }
        defaults.update(flags)
        return apply_overrides(options, **defaults)  # type: ignore[arg-type]

    def test_unset_flags_keep_file_values(self) -> None:
        options = ReleaseOptions(
            include=(IncludeEntry(paths=("lib",)),),
            release="1.0",
            set_commits=CommitOptions(repo="org/app", commit="abc", ignore_empty=True),
        )
        assert self._apply(options) == options

    def test_flags_override(self) -> None:
        result = self._apply(
            ReleaseOptions(set_commits=CommitOptions(ignore_empty=True)),
            paths=["dist"],
            no_finalize=True,
            repo="org/app",
            commit="def",
            deploy_env="prod",
        )
        assert result.include_paths == ("dist",)
        assert result.finalize is False
        assert result.set_commits == CommitOptions(
            repo="org/app", commit="def", ignore_empty=True
        )
        assert result.deploy.env == "prod"
