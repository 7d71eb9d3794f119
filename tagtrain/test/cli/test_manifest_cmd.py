from __future__ import annotations

from pathlib import Path

import pytest
import typer

from tagtrain.cli.context import CLIContext
from tagtrain.core.config import Config
from tagtrain.core.errors import ErrorCode
from tagtrain.git.repository import Repository
from tagtrain.output.console import MockConsole


def _ctx(tmp_path: Path) -> CLIContext:
    return CLIContext(repo=Repository(tmp_path), config=Config(), console=MockConsole())


def test_patch_manifest_strips_v(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import tagtrain.cli.commands.manifest_cmd as manifest_cmd

    manifest = tmp_path / "Cargo.toml"
    manifest.write_text('[package]\nversion = "0.22.0" # crate version\n', encoding="utf-8")
    monkeypatch.setattr(manifest_cmd, "build_context", lambda: _ctx(tmp_path))

    manifest_cmd.patch_manifest(version="v0.22.1-alpha.0", dry_run=False)

    assert manifest.read_text(encoding="utf-8") == (
        '[package]\nversion = "0.22.1-alpha.0" # crate version\n'
    )


def test_patch_manifest_not_found_exit_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import tagtrain.cli.commands.manifest_cmd as manifest_cmd

    (tmp_path / "Cargo.toml").write_text('[package]\nversion = "0.22.0"\n', encoding="utf-8")
    monkeypatch.setattr(manifest_cmd, "build_context", lambda: _ctx(tmp_path))

    with pytest.raises(typer.Exit) as exc:
        manifest_cmd.patch_manifest(version="1.0.0", dry_run=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


@pytest.mark.parametrize("version", ["", '1"2', "1.2", "v1.2.3-alpha"])
def test_patch_manifest_rejects_non_version(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, version: str
) -> None:
    import tagtrain.cli.commands.manifest_cmd as manifest_cmd

    original = '[package]\nversion = "0.22.0" # crate version\n'
    manifest = tmp_path / "Cargo.toml"
    manifest.write_text(original, encoding="utf-8")
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(manifest_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        manifest_cmd.patch_manifest(version=version, dry_run=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert manifest.read_text(encoding="utf-8") == original
    assert isinstance(ctx.console, MockConsole)
    assert ctx.console.has_error()
