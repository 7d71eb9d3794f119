from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer

from tagtrain.core.config import CONFIG_FILE_NAME, Config, load_config, load_config_or_default
from tagtrain.core.result import Err
from tagtrain.git.repository import Repository
from tagtrain.output.console import ConsoleProtocol, RichConsole
from tagtrain.output.errors import print_release_error, release_error_code
from tagtrain.release.errors import ReleaseError
from tagtrain.release.history import GitTagHistory

# Set by the root callback from --repo / --config.
REPO_ENV = "TAGTRAIN_REPO"
CONFIG_ENV = "TAGTRAIN_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    repo: Repository
    config: Config
    console: ConsoleProtocol

    @property
    def manifest_path(self) -> Path:
        return self.repo.path / self.config.manifest.path

    def history(self) -> GitTagHistory:
        return GitTagHistory(self.repo, sort=self.config.release.tag_sort)


def exit_with(error: ReleaseError, *, console: ConsoleProtocol) -> NoReturn:
    print_release_error(error, console)
    raise typer.Exit(code=int(release_error_code(error)))


def _repo_root() -> Path:
    env = os.environ.get(REPO_ENV)
    root = Path(env) if env else Path.cwd()
    return root.expanduser().resolve()


def build_context() -> CLIContext:
    console = RichConsole(stderr=True)
    root = _repo_root()
    repo = Repository(root)
    if not root.is_dir() or not repo.exists():
        exit_with(
            ReleaseError(
                kind="git_failed",
                message=f"not a git checkout: {root}",
                hint="Run from the repository root or pass --repo",
            ),
            console=console,
        )

    config_env = os.environ.get(CONFIG_ENV)
    if config_env:
        # An explicit --config must exist; only the implicit file is optional.
        config_path = Path(config_env).expanduser()
        config_result = load_config(config_path)
    else:
        config_path = root / CONFIG_FILE_NAME
        config_result = load_config_or_default(config_path)
    if isinstance(config_result, Err):
        exit_with(
            ReleaseError(
                kind="invalid_config",
                message=config_result.error.message,
                hint=str(config_path),
            ),
            console=console,
        )

    return CLIContext(repo=repo, config=config_result.value, console=console)
