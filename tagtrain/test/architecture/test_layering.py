"""Static checks on how the package is layered.

- release/ (domain) never imports services/, cli/ or rich
- services/ never imports cli/
- subprocess is only called from platform/process.py
- rich is only imported by output/console.py
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def _pkg_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _iter_source_files(base: Path) -> list[Path]:
    root = _pkg_root()
    files: list[Path] = []
    for path in sorted(base.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts and rel.parts[0] == "test":
            continue
        if any(part == "__pycache__" for part in rel.parts):
            continue
        files.append(path)
    return files


def _read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def _parse_imports(path: Path) -> list[ImportRef]:
    imports: list[ImportRef] = []
    for node in ast.walk(_read_tree(path)):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(ImportRef(module=alias.name, line=node.lineno))
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            imports.append(ImportRef(module=node.module, line=node.lineno))
    return imports


def _matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(prefix + ".")


def _forbidden_imports(base: Path, prefixes: tuple[str, ...]) -> list[str]:
    root = _pkg_root()
    offenders: list[str] = []
    for file_path in _iter_source_files(base):
        rel = file_path.relative_to(root)
        for item in _parse_imports(file_path):
            if any(_matches_prefix(item.module, p) for p in prefixes):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")
    return offenders


def test_release_domain_does_not_import_adapters() -> None:
    offenders = _forbidden_imports(
        _pkg_root() / "release",
        ("tagtrain.services", "tagtrain.cli", "rich", "typer"),
    )
    assert not offenders, "release -> adapter dependency violations:\n" + "\n".join(offenders)


def test_services_do_not_import_cli() -> None:
    offenders = _forbidden_imports(_pkg_root() / "services", ("tagtrain.cli", "typer"))
    assert not offenders, "services -> cli dependency violations:\n" + "\n".join(offenders)


def test_subprocess_is_only_called_from_platform_process() -> None:
    root = _pkg_root()
    offenders: list[str] = []
    for file_path in _iter_source_files(root):
        rel = file_path.relative_to(root)
        if str(rel) == "platform/process.py":
            continue
        for node in ast.walk(_read_tree(file_path)):
            if not isinstance(node, ast.Call) or not isinstance(node.func, ast.Attribute):
                continue
            func = node.func
            if isinstance(func.value, ast.Name) and func.value.id == "subprocess":
                offenders.append(f"{rel}:{node.lineno}: direct subprocess call")
    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)


def test_rich_is_only_imported_by_console() -> None:
    root = _pkg_root()
    offenders = [
        line
        for line in _forbidden_imports(root, ("rich",))
        if not line.startswith("output/console.py:")
    ]
    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)
