from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

DOMAIN_PACKAGE = "resto.domain"

# Layers of this project the domain must never reach into.
FORBIDDEN_LAYERS = {
    "resto.application",
    "resto.infrastructure",
    "resto.tools",
    "resto.config",
}

DEFAULT_DOMAIN_PATH = Path(__file__).resolve().parents[1] / "src" / "resto" / "domain"


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str
    reason: str


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
        return
    if root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _within(module: str, package: str) -> bool:
    return module == package or module.startswith(f"{package}.")


def _classify(module: str) -> str | None:
    if _within(module, DOMAIN_PACKAGE):
        return None
    for layer in FORBIDDEN_LAYERS:
        if _within(module, layer):
            return f"domain must not import {layer}"
    top_level = module.split(".", 1)[0]
    if top_level == "__future__" or top_level in sys.stdlib_module_names:
        return None
    return "domain may only import the standard library"


def _scan_file(file_path: Path) -> list[Violation]:
    tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
    violations: list[Violation] = []

    for node in ast.walk(tree):
        modules: list[str] = []
        if isinstance(node, ast.Import):
            modules = [alias.name for alias in node.names]
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            modules = [node.module]

        for module in modules:
            reason = _classify(module)
            if reason is not None:
                violations.append(
                    Violation(file_path=file_path, line=node.lineno, module=module, reason=reason)
                )

    return violations


def find_violations(paths: Sequence[Path]) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            violations.extend(_scan_file(file_path))
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Dependency policy check: resto.domain imports only the stdlib and itself."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to src/resto/domain.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    scan_paths = [Path(item) for item in args.path] if args.path else [DEFAULT_DOMAIN_PATH]

    violations = find_violations(scan_paths)
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(f"{violation.file_path}:{violation.line} -> {violation.module} ({violation.reason})")
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
