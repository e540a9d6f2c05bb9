"""Static import boundary guard for the trip_coherence layers."""

from __future__ import annotations

import argparse
import ast
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

PACKAGE = "trip_coherence"
KNOWN_LAYERS = {"config", "domain", "infrastructure", "repair", "services", "shared", "validators"}
FORBIDDEN_IMPORTS = {
    ("domain", "infrastructure"): "domain layer must not import infrastructure layer",
    ("domain", "validators"): "domain layer must not import validators",
    ("domain", "repair"): "domain layer must not import repair layer",
    ("domain", "services"): "domain layer must not import services layer",
    ("validators", "repair"): "validators must stay read-only and not import repair",
    ("validators", "services"): "validators must not import services layer",
    ("repair", "services"): "repair layer must not import services layer",
}


@dataclass(frozen=True)
class ImportRecord:
    source_file: Path
    source_module: str
    source_layer: str | None
    target_module: str
    target_layer: str | None
    lineno: int


def _module_name(path: Path) -> str:
    parts = list(path.with_suffix("").parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def _layer(module_name: str) -> str | None:
    parts = module_name.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE:
        return None
    return parts[1] if parts[1] in KNOWN_LAYERS else None


def _absolute(source_module: str, is_package: bool, node: ast.ImportFrom) -> str:
    """Resolve ``from ..x import y`` against the importing module."""
    package = source_module.split(".")
    if not is_package:
        package = package[:-1]
    if node.level > 1:
        package = package[: len(package) - (node.level - 1)]
    return ".".join([*package, *([node.module] if node.module else [])])


def _targets(node: ast.AST, source_module: str, is_package: bool) -> Iterator[str]:
    if isinstance(node, ast.Import):
        for alias in node.names:
            yield alias.name
    elif isinstance(node, ast.ImportFrom):
        if node.level == 0:
            if node.module:
                yield node.module
            return
        base = _absolute(source_module, is_package, node)
        if node.module:
            yield base
            return
        for alias in node.names:
            if alias.name != "*":
                yield f"{base}.{alias.name}"


def collect_import_records(root: str | Path = PACKAGE) -> list[ImportRecord]:
    """Every intra-package import under ``root``; paths must be relative to the repo root."""
    records: list[ImportRecord] = []
    for path in sorted(Path(root).rglob("*.py")):
        if "__pycache__" in path.parts:
            continue
        tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
        source_module = _module_name(path)
        is_package = path.name == "__init__.py"
        for node in ast.walk(tree):
            for target in _targets(node, source_module, is_package):
                if not target.startswith(f"{PACKAGE}."):
                    continue
                records.append(
                    ImportRecord(
                        source_file=path,
                        source_module=source_module,
                        source_layer=_layer(source_module),
                        target_module=target,
                        target_layer=_layer(target),
                        lineno=getattr(node, "lineno", 1),
                    )
                )
    return records


def check_import_boundaries(root: str | Path = PACKAGE) -> list[str]:
    violations = set()
    for rec in collect_import_records(root):
        rule = FORBIDDEN_IMPORTS.get((rec.source_layer, rec.target_layer))
        if rule:
            violations.add(
                f"{rec.source_file.as_posix()}:{rec.lineno} {rec.source_module} -> {rec.target_module}: {rule}"
            )
    return sorted(violations)


def main() -> int:
    parser = argparse.ArgumentParser(description="Check trip_coherence import boundaries")
    parser.add_argument("--root", default=PACKAGE, help="Package directory to scan")
    args = parser.parse_args()

    violations = check_import_boundaries(args.root)
    if violations:
        print("Import boundary violations:")
        for line in violations:
            print(f"- {line}")
        return 1

    print("Import boundary check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
