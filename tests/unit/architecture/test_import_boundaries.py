"""Tests for architecture import boundaries.

These tests ensure that the layering of the package is maintained:
- domain imports nothing from application, infrastructure or cli
- application and infrastructure never import from cli
"""

from __future__ import annotations

import ast
from pathlib import Path

import pytest

# Root of the ead_exporter package
PACKAGE_ROOT = Path(__file__).parent.parent.parent.parent / "ead_exporter"
PACKAGE = PACKAGE_ROOT.name


def get_python_files(directory: Path) -> list[Path]:
    return sorted(directory.rglob("*.py"))


def _module_parts(file_path: Path) -> list[str]:
    relative = file_path.relative_to(PACKAGE_ROOT.parent).with_suffix("")
    parts = list(relative.parts)
    if parts[-1] == "__init__":
        parts = parts[:-1]
    return parts


def extract_imports_from_file(file_path: Path) -> list[str]:
    """Return absolute module names imported by ``file_path``.

    Relative imports are resolved against the file's own package.
    """
    tree = ast.parse(file_path.read_text(encoding="utf-8"))
    package_parts = _module_parts(file_path)
    if file_path.name != "__init__.py":
        package_parts = package_parts[:-1]

    imports: list[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            imports.extend(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            if node.level:
                base = package_parts[: len(package_parts) - node.level + 1]
                module = ".".join([*base, node.module] if node.module else base)
            else:
                module = node.module or ""
            imports.append(module)
    return imports


def _layer_violations(layer: str, forbidden: tuple[str, ...]) -> list[str]:
    violations = []
    for file_path in get_python_files(PACKAGE_ROOT / layer):
        for module in extract_imports_from_file(file_path):
            for target in forbidden:
                prefix = f"{PACKAGE}.{target}"
                if module == prefix or module.startswith(f"{prefix}."):
                    relative = file_path.relative_to(PACKAGE_ROOT)
                    violations.append(f"{relative} imports {module}")
    return violations


class TestImportBoundaries:
    @pytest.mark.parametrize(
        ("layer", "forbidden"),
        [
            ("domain", ("application", "infrastructure", "cli")),
            ("application", ("cli",)),
            ("infrastructure", ("cli",)),
        ],
    )
    def test_layer_does_not_import_outer_layers(self, layer, forbidden):
        violations = _layer_violations(layer, forbidden)
        assert not violations, "\n".join(violations)

    def test_resolver_handles_relative_imports(self):
        file_path = PACKAGE_ROOT / "infrastructure" / "io" / "ead" / "serializer.py"
        imports = extract_imports_from_file(file_path)

        assert f"{PACKAGE}.application.models" in imports
        assert f"{PACKAGE}.infrastructure.io.ead.stream" in imports
