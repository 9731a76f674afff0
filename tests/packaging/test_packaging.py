"""Packaging correctness verification for json-table-editor.

Tests validate that:
- The base install imports with no third-party runtime dependencies
- py.typed marker is present in the source tree and in the wheel
- Package metadata and the public ``__all__`` are correct

The wheel checks build with poetry and are skipped when poetry is not
available.
"""

from __future__ import annotations

import subprocess
import tomllib
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent
PACKAGE_DIR = PROJECT_ROOT / "src" / "json_table_editor"


class TestBaseInstall:
    """Verify the base install is usable on its own."""

    def test_import_json_table_editor(self) -> None:
        """Top-level import succeeds."""
        import json_table_editor

        assert hasattr(json_table_editor, "JsonTableEditor")
        assert hasattr(json_table_editor, "parse_document")
        assert hasattr(json_table_editor, "serialize")

    def test_editor_basic(self) -> None:
        """An editor loads, edits and exports with default configuration."""
        from json_table_editor import JsonTableEditor

        editor = JsonTableEditor()
        editor.load_text('[{"a": 1}]')
        assert editor.edit_cell("0.a", "2").applied
        assert editor.export_json() == '[\n  {\n    "a": 2\n  }\n]'

    def test_no_runtime_dependencies(self) -> None:
        """pyproject.toml declares no runtime dependencies."""
        with (PROJECT_ROOT / "pyproject.toml").open("rb") as fh:
            project = tomllib.load(fh)["project"]
        assert project["dependencies"] == []
        assert "pytest" in " ".join(project["optional-dependencies"]["test"])

    def test_py_typed_in_source(self) -> None:
        assert (PACKAGE_DIR / "py.typed").is_file()


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self, tmp_path_factory: pytest.TempPathFactory) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = tmp_path_factory.mktemp("dist")
        try:
            result = subprocess.run(
                ["poetry", "build", "-f", "wheel", "-o", str(dist_dir)],
                cwd=str(PROJECT_ROOT),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            pytest.skip("poetry is not installed")
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("*.whl"))
        if not wheels:
            pytest.skip("No wheel found in build output")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path) -> None:
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("json_table_editor/py.typed") for n in names), (
                f"py.typed not found in wheel. Contents: {names}"
            )

    def test_all_source_modules_in_wheel(self, wheel_path: Path) -> None:
        """Every module under src/ must be present in the wheel."""
        expected = [
            path.relative_to(PACKAGE_DIR.parent).as_posix()
            for path in PACKAGE_DIR.rglob("*.py")
            if "__pycache__" not in path.parts
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
        for module in expected:
            assert module in names, f"Module {module} not found in wheel"
        assert not [n for n in names if "__pycache__" in n]


class TestPackageMetadata:
    """Verify the version and public API."""

    def test_version(self) -> None:
        import json_table_editor

        assert json_table_editor.__version__ == "0.1.0"

    def test_version_matches_pyproject(self) -> None:
        import json_table_editor

        with (PROJECT_ROOT / "pyproject.toml").open("rb") as fh:
            version = tomllib.load(fh)["project"]["version"]
        assert json_table_editor.__version__ == version

    def test_all_exports(self) -> None:
        """__all__ must include the documented public API."""
        import json_table_editor

        expected = {
            "NOT_FOUND",
            "Address",
            "CellEdit",
            "CellFailure",
            "CoercionFailure",
            "CsvColumnsError",
            "DocumentInfo",
            "EditorConfig",
            "EditorError",
            "ImportResult",
            "JsonTableEditor",
            "Kind",
            "ParseError",
            "TransferResult",
            "TreeState",
            "parse_document",
            "serialize",
        }
        actual = set(json_table_editor.__all__)
        assert expected == actual, (
            f"Missing: {expected - actual}, Extra: {actual - expected}"
        )
        for name in actual:
            assert hasattr(json_table_editor, name)
