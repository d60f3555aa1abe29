"""Tests for pyproject.toml and package installation."""
from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


class TestPackageInstallation:
    """Test that the package is properly installed."""

    def test_package_importable(self):
        """Package can be imported."""
        import ssml_ms
        assert ssml_ms is not None

    def test_version_defined(self):
        """Package has __version__ attribute."""
        import ssml_ms
        assert isinstance(ssml_ms.__version__, str)
        assert len(ssml_ms.__version__) > 0

    def test_core_modules_importable(self):
        """Core modules can be imported."""
        from ssml_ms.api import routes, schemas
        from ssml_ms.core import config, logging, metrics
        from ssml_ms.services import validation_service
        from ssml_ms.ssml import schema, tokenizer, validator

        for module in (routes, schemas, config, logging, metrics,
                       validation_service, schema, tokenizer, validator):
            assert module is not None


class TestPyprojectToml:
    """Test pyproject.toml content."""

    def test_pyproject_exists(self):
        """pyproject.toml exists at the repository root."""
        assert (ROOT / "pyproject.toml").exists()

    def test_declares_runtime_dependencies(self):
        """Runtime libraries are declared under their index names."""
        content = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
        for dep in ("fastapi", "uvicorn", "pydantic", "pyyaml", "prometheus-client"):
            assert f'"{dep}' in content

    def test_version_matches_package(self):
        """pyproject version matches ssml_ms.__version__."""
        import ssml_ms

        content = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
        assert f'version = "{ssml_ms.__version__}"' in content
