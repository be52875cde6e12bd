import pytest
import sys
import sqlite3
import importlib
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


class TestRequirements:
    """Test that all required dependencies are available."""

    def test_python_version(self):
        """Test Python version is supported."""
        assert sys.version_info >= (3, 9), f"Python 3.9+ required, got {sys.version_info}"

    def test_core_dependencies(self):
        """Test that core dependencies can be imported."""
        required_modules = [
            'loguru',
            'pydantic',
            'pydantic_settings',
            'fastapi',
            'uvicorn',
        ]

        missing_modules = []
        for module_name in required_modules:
            try:
                importlib.import_module(module_name)
            except ImportError:
                missing_modules.append(module_name)

        if missing_modules:
            pytest.fail(f"Missing required modules: {missing_modules}")

    def test_sqlite_supports_upsert(self):
        """Test the SQLite library supports ON CONFLICT ... DO UPDATE (3.24+)."""
        assert sqlite3.sqlite_version_info >= (3, 24, 0), sqlite3.sqlite_version

    def test_settings_defaults(self, monkeypatch):
        """Test settings fall back to their defaults when nothing is configured."""
        from garden_graph.config import Settings

        for name in ("GRAPH_DB_PATH", "SEED_ON_STARTUP", "EXPORT_DIR", "API_HOST",
                     "API_PORT", "LOG_LEVEL", "LOG_FILE"):
            monkeypatch.delenv(name, raising=False)
        defaults = Settings(_env_file=None)

        assert defaults.graph_db_path == "data/garden-knowledge.sqlite"
        assert defaults.seed_on_startup is True
        assert defaults.export_dir == "exports"
        assert defaults.api_host == "0.0.0.0"
        assert defaults.api_port == 8000
        assert defaults.log_level == "INFO"
        assert defaults.log_file == "logs/app.log"
        assert defaults.log_dir == Path("logs")

    def test_settings_env_overrides(self, monkeypatch):
        """Test settings read overrides from the environment."""
        from garden_graph.config import Settings

        monkeypatch.setenv("GRAPH_DB_PATH", "/tmp/override.sqlite")
        monkeypatch.setenv("API_PORT", "9001")
        overridden = Settings(_env_file=None)

        assert overridden.graph_db_path == "/tmp/override.sqlite"
        assert overridden.api_port == 9001
        assert overridden.log_dir == Path(overridden.log_file).parent
