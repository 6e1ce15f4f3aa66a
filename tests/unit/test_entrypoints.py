"""Unit tests for the server entry point and the import script."""

import importlib.util
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from cashflow import __main__ as server
from cashflow.config import settings
from cashflow.models.category import Category
from cashflow.models.transaction import Transaction, TransactionType
from cashflow.services.import_transactions import ImportOutcome

SCRIPT_PATH = Path(__file__).parents[2] / "scripts" / "import_csv.py"


@pytest.fixture
def script():
    """Load scripts/import_csv.py as a module."""
    spec = importlib.util.spec_from_file_location("import_csv_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def patched_script(script, monkeypatch):
    """Replace the script's session, engine and service with mocks."""
    engine = MagicMock()
    engine.dispose = AsyncMock()
    service = MagicMock()
    service.return_value.import_file = AsyncMock()

    monkeypatch.setattr(script, "async_engine", engine)
    monkeypatch.setattr(script, "AsyncSessionLocal", MagicMock())
    monkeypatch.setattr(script, "ImportTransactionsService", service)
    return script, engine, service


class TestServerEntryPoint:
    """Test python -m cashflow."""

    def test_serves_app_on_configured_address(self, monkeypatch):
        run = MagicMock()
        monkeypatch.setattr(server.uvicorn, "run", run)
        monkeypatch.setattr(settings, "host", "127.0.0.1")
        monkeypatch.setattr(settings, "port", 9100)

        server.main()

        run.assert_called_once()
        args, kwargs = run.call_args
        assert args == ("cashflow.main:app",)
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 9100


class TestImportScript:
    """Test scripts/import_csv.py."""

    async def test_returns_summary(self, patched_script):
        script, engine, service = patched_script
        food = Category(title="Food")
        transaction = Transaction(
            title="Lunch", type=TransactionType.OUTCOME, value="12.50", category=food
        )
        service.return_value.import_file.return_value = ImportOutcome(
            transactions=[transaction], created_categories=[food]
        )

        result = await script.import_csv("import.csv")

        assert result["imported_count"] == 1
        assert result["categories_created"] == ["Food"]
        assert result["transactions"][0] == {
            "title": "Lunch",
            "type": "outcome",
            "value": "12.50",
            "category": "Food",
        }
        engine.dispose.assert_awaited_once()

    async def test_engine_disposed_when_import_fails(self, patched_script):
        script, engine, service = patched_script
        service.return_value.import_file.side_effect = OSError("disk gone")

        with pytest.raises(OSError, match="disk gone"):
            await script.import_csv("import.csv")

        engine.dispose.assert_awaited_once()

    def test_missing_argument_exits(self, script, monkeypatch, capsys):
        monkeypatch.setattr(script.sys, "argv", ["import_csv.py"])

        with pytest.raises(SystemExit) as exc_info:
            script.main()

        assert exc_info.value.code == 1
        assert "Usage" in capsys.readouterr().err

    def test_missing_file_exits(self, script, monkeypatch, tmp_path, capsys):
        missing = tmp_path / "missing.csv"
        monkeypatch.setattr(script.sys, "argv", ["import_csv.py", str(missing)])

        with pytest.raises(SystemExit) as exc_info:
            script.main()

        assert exc_info.value.code == 1
        assert "File not found" in capsys.readouterr().err
