"""Shared test fixtures for the Receipts test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from receipts.api.app import create_app
from receipts.audit import AuditLog
from receipts.config.settings import Settings
from receipts.ledger import MockLedgerClient

OPERATOR_ID = "0.0.1001"


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            if self.original_env[key] is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = self.original_env[key]


@pytest.fixture
def env_override() -> Callable[[dict[str, str]], EnvOverrideContext]:
    """Temporarily set environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"RECEIPTS_DEBUG": "true"}):
                ...
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    return _env_override


@pytest.fixture(autouse=True)
def isolated_settings(
    test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Read settings from the empty test config directory, never the repo's.

    Hedera credential variables from the outer environment are removed and the
    settings cache is cleared around each test.
    """
    from receipts.config import get_settings

    monkeypatch.setenv("RECEIPTS_CONFIG_DIR", str(test_config_dir))
    monkeypatch.delenv("RECEIPTS_ENV", raising=False)
    monkeypatch.delenv("HEDERA_ACCOUNT_ID", raising=False)
    monkeypatch.delenv("HEDERA_PRIVATE_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings for a mock-ledger app."""
    return Settings(ledger={"backend": "mock", "operator_id": OPERATOR_ID})


@pytest.fixture
def ledger() -> MockLedgerClient:
    """Mock ledger with the operator and two customer accounts."""
    client = MockLedgerClient(operator_id=OPERATOR_ID)
    client.add_account("0.0.1002", hbars=10)
    client.add_account("0.0.1003", hbars=5)
    return client


@pytest.fixture
def audit_log() -> AuditLog:
    """Fresh audit log."""
    return AuditLog()


@pytest.fixture
def app(settings: Settings, ledger: MockLedgerClient, audit_log: AuditLog) -> FastAPI:
    """Application wired to the mock ledger and the audit_log fixture."""
    return create_app(settings=settings, ledger=ledger, audit_log=audit_log)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client."""
    return TestClient(app)
