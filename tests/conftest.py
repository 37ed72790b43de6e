"""
Global test configuration for the summarize client.
"""

import os
from pathlib import Path

import pytest

from summarize_client.config import Configuration
from summarize_client.config import scope as config_scope_module
from summarize_client.client import SummarizeClient
from tests.fixtures.payloads import (
    EXTRACT_RESPONSE,
    SUMMARY_RESPONSE,
    SUMMARY_RESPONSE_JSON,
)
from tests.helpers import FakeRunner, write_executable


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_summarize_env(request, monkeypatch):
    """Ensure a clean SUMMARIZE_CLIENT_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("SUMMARIZE_CLIENT_"):
            monkeypatch.delenv(key, raising=False)
    # Avoid telemetry toggles leaking between tests
    monkeypatch.delenv("SUMMARIZE_TELEMETRY", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def reset_default_configuration(monkeypatch):
    """Start every test without a process-wide default configuration."""
    monkeypatch.setattr(config_scope_module, "_default_configuration", None)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Tests that launch real subprocesses",
        "slow: Tests that take >1 second",
        "allow_env_pollution: Keep SUMMARIZE_CLIENT_* variables from the host",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def fake_binary(tmp_path) -> Path:
    """An executable file standing in for the summarize binary."""
    return write_executable(tmp_path / "bin" / "summarize", "raise SystemExit(0)\n")


@pytest.fixture
def config(fake_binary) -> Configuration:
    """Configuration pointing at the fake binary with the version gate off."""
    return Configuration(
        binary_path=str(fake_binary),
        skip_version_check=True,
        inherit_env=False,
    )


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner(stdout=SUMMARY_RESPONSE_JSON)


@pytest.fixture
def client(config, runner) -> SummarizeClient:
    return SummarizeClient(config, runner=runner)


@pytest.fixture
def summary_payload() -> dict:
    return SUMMARY_RESPONSE


@pytest.fixture
def extract_payload() -> dict:
    return EXTRACT_RESPONSE

