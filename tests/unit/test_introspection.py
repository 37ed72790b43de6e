"""Unit tests for ``python -m summarize_client.config``."""

import json

import pytest

from summarize_client.config import Configuration
from summarize_client.config.introspection import (
    check_environment,
    get_config_info,
    main,
)


@pytest.mark.unit
def test_ready_configuration(config):
    config.cli_version = "0.6.0"
    info = get_config_info(config)

    assert info["status"] == "ok"
    assert info["problems"] == []
    assert info["cli"]["version"] == "0.6.0"
    assert info["cli"]["minimum_version"] == "0.5.0"
    assert info["cli"]["binary_path"] == config.binary_path


@pytest.mark.unit
def test_env_values_are_not_reported(config):
    config.env = {"OPENAI_API_KEY": "sk-secret"}
    config.cli_version = None
    info = get_config_info(config)

    assert info["config"]["env"] == ["OPENAI_API_KEY"]
    assert "sk-secret" not in json.dumps(info)


@pytest.mark.unit
def test_missing_binary_is_reported(tmp_path):
    config = Configuration(binary_path=str(tmp_path / "missing"), cli_version=None)

    problems = check_environment(config)

    assert len(problems) == 1
    assert "summarize binary not found" in problems[0]
    assert get_config_info(config)["status"] == "unusable"


@pytest.mark.unit
def test_invalid_environment(monkeypatch):
    monkeypatch.setenv("SUMMARIZE_CLIENT_RETRIES", "-3")
    info = get_config_info()
    assert info["status"] == "invalid"
    assert info["config"] is None


@pytest.mark.unit
def test_check_exit_codes(monkeypatch, fake_binary):
    monkeypatch.setenv("SUMMARIZE_CLIENT_BINARY_PATH", str(fake_binary))
    monkeypatch.setenv("SUMMARIZE_CLIENT_SKIP_VERSION_CHECK", "1")
    with pytest.raises(SystemExit) as exc_info:
        main(["--check"])
    assert exc_info.value.code == 0

    monkeypatch.setenv("SUMMARIZE_CLIENT_BINARY_PATH", str(fake_binary) + ".missing")
    with pytest.raises(SystemExit) as exc_info:
        main(["--check"])
    assert exc_info.value.code == 1


@pytest.mark.unit
def test_json_output(monkeypatch, capsys, fake_binary):
    monkeypatch.setenv("SUMMARIZE_CLIENT_BINARY_PATH", str(fake_binary))
    monkeypatch.setenv("SUMMARIZE_CLIENT_SKIP_VERSION_CHECK", "true")
    monkeypatch.setenv("SUMMARIZE_CLIENT_DEFAULT_LENGTH", "short")

    main(["--json"])

    info = json.loads(capsys.readouterr().out)
    assert info["status"] == "ok"
    assert info["config"]["default_length"] == "short"


@pytest.mark.unit
def test_human_output(config, capsys, monkeypatch):
    monkeypatch.setenv("SUMMARIZE_CLIENT_BINARY_PATH", config.binary_path)
    monkeypatch.setenv("SUMMARIZE_CLIENT_SKIP_VERSION_CHECK", "true")

    main([])

    out = capsys.readouterr().out
    assert "=== Effective Configuration ===" in out
    assert "summarize CLI is ready" in out
