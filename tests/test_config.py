"""Tests for the configuration module."""

import pytest

from log_middleware.config import MiddlewareConfig, load_config
from log_middleware.models import Package, Stack

ENV_VARS = (
    "EVAL_BASE_URL",
    "EVAL_LOGS_PATH",
    "EVAL_TIMEOUT",
    "DEFAULT_STACK",
    "DEFAULT_PACKAGE",
    "HISTORY_SIZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    cfg = MiddlewareConfig()
    assert cfg.base_url == "http://20.244.56.144/evaluation-service"
    assert cfg.logs_path == "/logs"
    assert cfg.timeout == 10.0
    assert cfg.default_stack is Stack.FRONTEND
    assert cfg.default_package is Package.API
    assert cfg.history_size == 50


def test_load_without_overrides():
    assert load_config([]) == MiddlewareConfig()


def test_from_env(monkeypatch):
    monkeypatch.setenv("EVAL_BASE_URL", "http://localhost:8080/eval/")
    monkeypatch.setenv("EVAL_LOGS_PATH", "/v1/logs")
    monkeypatch.setenv("EVAL_TIMEOUT", "2.5")
    monkeypatch.setenv("DEFAULT_STACK", "backend")
    monkeypatch.setenv("DEFAULT_PACKAGE", "service")
    monkeypatch.setenv("HISTORY_SIZE", "10")

    cfg = load_config([])
    assert cfg.base_url == "http://localhost:8080/eval"
    assert cfg.logs_path == "/v1/logs"
    assert cfg.timeout == 2.5
    assert cfg.default_stack is Stack.BACKEND
    assert cfg.default_package is Package.SERVICE
    assert cfg.history_size == 10


def test_cli_args():
    cfg = load_config(["--base-url", "http://cli.test", "--timeout", "3", "--default-package", "db"])
    assert cfg.base_url == "http://cli.test"
    assert cfg.timeout == 3.0
    assert cfg.default_package is Package.DB


def test_cli_overrides_env(monkeypatch):
    monkeypatch.setenv("EVAL_TIMEOUT", "30")
    cfg = load_config(["--timeout", "1.5"])
    assert cfg.timeout == 1.5


def test_unknown_args_ignored():
    cfg = load_config(["send", "--message", "hi", "--history-size", "5"])
    assert cfg.history_size == 5


def test_invalid_default_package_rejected(monkeypatch):
    monkeypatch.setenv("DEFAULT_PACKAGE", "utils")
    with pytest.raises(ValueError):
        load_config([])


def test_frozen():
    cfg = MiddlewareConfig()
    with pytest.raises(AttributeError):
        cfg.timeout = 1.0
