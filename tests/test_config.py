"""Tests for settings loading, logging setup and deployment config."""

from __future__ import annotations

import logging
import runpy
from pathlib import Path

import pytest
import structlog

from tdt_proxy.core.config import (
    DEFAULT_SPOOFED_HEADERS,
    TIANDITU_SEARCH_URL,
    ProxySettings,
)
from tdt_proxy.core.logging import setup_logging

GUNICORN_CONF = Path(__file__).resolve().parent.parent / "gunicorn_conf.py"


def test_defaults() -> None:
    settings = ProxySettings(_env_file=None)

    assert settings.service_port == 3000
    assert settings.upstream_base_url == TIANDITU_SEARCH_URL
    assert settings.spoofed_headers == DEFAULT_SPOOFED_HEADERS
    assert settings.spoofed_headers is not DEFAULT_SPOOFED_HEADERS
    assert settings.json_logs is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVICE_PORT", "8080")
    monkeypatch.setenv("UPSTREAM_BASE_URL", "http://stub:9000/search")
    monkeypatch.setenv("SPOOFED_HEADERS", '{"User-Agent": "test-agent"}')
    monkeypatch.setenv("ENVIRONMENT", "Production")

    settings = ProxySettings(_env_file=None)

    assert settings.service_port == 8080
    assert settings.upstream_base_url == "http://stub:9000/search"
    assert settings.spoofed_headers == {"User-Agent": "test-agent"}
    assert settings.is_production
    assert settings.json_logs


def test_setup_logging_installs_single_stdout_handler() -> None:
    setup_logging(log_level="debug", json_logs=True, service_name="tdt_proxy_test")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert root.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_gunicorn_conf_reads_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVICE_PORT", "4100")

    conf = runpy.run_path(str(GUNICORN_CONF))

    assert conf["bind"] == "0.0.0.0:4100"
    assert conf["worker_class"] == "uvicorn.workers.UvicornWorker"
