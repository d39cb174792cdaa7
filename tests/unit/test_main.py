"""Tests for the command-line entry point."""

import logging
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import structlog

from src.main import parse_args, run, setup_logging
from src.telegram.client import TelegramClient


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)


def test_defaults():
    args = parse_args([])

    assert args.transport == "http"
    assert args.host is None
    assert args.port is None
    assert args.debug is False


def test_stdio_transport():
    args = parse_args(["--transport", "stdio", "--debug"])

    assert args.transport == "stdio"
    assert args.debug is True


def test_missing_token_exits_with_error(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)

    assert run([]) == 1


def test_run_passes_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    with patch("src.main.serve", new=AsyncMock()) as serve:
        assert run(["--port", "9100", "--host", "127.0.0.1"]) == 0

    settings, transport = serve.await_args.args
    assert transport == "http"
    assert settings.api_server_port == 9100
    assert settings.api_server_host == "127.0.0.1"


@pytest.mark.parametrize("debug", [False, True])
async def test_outbound_urls_do_not_leak_bot_token(capsys, debug):
    """Request URLs carry the token, so HTTP client logs must stay quiet."""
    setup_logging("INFO", debug=debug)
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    )
    client = TelegramClient("123456:SECRET-TOKEN", http_client=http_client)

    await client.call("getMe")
    await http_client.aclose()

    assert "SECRET-TOKEN" not in capsys.readouterr().err
