"""Tests for the HTTP routes."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from src.api.server import create_api_app
from src.config import create_test_config
from src.mcp.dispatcher import ToolDispatcher
from src.mcp.processor import McpRequestProcessor

GET_ME = {"ok": True, "result": {"id": 1, "is_bot": True}}


@pytest.fixture
def telegram():
    client = MagicMock()
    client.call = AsyncMock(return_value=GET_ME)
    client.close = AsyncMock()
    return client


@pytest.fixture
def processor(telegram):
    synthesizer = MagicMock()
    synthesizer.synthesize = AsyncMock(return_value=None)
    synthesizer.close = AsyncMock()
    return McpRequestProcessor(ToolDispatcher(telegram, synthesizer))


@pytest.fixture
def settings():
    return create_test_config()


@pytest.fixture
def client(settings, processor):
    return TestClient(create_api_app(settings, processor))


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "telegram-cloud"}


class TestMcpEndpoint:
    def test_tools_call(self, client, telegram):
        response = client.post(
            "/mcp",
            json={
                "jsonrpc": "2.0",
                "id": 1,
                "method": "tools/call",
                "params": {"name": "telegram_get_me", "arguments": {}},
            },
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        body = response.json()
        assert body["id"] == 1
        assert json.loads(body["result"]["content"][0]["text"]) == GET_ME
        telegram.call.assert_awaited_once_with("getMe")

    def test_unknown_method_is_jsonrpc_error(self, client):
        response = client.post(
            "/mcp", json={"jsonrpc": "2.0", "id": "x", "method": "foo"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "jsonrpc": "2.0",
            "id": "x",
            "error": {"code": -32601, "message": "Method not found: foo"},
        }

    def test_invalid_json_body(self, client):
        response = client.post(
            "/mcp", content=b"{not json", headers={"content-type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32700, "message": "Parse error"},
        }

    @pytest.mark.parametrize("body", [[1, 2, 3], [], "initialize", 42])
    def test_non_object_body_is_invalid_request(self, client, body):
        response = client.post("/mcp", json=body)

        assert response.status_code == 400
        assert response.json() == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32600, "message": "Invalid Request"},
        }

    def test_get_is_not_found(self, client):
        response = client.get("/mcp")

        assert response.status_code == 404
        assert response.text == "Not found"


class TestSse:
    def test_announces_mcp_endpoint_and_closes(self, client):
        response = client.get("/sse")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        assert response.headers["cache-control"] == "no-cache"
        assert response.text == "event: endpoint\ndata: http://testserver/mcp\n\n"

    def test_uses_public_base_url(self, processor):
        settings = create_test_config(public_base_url="https://bot.example.com/")
        client = TestClient(create_api_app(settings, processor))

        response = client.get("/sse")

        assert response.text.startswith(
            "event: endpoint\ndata: https://bot.example.com/mcp\n\n"
        )

    def test_request_host_used(self, client):
        response = client.get("/sse", headers={"host": "tg.example.org"})

        assert "data: http://tg.example.org/mcp\n\n" in response.text


class TestServiceInfo:
    def test_without_voice(self, client):
        response = client.get("/")

        assert response.status_code == 200
        info = response.json()
        assert info["service"] == "Telegram Cloud MCP"
        assert info["endpoints"] == {
            "mcp": "/mcp (POST)",
            "sse": "/sse (GET)",
            "health": "/health (GET)",
        }
        assert info["tools"] == [
            "telegram_send",
            "telegram_voice",
            "telegram_get_me",
            "telegram_get_updates",
            "telegram_get_chat",
        ]
        assert info["voiceEnabled"] is False
        assert info["voiceProvider"] == "None"

    @pytest.mark.parametrize(
        "config, provider",
        [
            ({"openai_api_key": "sk-test"}, "OpenAI"),
            (
                {
                    "elevenlabs_api_key": "el-key",
                    "elevenlabs_voice_id": "voice",
                    "openai_api_key": "sk-test",
                },
                "ElevenLabs",
            ),
        ],
    )
    def test_voice_provider(self, processor, config, provider):
        client = TestClient(create_api_app(create_test_config(**config), processor))

        info = client.get("/").json()

        assert info["voiceEnabled"] is True
        assert info["voiceProvider"] == provider

    def test_secrets_not_exposed(self, processor):
        settings = create_test_config(
            telegram_bot_token="999:secret-token", openai_api_key="sk-hidden"
        )
        client = TestClient(create_api_app(settings, processor))

        body = client.get("/").text

        assert "secret-token" not in body
        assert "sk-hidden" not in body


@pytest.mark.parametrize("path", ["/nope", "/mcp/extra", "/health/x"])
def test_unknown_paths_are_plain_404(client, path):
    response = client.get(path)

    assert response.status_code == 404
    assert response.text == "Not found"


def test_lifespan_closes_owned_clients(settings):
    app = create_api_app(settings)

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200


def test_lifespan_leaves_injected_processor_open(settings, processor, telegram):
    with TestClient(create_api_app(settings, processor)) as client:
        client.get("/health")

    telegram.close.assert_not_awaited()
