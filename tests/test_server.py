import asyncio
import json

import pytest
from fastapi.testclient import TestClient
from mcp.shared.memory import create_connected_server_and_client_session

from hubspot_mcp import server as server_module
from hubspot_mcp.config import Settings
from hubspot_mcp.registry import build_registry
from hubspot_mcp.server import create_http_app, create_server

from conftest import RecordingTransport

MCP_HEADERS = {"Accept": "application/json, text/event-stream", "Content-Type": "application/json"}


@pytest.fixture
def http_client(transport):
    app = create_http_app(config={"HUBSPOT_ACCESS_TOKEN": "http-token"}, json_response=True, transport=transport)
    with TestClient(app) as client:
        yield client


def _rpc(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


def test_health(http_client):
    response = http_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "server": "HubSpot MCP", "tools": 129}
    assert response.headers["X-Trace-ID"]


def test_trace_id_is_echoed(http_client):
    response = http_client.get("/health", headers={"X-Trace-ID": "trace-123"})

    assert response.headers["X-Trace-ID"] == "trace-123"


def test_mcp_lists_tools_without_session(http_client):
    response = http_client.post("/mcp", json=_rpc("tools/list"), headers=MCP_HEADERS)

    assert response.status_code == 200
    tools = response.json()["result"]["tools"]
    assert len(tools) == 129
    assert "mcp-session-id" not in response.headers


def test_mcp_tool_call_reaches_hubspot(http_client, transport):
    response = http_client.post(
        "/mcp",
        json=_rpc("tools/call", {"name": "crm_get_contact", "arguments": {"contactId": "5"}}),
        headers=MCP_HEADERS,
    )

    content = response.json()["result"]["content"]
    assert content == [{"type": "text", "text": json.dumps({"id": "1"}, indent=2)}]
    assert transport.requests[0].url.path == "/crm/v3/objects/contacts/5"
    assert transport.requests[0].headers["Authorization"] == "Bearer http-token"


def test_mcp_lists_prompts(http_client):
    response = http_client.post("/mcp", json=_rpc("prompts/list"), headers=MCP_HEADERS)

    prompts = response.json()["result"]["prompts"]
    assert len(prompts) == 7


def test_mcp_rejects_get(http_client):
    response = http_client.get("/mcp")

    assert response.status_code == 405


def test_cors_preflight(http_client):
    response = http_client.options(
        "/mcp",
        headers={"Origin": "https://client.example", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


def test_mcp_failure_returns_json_error(monkeypatch, transport):
    def broken_registry(*args, **kwargs):
        raise RuntimeError("registry unavailable")

    monkeypatch.setattr(server_module, "build_registry", broken_registry)
    app = create_http_app(json_response=True, transport=transport)

    with TestClient(app) as client:
        response = client.post("/mcp", json=_rpc("tools/list"), headers=MCP_HEADERS)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": "registry unavailable"}


def test_in_memory_session_returns_validation_text():
    registry = build_registry(Settings(access_token="x"), transport=RecordingTransport())

    async def scenario():
        async with registry:
            async with create_connected_server_and_client_session(create_server(registry)) as session:
                listed = await session.list_tools()
                result = await session.call_tool("crm_create_company", {"properties": {"annualrevenue": "lots"}})
                return listed, result

    listed, result = asyncio.run(scenario())

    assert len(listed.tools) == 129
    assert result.content[0].text.startswith("Invalid arguments for crm_create_company:")


def test_in_memory_session_renders_prompt():
    registry = build_registry(Settings(access_token="x"), transport=RecordingTransport())

    async def scenario():
        async with registry:
            async with create_connected_server_and_client_session(create_server(registry)) as session:
                return await session.get_prompt("log_engagement", {"engagementDetails": "Type: Call"})

    result = asyncio.run(scenario())

    assert "Type: Call" in result.messages[-1].content.text
