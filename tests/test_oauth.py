import asyncio
import json
from urllib.parse import parse_qs, urlparse

import httpx

from hubspot_mcp.config import Settings
from hubspot_mcp.registry import build_registry

from conftest import RecordingTransport


def _call(registry, name, arguments):
    async def call():
        async with registry:
            return await registry.call_tool(name, arguments)

    return asyncio.run(call())[0].text


def test_authorization_url_is_built_locally(registry, transport):
    text = _call(registry, "oauth_get_authorization_url", {"scopes": ["crm.objects.contacts.read", "oauth"], "state": "xyz"})

    url = urlparse(json.loads(text)["authorizationUrl"])
    query = parse_qs(url.query)
    assert url.netloc == "app.hubspot.com"
    assert query["client_id"] == ["client-123"]
    assert query["redirect_uri"] == ["https://example.com/callback"]
    assert query["scope"] == ["crm.objects.contacts.read oauth"]
    assert query["state"] == ["xyz"]
    assert transport.requests == []


def test_authorization_url_requires_client_id(transport):
    registry = build_registry(Settings(access_token="x"), transport=transport)

    text = _call(registry, "oauth_get_authorization_url", {"scopes": ["oauth"]})

    assert text == "HUBSPOT_CLIENT_ID environment variable is not set"


def test_exchange_code_posts_form_without_bearer(registry, transport):
    _call(registry, "oauth_exchange_code", {"code": "auth-code"})

    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/oauth/v1/token"
    assert "Authorization" not in request.headers
    assert parse_qs(request.content.decode()) == {
        "grant_type": ["authorization_code"],
        "client_id": ["client-123"],
        "client_secret": ["secret-456"],
        "redirect_uri": ["https://example.com/callback"],
        "code": ["auth-code"],
    }


def test_refresh_works_without_access_token():
    transport = RecordingTransport(lambda request: httpx.Response(200, json={"access_token": "fresh"}))
    registry = build_registry(
        Settings(client_id="c", client_secret="s", refresh_token="r"), transport=transport,
    )

    text = _call(registry, "oauth_refresh_access_token", {})

    assert json.loads(text) == {"access_token": "fresh"}
    assert parse_qs(transport.requests[0].content.decode())["refresh_token"] == ["r"]
    assert registry.client.access_token is None


def test_token_info_defaults_to_configured_token(registry, transport):
    _call(registry, "oauth_get_access_token_info", {})

    assert transport.requests[0].url.path == "/oauth/v1/access-tokens/test-token"
