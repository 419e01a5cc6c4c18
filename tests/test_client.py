import asyncio
import json

import httpx
import pytest

from hubspot_mcp.client import ConfigurationError, HubSpotClient

from conftest import RecordingTransport


def _run(coro):
    return asyncio.run(coro)


async def _request(client, *args, **kwargs):
    async with client:
        return await client.request(*args, **kwargs)


def test_missing_token_fails_before_network():
    transport = RecordingTransport()
    client = HubSpotClient(None, transport=transport)

    with pytest.raises(ConfigurationError, match="HUBSPOT_ACCESS_TOKEN environment variable is not set"):
        _run(_request(client, "/crm/v3/objects/companies"))

    assert transport.requests == []


def test_successful_request_sends_bearer_and_query():
    transport = RecordingTransport(lambda request: httpx.Response(200, json={"results": []}))
    client = HubSpotClient("abc", base_url="https://api.example.test/", transport=transport)

    result = _run(_request(client, "/crm/v3/objects/notes", {"limit": 10, "archived": False, "after": None}))

    assert result.ok
    assert result.data == {"results": []}
    request = transport.requests[0]
    assert request.headers["Authorization"] == "Bearer abc"
    assert request.url.host == "api.example.test"
    assert request.url.params["limit"] == "10"
    assert request.url.params["archived"] == "false"
    assert "after" not in request.url.params


def test_json_body_is_sent_as_json():
    transport = RecordingTransport()
    client = HubSpotClient("abc", transport=transport)

    _run(_request(client, "/crm/v3/objects/companies", method="POST", body={"properties": {"name": "Acme"}}))

    request = transport.requests[0]
    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"properties": {"name": "Acme"}}


def test_error_status_becomes_sentinel_string():
    transport = RecordingTransport(lambda request: httpx.Response(404, text="not found"))
    client = HubSpotClient("abc", transport=transport)

    result = _run(_request(client, "/crm/v3/objects/companies/999"))

    assert not result.ok
    assert result.error_kind == "http_status"
    assert result.to_payload() == "Error fetching data from HubSpot: Status 404"


def test_error_status_includes_hubspot_message():
    transport = RecordingTransport(
        lambda request: httpx.Response(400, json={"status": "error", "message": "Property values were not valid"})
    )
    client = HubSpotClient("abc", transport=transport)

    result = _run(_request(client, "/crm/v3/objects/companies", method="POST", body={}))

    assert result.to_payload() == (
        "Error fetching data from HubSpot: Status 400 - Property values were not valid"
    )


def test_no_content_sentinel():
    transport = RecordingTransport(lambda request: httpx.Response(204))
    client = HubSpotClient("abc", transport=transport)

    result = _run(_request(client, "/crm/v3/objects/notes/1", method="DELETE"))

    assert result.ok
    assert result.no_content
    assert result.to_payload() == "No data returned: Status 204"


def test_execute_reports_transport_failures_as_text():
    def explode(request):
        raise httpx.ConnectError("connection refused")

    client = HubSpotClient("abc", transport=RecordingTransport(explode))

    async def execute():
        async with client:
            return await client.execute("/crm/v3/objects/contacts")

    result = _run(execute())
    assert result[0].text == "Error performing request: connection refused"


def test_unauthenticated_form_request():
    transport = RecordingTransport(lambda request: httpx.Response(200, json={"access_token": "new"}))
    client = HubSpotClient(None, transport=transport)

    result = _run(_request(
        client, "/oauth/v1/token", method="POST",
        form={"grant_type": "refresh_token", "refresh_token": "r1"}, authenticated=False,
    ))

    assert result.data == {"access_token": "new"}
    request = transport.requests[0]
    assert "Authorization" not in request.headers
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert request.content == b"grant_type=refresh_token&refresh_token=r1"
