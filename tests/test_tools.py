import asyncio
import json
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from hubspot_mcp.config import Settings
from hubspot_mcp.handlers import build_tool_catalog
from hubspot_mcp.registry import build_registry

from conftest import RecordingTransport


def _call(registry, name, arguments):
    async def call():
        async with registry:
            return await registry.call_tool(name, arguments)

    result = asyncio.run(call())
    assert len(result) == 1
    return result[0].text


def test_catalog_size_and_unique_names():
    catalog = build_tool_catalog()
    names = [tool.name for tool in catalog]
    assert len(catalog) == 129
    assert len(set(names)) == len(names)


def test_every_tool_publishes_an_object_schema(registry):
    tools = registry.list_tools()
    assert len(tools) == len(registry)
    for tool in tools:
        assert tool.inputSchema["type"] == "object"
        assert tool.description


def test_expected_tool_groups_are_present():
    names = {tool.name for tool in build_tool_catalog()}
    for name in (
        "crm_create_company", "crm_search_contacts", "crm_batch_update_leads", "crm_create_deal_property",
        "crm_list_objects", "crm_batch_archive_objects", "crm_list_association_types",
        "meetings_batch_archive", "notes_batch_read", "tasks_search", "calls_list", "emails_create",
        "engagement_details_get_associated", "communications_update_subscription_status",
        "products_batch_update", "crm_list_pipeline_stages", "workflows_get", "oauth_refresh_access_token",
    ):
        assert name in names


def test_create_company_posts_properties(registry, transport):
    text = _call(registry, "crm_create_company", {"properties": {"name": "Acme", "domain": "acme.com"}})

    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/crm/v3/objects/companies"
    assert request.headers["Authorization"] == "Bearer test-token"
    assert transport.body() == {"properties": {"name": "Acme", "domain": "acme.com"}}
    assert json.loads(text) == {"id": "1"}


def test_custom_properties_pass_through(registry, transport):
    _call(registry, "crm_update_contact", {
        "contactId": "501",
        "properties": {"email": "jane@example.com", "favorite_color": "green"},
    })

    request = transport.requests[0]
    assert request.method == "PATCH"
    assert request.url.path == "/crm/v3/objects/contacts/501"
    assert transport.body() == {"properties": {"email": "jane@example.com", "favorite_color": "green"}}


def test_get_company_joins_list_parameters(registry, transport):
    _call(registry, "crm_get_company", {
        "companyId": "77",
        "properties": ["name", "domain"],
        "associations": ["contacts", "deals"],
    })

    query = parse_qs(urlparse(str(transport.requests[0].url)).query)
    assert transport.requests[0].url.path == "/crm/v3/objects/companies/77"
    assert query == {"properties": ["name,domain"], "associations": ["contacts,deals"]}


def test_path_parameters_are_encoded(registry, transport):
    _call(registry, "crm_get_deal", {"dealId": "a/b"})

    assert transport.requests[0].url.raw_path.startswith(b"/crm/v3/objects/deals/a%2Fb")


def test_wrong_argument_type_is_rejected_without_request(registry, transport):
    text = _call(registry, "crm_create_company", {"properties": {"numberofemployees": "fifty"}})

    assert text.startswith("Invalid arguments for crm_create_company:")
    assert "numberofemployees" in text
    assert transport.requests == []


def test_unknown_arguments_are_dropped(registry, transport):
    _call(registry, "notes_get", {"noteId": "1", "bogus": True})

    request = transport.requests[0]
    assert request.url.path == "/crm/v3/objects/notes/1"
    assert "bogus" not in request.url.params


def test_limit_bounds_are_enforced(registry, transport):
    text = _call(registry, "notes_list", {"limit": 500})

    assert "limit" in text
    assert transport.requests == []


def test_unknown_tool():
    registry = build_registry(Settings(access_token="x"), transport=RecordingTransport())
    assert _call(registry, "does_not_exist", {}) == "Unknown tool: does_not_exist"


def test_missing_token_reported_as_text(transport):
    registry = build_registry(Settings(), transport=transport)

    text = _call(registry, "crm_search_companies", {"filterGroups": []})

    assert text == "Error performing request: HUBSPOT_ACCESS_TOKEN environment variable is not set"
    assert transport.requests == []


def test_not_found_sentinel():
    transport = RecordingTransport(lambda request: httpx.Response(404))
    registry = build_registry(Settings(access_token="x"), transport=transport)

    text = _call(registry, "crm_get_company", {"companyId": "999"})

    assert text == "Error fetching data from HubSpot: Status 404"


def test_archive_returns_no_content_sentinel():
    transport = RecordingTransport(lambda request: httpx.Response(204))
    registry = build_registry(Settings(access_token="x"), transport=transport)

    text = _call(registry, "notes_archive", {"noteId": "42"})

    assert transport.requests[0].method == "DELETE"
    assert transport.requests[0].url.path == "/crm/v3/objects/notes/42"
    assert text == "No data returned: Status 204"


def test_batch_create_is_a_single_request(registry, transport):
    inputs = [
        {"properties": {"email": f"user{i}@example.com", "firstname": f"User {i}"}}
        for i in range(3)
    ]

    _call(registry, "crm_batch_create_contacts", {"inputs": inputs})

    assert len(transport.requests) == 1
    assert transport.requests[0].url.path == "/crm/v3/objects/contacts/batch/create"
    assert transport.body() == {"inputs": inputs}


def test_batch_archive_wraps_ids(registry, transport):
    _call(registry, "tasks_batch_archive", {"taskIds": ["1", "2"]})

    assert transport.requests[0].url.path == "/crm/v3/objects/tasks/batch/archive"
    assert transport.body() == {"inputs": [{"id": "1"}, {"id": "2"}]}


def test_batch_read_objects_body(registry, transport):
    _call(registry, "crm_batch_read_objects", {
        "objectType": "tickets",
        "objectIds": ["10", "11"],
        "properties": ["subject"],
    })

    assert transport.requests[0].url.path == "/crm/v3/objects/tickets/batch/read"
    assert transport.body() == {"inputs": [{"id": "10"}, {"id": "11"}], "properties": ["subject"]}


def test_search_body_forwards_filters(registry, transport):
    arguments = {
        "filterGroups": [{"filters": [{"propertyName": "dealstage", "operator": "EQ", "value": "closedwon"}]}],
        "limit": 5,
    }

    _call(registry, "crm_search_deals", arguments)

    assert transport.requests[0].url.path == "/crm/v3/objects/deals/search"
    assert transport.body() == arguments


def test_batch_associations_use_wire_field_names(registry, transport):
    _call(registry, "crm_batch_create_associations", {
        "fromObjectType": "contacts",
        "toObjectType": "companies",
        "inputs": [{
            "from": {"id": "1"},
            "to": {"id": "2"},
            "types": [{"associationCategory": "HUBSPOT_DEFINED", "associationTypeId": 1}],
        }],
    })

    assert transport.requests[0].url.path == "/crm/v4/associations/contacts/companies/batch/create"
    assert transport.body()["inputs"][0]["from"] == {"id": "1"}


def test_list_pipelines_serializes_boolean_query(registry, transport):
    _call(registry, "crm_list_pipelines", {"objectType": "deals", "archived": True})

    request = transport.requests[0]
    assert request.url.path == "/crm/v3/pipelines/deals"
    assert request.url.params["archived"] == "true"


def test_update_preferences_uses_put(registry, transport):
    _call(registry, "communications_update_preferences", {
        "contactId": "9",
        "subscriptionId": "s1",
        "preferences": {"subscriptionId": "s1", "status": "SUBSCRIBED"},
    })

    request = transport.requests[0]
    assert request.method == "PUT"
    assert request.url.path.endswith("/status/email/9/subscription/s1")
    assert transport.body() == {"subscriptionId": "s1", "status": "SUBSCRIBED"}


def test_explicit_null_properties_are_forwarded(registry, transport):
    _call(registry, "crm_update_company", {"companyId": "3", "properties": {"name": "A", "custom": None}})

    assert transport.body() == {"properties": {"name": "A", "custom": None}}


def test_unset_optional_properties_are_not_sent(registry, transport):
    _call(registry, "crm_create_deal", {"properties": {"dealname": "Renewal"}})

    assert transport.body() == {"properties": {"dealname": "Renewal"}}


def test_batch_update_objects_single_request(registry, transport):
    inputs = [{"id": "1", "properties": {"name": "One"}}, {"id": "2", "properties": {"name": "Two"}}]

    _call(registry, "crm_batch_update_objects", {"objectType": "companies", "inputs": inputs})

    assert len(transport.requests) == 1
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/crm/v3/objects/companies/batch/update"
    assert transport.body() == {"inputs": inputs}


def test_archive_object_no_content():
    transport = RecordingTransport(lambda request: httpx.Response(204))
    registry = build_registry(Settings(access_token="x"), transport=transport)

    text = _call(registry, "crm_archive_object", {"objectType": "deals", "objectId": "123"})

    assert text == "No data returned: Status 204"
    assert transport.requests[0].method == "DELETE"
    assert transport.requests[0].url.path == "/crm/v3/objects/deals/123"


def _ids(n):
    return [str(i) for i in range(n)]


def _with_properties(properties):
    return lambda n: [{"properties": dict(properties, label=str(i))} for i in range(n)]


def _updates(properties):
    return lambda n: [{"id": str(i), "properties": dict(properties)} for i in range(n)]


def _links(n):
    return [
        {"from": {"id": str(i)}, "to": {"id": str(i + 100)},
         "types": [{"associationCategory": "HUBSPOT_DEFINED", "associationTypeId": 1}]}
        for i in range(n)
    ]


MEETING = {
    "hs_timestamp": "2025-06-10T14:30:00Z",
    "hs_meeting_title": "Kickoff",
    "hs_meeting_start_time": "2025-06-10T14:30:00Z",
    "hs_meeting_end_time": "2025-06-10T15:00:00Z",
}
NOTE = {"hs_note_body": "Called back"}
TASK = {"hs_task_body": "Send quote", "hs_task_subject": "Quote"}
CALL = {"hs_call_body": "Discussed pricing", "hs_call_title": "Pricing call"}
EMAIL = {
    "hs_email_subject": "Hello",
    "hs_email_text": "Hi there",
    "hs_email_from_email": "rep@example.com",
    "hs_email_to_email": "buyer@example.com",
}

BATCH_TOOLS = [
    *[(f"crm_batch_create_{plural}", "inputs", _with_properties({}), {})
      for plural in ("companies", "contacts", "leads", "deals")],
    *[(f"crm_batch_update_{plural}", "inputs", _updates({"custom": "x"}), {})
      for plural in ("companies", "contacts", "leads", "deals")],
    ("crm_batch_create_objects", "inputs", _with_properties({}), {"objectType": "tickets"}),
    ("crm_batch_read_objects", "objectIds", _ids, {"objectType": "tickets"}),
    ("crm_batch_update_objects", "inputs", _updates({"subject": "x"}), {"objectType": "tickets"}),
    ("crm_batch_archive_objects", "objectIds", _ids, {"objectType": "tickets"}),
    ("crm_batch_create_associations", "inputs", _links, {"fromObjectType": "contacts", "toObjectType": "companies"}),
    ("crm_batch_archive_associations", "inputs",
     lambda n: [{"from": item["from"], "to": item["to"]} for item in _links(n)],
     {"fromObjectType": "contacts", "toObjectType": "companies"}),
    ("meetings_batch_create", "inputs", lambda n: [{"properties": MEETING} for _ in range(n)], {}),
    ("meetings_batch_update", "inputs", _updates({"hs_meeting_title": "Moved"}), {}),
    ("meetings_batch_archive", "meetingIds", _ids, {}),
    *[
        entry
        for kind, singular, properties in (
            ("notes", "note", NOTE), ("tasks", "task", TASK), ("calls", "call", CALL), ("emails", "email", EMAIL),
        )
        for entry in (
            (f"{kind}_batch_create", "inputs", _with_properties(properties), {}),
            (f"{kind}_batch_read", "inputs", lambda n: [{"id": str(i)} for i in range(n)], {}),
            (f"{kind}_batch_update", "inputs", _updates(properties), {}),
            (f"{kind}_batch_archive", f"{singular}Ids", _ids, {}),
        )
    ],
    ("products_batch_create", "inputs", _with_properties({"name": "Widget"}), {}),
    ("products_batch_read", "productIds", _ids, {"propertiesWithHistory": [], "properties": ["name"]}),
    ("products_batch_update", "inputs", _updates({"price": 10}), {}),
    ("products_batch_archive", "productIds", _ids, {}),
]


@pytest.mark.parametrize("name, field, build, extra", BATCH_TOOLS, ids=[entry[0] for entry in BATCH_TOOLS])
def test_batch_tools_send_one_request(registry, transport, name, field, build, extra):
    count = 4
    arguments = dict(extra, **{field: build(count)})

    text = _call(registry, name, arguments)

    assert not text.startswith("Invalid arguments"), text
    assert len(transport.requests) == 1
    assert transport.requests[0].method == "POST"
    assert "/batch/" in transport.requests[0].url.path
    assert len(transport.body()["inputs"]) == count


def test_registry_lookup_by_name(registry):
    assert registry.get("crm_get_company").name == "crm_get_company"
    assert registry.get("does_not_exist") is None
