"""
CRM Record Handlers for MCP Server
Companies, contacts, leads and deals share one set of eight tools each
"""

import logging
from typing import List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict

from ..models.common import (
    AssociationInput, PropertyDefinitionArguments, PropertyListArguments, PropertyValues,
    SearchArguments, arguments_model, choice_list,
)
from ..models.properties import CompanyProperties, ContactProperties, DealProperties, LeadProperties
from .base import ToolDefinition, joined, segment

logger = logging.getLogger(__name__)


class RecordResource(BaseModel):
    """A CRM object type with a dedicated, typed tool set"""
    model_config = ConfigDict(frozen=True)

    object_type: str
    singular: str
    plural: str
    properties: Type[PropertyValues]
    associations: Tuple[str, ...]

    @property
    def id_field(self) -> str:
        return f"{self.singular}Id"

    @property
    def title(self) -> str:
        return self.singular.capitalize()

    @property
    def objects_path(self) -> str:
        return f"/crm/v3/objects/{self.object_type}"

    @property
    def properties_path(self) -> str:
        return f"/crm/v3/properties/{self.object_type}"


COMPANIES = RecordResource(
    object_type="companies", singular="company", plural="companies",
    properties=CompanyProperties, associations=("contacts", "deals", "tickets"),
)

CONTACTS = RecordResource(
    object_type="contacts", singular="contact", plural="contacts",
    properties=ContactProperties,
    associations=("companies", "deals", "tickets", "calls", "emails", "meetings", "notes"),
)

LEADS = RecordResource(
    object_type="leads", singular="lead", plural="leads",
    properties=LeadProperties, associations=("companies", "contacts", "deals", "notes", "tasks"),
)

DEALS = RecordResource(
    object_type="deals", singular="deal", plural="deals",
    properties=DealProperties,
    associations=(
        "companies", "contacts", "line_items", "quotes", "tickets",
        "calls", "emails", "meetings", "notes", "tasks",
    ),
)

RECORD_RESOURCES = (COMPANIES, CONTACTS, LEADS, DEALS)


def build_record_tools(resource: RecordResource) -> List[ToolDefinition]:
    """Create, update, get, search, batch create/update and property tools for one record type"""
    title = resource.title
    id_field = resource.id_field
    base = resource.objects_path

    CreateArguments = arguments_model(
        f"Create{title}Arguments",
        properties=(resource.properties, ...),
        associations=(Optional[List[AssociationInput]], None),
    )

    UpdateArguments = arguments_model(
        f"Update{title}Arguments",
        **{id_field: (str, ...), "properties": (resource.properties, ...)},
    )

    GetArguments = arguments_model(
        f"Get{title}Arguments",
        **{
            id_field: (str, ...),
            "properties": (Optional[List[str]], None),
            "associations": (Optional[choice_list(resource.associations)], None),
        },
    )

    UpdateItem = arguments_model(f"{title}UpdateItem", id=(str, ...), properties=(resource.properties, ...))

    BatchCreateArguments = arguments_model(f"BatchCreate{title}Arguments", inputs=(List[CreateArguments], ...))
    BatchUpdateArguments = arguments_model(f"BatchUpdate{title}Arguments", inputs=(List[UpdateItem], ...))

    async def handle_create(client, params):
        return await client.execute(base, method="POST", body=params.payload("properties", "associations"))

    async def handle_update(client, params):
        record_id = getattr(params, id_field)
        return await client.execute(f"{base}/{segment(record_id)}", method="PATCH", body=params.payload("properties"))

    async def handle_get(client, params):
        record_id = getattr(params, id_field)
        return await client.execute(f"{base}/{segment(record_id)}", {
            "properties": joined(params.properties),
            "associations": joined(params.associations),
        })

    async def handle_search(client, params):
        return await client.execute(f"{base}/search", method="POST", body=params.payload())

    async def handle_batch_create(client, params):
        return await client.execute(f"{base}/batch/create", method="POST", body=params.payload("inputs"))

    async def handle_batch_update(client, params):
        return await client.execute(f"{base}/batch/update", method="POST", body=params.payload("inputs"))

    async def handle_get_properties(client, params):
        return await client.execute(resource.properties_path, {
            "archived": params.archived,
            "properties": joined(params.properties),
        })

    async def handle_create_property(client, params):
        return await client.execute(resource.properties_path, method="POST", body=params.payload())

    singular, plural = resource.singular, resource.plural
    return [
        ToolDefinition(
            name=f"crm_create_{singular}",
            description=f"Create a new {singular} with validated properties",
            arguments=CreateArguments,
            handler=handle_create,
        ),
        ToolDefinition(
            name=f"crm_update_{singular}",
            description=f"Update an existing {singular} with validated properties",
            arguments=UpdateArguments,
            handler=handle_update,
        ),
        ToolDefinition(
            name=f"crm_get_{singular}",
            description=f"Get a single {singular} by ID with specific properties and associations",
            arguments=GetArguments,
            handler=handle_get,
        ),
        ToolDefinition(
            name=f"crm_search_{plural}",
            description=f"Search {plural} with {singular}-specific filters",
            arguments=SearchArguments,
            handler=handle_search,
        ),
        ToolDefinition(
            name=f"crm_batch_create_{plural}",
            description=f"Create multiple {plural} in a single request",
            arguments=BatchCreateArguments,
            handler=handle_batch_create,
        ),
        ToolDefinition(
            name=f"crm_batch_update_{plural}",
            description=f"Update multiple {plural} in a single request",
            arguments=BatchUpdateArguments,
            handler=handle_batch_update,
        ),
        ToolDefinition(
            name=f"crm_get_{singular}_properties",
            description=f"Get all properties for {plural}",
            arguments=PropertyListArguments,
            handler=handle_get_properties,
        ),
        ToolDefinition(
            name=f"crm_create_{singular}_property",
            description=f"Create a new {singular} property",
            arguments=PropertyDefinitionArguments,
            handler=handle_create_property,
        ),
    ]


def record_tools() -> List[ToolDefinition]:
    tools: List[ToolDefinition] = []
    for resource in RECORD_RESOURCES:
        tools.extend(build_record_tools(resource))
    return tools
