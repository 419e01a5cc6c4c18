"""
Engagement Handlers for MCP Server
Meetings, notes, tasks, calls and emails stored as CRM v3 objects
"""

import logging
from typing import List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict

from ..models.common import (
    AssociationInput, Flag, PageLimit, SearchArguments, ToolArguments, arguments_model, choice_list,
)
from ..models.properties import (
    CallProperties, EmailProperties, MeetingProperties, MeetingUpdateProperties,
    NoteProperties, TaskProperties,
)
from .base import ToolDefinition, id_inputs, joined, segment

logger = logging.getLogger(__name__)

ENGAGEMENT_ASSOCIATIONS = ("contacts", "companies", "deals", "tickets")


class EngagementResource(BaseModel):
    """An engagement object type with the standard ten-tool set"""
    model_config = ConfigDict(frozen=True)

    object_type: str
    singular: str
    record_label: str
    properties: Type[BaseModel]
    associations: Tuple[str, ...] = ENGAGEMENT_ASSOCIATIONS

    @property
    def title(self) -> str:
        return self.singular.capitalize()

    @property
    def path(self) -> str:
        return f"/crm/v3/objects/{self.object_type}"


NOTES = EngagementResource(object_type="notes", singular="note", record_label="note", properties=NoteProperties)
TASKS = EngagementResource(object_type="tasks", singular="task", record_label="task", properties=TaskProperties)
CALLS = EngagementResource(object_type="calls", singular="call", record_label="call record", properties=CallProperties)
EMAILS = EngagementResource(
    object_type="emails", singular="email", record_label="email record", properties=EmailProperties
)

ENGAGEMENT_RESOURCES = (NOTES, TASKS, CALLS, EMAILS)


def build_engagement_tools(resource: EngagementResource) -> List[ToolDefinition]:
    """Create, get, update, archive, list, search and four batch tools for one engagement type"""
    title = resource.title
    kind = resource.object_type
    id_field = f"{resource.singular}Id"
    ids_field = f"{resource.singular}Ids"
    base = resource.path
    associations = Optional[choice_list(resource.associations)]

    CreateArguments = arguments_model(
        f"Create{title}Arguments",
        properties=(resource.properties, ...),
        associations=(Optional[List[AssociationInput]], None),
    )
    GetArguments = arguments_model(
        f"Get{title}Arguments",
        **{id_field: (str, ...), "properties": (Optional[List[str]], None), "associations": (associations, None)},
    )
    UpdateArguments = arguments_model(
        f"Update{title}Arguments", **{id_field: (str, ...), "properties": (resource.properties, ...)}
    )
    ArchiveArguments = arguments_model(f"Archive{title}Arguments", **{id_field: (str, ...)})
    ListArguments = arguments_model(
        f"List{title}Arguments",
        limit=(Optional[PageLimit], None),
        after=(Optional[str], None),
        properties=(Optional[List[str]], None),
        associations=(associations, None),
        archived=(Optional[Flag], None),
    )
    ReadItem = arguments_model(
        f"{title}ReadItem",
        id=(str, ...),
        properties=(Optional[List[str]], None),
        associations=(associations, None),
    )
    UpdateItem = arguments_model(f"{title}UpdateItem", id=(str, ...), properties=(resource.properties, ...))
    BatchCreateArguments = arguments_model(f"BatchCreate{title}Arguments", inputs=(List[CreateArguments], ...))
    BatchReadArguments = arguments_model(f"BatchRead{title}Arguments", inputs=(List[ReadItem], ...))
    BatchUpdateArguments = arguments_model(f"BatchUpdate{title}Arguments", inputs=(List[UpdateItem], ...))
    BatchArchiveArguments = arguments_model(f"BatchArchive{title}Arguments", **{ids_field: (List[str], ...)})

    def item_path(params) -> str:
        return f"{base}/{segment(getattr(params, id_field))}"

    async def handle_create(client, params):
        return await client.execute(base, method="POST", body=params.payload("properties", "associations"))

    async def handle_get(client, params):
        return await client.execute(item_path(params), {
            "properties": joined(params.properties),
            "associations": joined(params.associations),
        })

    async def handle_update(client, params):
        return await client.execute(item_path(params), method="PATCH", body=params.payload("properties"))

    async def handle_archive(client, params):
        return await client.execute(item_path(params), method="DELETE")

    async def handle_list(client, params):
        return await client.execute(base, {
            "limit": params.limit,
            "after": params.after,
            "properties": joined(params.properties),
            "associations": joined(params.associations),
            "archived": params.archived,
        })

    async def handle_search(client, params):
        return await client.execute(f"{base}/search", method="POST", body=params.payload())

    async def handle_batch(action: str, client, params):
        return await client.execute(f"{base}/batch/{action}", method="POST", body=params.payload("inputs"))

    async def handle_batch_create(client, params):
        return await handle_batch("create", client, params)

    async def handle_batch_read(client, params):
        return await handle_batch("read", client, params)

    async def handle_batch_update(client, params):
        return await handle_batch("update", client, params)

    async def handle_batch_archive(client, params):
        body = {"inputs": id_inputs(getattr(params, ids_field))}
        return await client.execute(f"{base}/batch/archive", method="POST", body=body)

    singular, label = resource.singular, resource.record_label
    return [
        ToolDefinition(name=f"{kind}_create", description=f"Create a new {label}",
                       arguments=CreateArguments, handler=handle_create),
        ToolDefinition(name=f"{kind}_get", description=f"Get details of a specific {singular}",
                       arguments=GetArguments, handler=handle_get),
        ToolDefinition(name=f"{kind}_update", description=f"Update an existing {label}",
                       arguments=UpdateArguments, handler=handle_update),
        ToolDefinition(name=f"{kind}_archive", description=f"Archive (delete) a {label}",
                       arguments=ArchiveArguments, handler=handle_archive),
        ToolDefinition(name=f"{kind}_list", description=f"List all {kind} with optional filtering",
                       arguments=ListArguments, handler=handle_list),
        ToolDefinition(name=f"{kind}_search", description=f"Search {kind} with specific filters",
                       arguments=SearchArguments, handler=handle_search),
        ToolDefinition(name=f"{kind}_batch_create", description=f"Create multiple {kind} in a single request",
                       arguments=BatchCreateArguments, handler=handle_batch_create),
        ToolDefinition(name=f"{kind}_batch_read", description=f"Read multiple {kind} in a single request",
                       arguments=BatchReadArguments, handler=handle_batch_read),
        ToolDefinition(name=f"{kind}_batch_update", description=f"Update multiple {kind} in a single request",
                       arguments=BatchUpdateArguments, handler=handle_batch_update),
        ToolDefinition(name=f"{kind}_batch_archive",
                       description=f"Archive (delete) multiple {kind} in a single request",
                       arguments=BatchArchiveArguments, handler=handle_batch_archive),
    ]


# Meetings have their own list filters and no batch read

MEETINGS_PATH = "/crm/v3/objects/meetings"


class ListMeetingsArguments(ToolArguments):
    after: Optional[str] = None
    limit: Optional[PageLimit] = None
    createdAfter: Optional[str] = None
    createdBefore: Optional[str] = None
    properties: Optional[List[str]] = None


class GetMeetingArguments(ToolArguments):
    meetingId: str
    properties: Optional[List[str]] = None
    associations: Optional[choice_list(("contacts", "companies", "deals"))] = None


class CreateMeetingArguments(ToolArguments):
    properties: MeetingProperties
    associations: Optional[List[AssociationInput]] = None


class UpdateMeetingArguments(ToolArguments):
    meetingId: str
    properties: MeetingUpdateProperties


class ArchiveMeetingArguments(ToolArguments):
    meetingId: str


class MeetingUpdateItem(ToolArguments):
    id: str
    properties: MeetingUpdateProperties


class BatchCreateMeetingsArguments(ToolArguments):
    inputs: List[CreateMeetingArguments]


class BatchUpdateMeetingsArguments(ToolArguments):
    inputs: List[MeetingUpdateItem]


class BatchArchiveMeetingsArguments(ToolArguments):
    meetingIds: List[str]


async def handle_meetings_list(client, params: ListMeetingsArguments):
    """Handle meetings_list tool"""
    return await client.execute(MEETINGS_PATH, {
        "after": params.after,
        "limit": params.limit,
        "createdAfter": params.createdAfter,
        "createdBefore": params.createdBefore,
        "properties": joined(params.properties),
    })


async def handle_meetings_get(client, params: GetMeetingArguments):
    """Handle meetings_get tool"""
    return await client.execute(f"{MEETINGS_PATH}/{segment(params.meetingId)}", {
        "properties": joined(params.properties),
        "associations": joined(params.associations),
    })


async def handle_meetings_create(client, params: CreateMeetingArguments):
    """Handle meetings_create tool"""
    return await client.execute(MEETINGS_PATH, method="POST", body=params.payload())


async def handle_meetings_update(client, params: UpdateMeetingArguments):
    """Handle meetings_update tool"""
    return await client.execute(
        f"{MEETINGS_PATH}/{segment(params.meetingId)}", method="PATCH", body=params.payload("properties")
    )


async def handle_meetings_archive(client, params: ArchiveMeetingArguments):
    """Handle meetings_archive tool"""
    return await client.execute(f"{MEETINGS_PATH}/{segment(params.meetingId)}", method="DELETE")


async def handle_meetings_search(client, params: SearchArguments):
    """Handle meetings_search tool"""
    return await client.execute(f"{MEETINGS_PATH}/search", method="POST", body=params.payload())


async def handle_meetings_batch_create(client, params: BatchCreateMeetingsArguments):
    """Handle meetings_batch_create tool"""
    return await client.execute(f"{MEETINGS_PATH}/batch/create", method="POST", body=params.payload())


async def handle_meetings_batch_update(client, params: BatchUpdateMeetingsArguments):
    """Handle meetings_batch_update tool"""
    return await client.execute(f"{MEETINGS_PATH}/batch/update", method="POST", body=params.payload())


async def handle_meetings_batch_archive(client, params: BatchArchiveMeetingsArguments):
    """Handle meetings_batch_archive tool"""
    body = {"inputs": id_inputs(params.meetingIds)}
    return await client.execute(f"{MEETINGS_PATH}/batch/archive", method="POST", body=body)


def meeting_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(name="meetings_list", description="List all meetings with optional filtering",
                       arguments=ListMeetingsArguments, handler=handle_meetings_list),
        ToolDefinition(name="meetings_get", description="Get details of a specific meeting",
                       arguments=GetMeetingArguments, handler=handle_meetings_get),
        ToolDefinition(name="meetings_create", description="Create a new meeting",
                       arguments=CreateMeetingArguments, handler=handle_meetings_create),
        ToolDefinition(name="meetings_update", description="Update an existing meeting",
                       arguments=UpdateMeetingArguments, handler=handle_meetings_update),
        ToolDefinition(name="meetings_archive", description="Archive (delete) a meeting",
                       arguments=ArchiveMeetingArguments, handler=handle_meetings_archive),
        ToolDefinition(name="meetings_search", description="Search meetings with specific filters",
                       arguments=SearchArguments, handler=handle_meetings_search),
        ToolDefinition(name="meetings_batch_create", description="Create multiple meetings in a single request",
                       arguments=BatchCreateMeetingsArguments, handler=handle_meetings_batch_create),
        ToolDefinition(name="meetings_batch_update", description="Update multiple meetings in a single request",
                       arguments=BatchUpdateMeetingsArguments, handler=handle_meetings_batch_update),
        ToolDefinition(name="meetings_batch_archive",
                       description="Archive (delete) multiple meetings in a single request",
                       arguments=BatchArchiveMeetingsArguments, handler=handle_meetings_batch_archive),
    ]


def engagement_tools() -> List[ToolDefinition]:
    tools = meeting_tools()
    for resource in ENGAGEMENT_RESOURCES:
        tools.extend(build_engagement_tools(resource))
    return tools
