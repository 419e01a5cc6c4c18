"""
Object Handlers for MCP Server
Generic CRUD, search and batch operations for any CRM object type
"""

import logging
from typing import Any, Dict, List, Optional

from ..models.common import (
    AssociationInput, Flag, ObjectSearchArguments, ObjectType, PageLimit, ToolArguments,
)
from .base import ToolDefinition, compact, id_inputs, joined, segment

logger = logging.getLogger(__name__)


def objects_path(object_type: str) -> str:
    return f"/crm/v3/objects/{segment(object_type)}"


class ListObjectsArguments(ToolArguments):
    objectType: ObjectType
    properties: Optional[List[str]] = None
    after: Optional[str] = None
    limit: Optional[PageLimit] = None
    archived: Optional[Flag] = None


class GetObjectArguments(ToolArguments):
    objectType: ObjectType
    objectId: str
    properties: Optional[List[str]] = None
    associations: Optional[List[str]] = None


class ObjectInput(ToolArguments):
    properties: Dict[str, Any]
    associations: Optional[List[AssociationInput]] = None


class CreateObjectArguments(ObjectInput):
    objectType: ObjectType


class UpdateObjectArguments(ToolArguments):
    objectType: ObjectType
    objectId: str
    properties: Dict[str, Any]


class ObjectReference(ToolArguments):
    objectType: ObjectType
    objectId: str


class BatchCreateObjectsArguments(ToolArguments):
    objectType: ObjectType
    inputs: List[ObjectInput]


class BatchReadObjectsArguments(ToolArguments):
    objectType: ObjectType
    propertiesWithHistory: Optional[List[str]] = None
    idProperty: Optional[str] = None
    objectIds: List[str]
    properties: Optional[List[str]] = None


class ObjectUpdateItem(ToolArguments):
    id: str
    properties: Dict[str, Any]


class BatchUpdateObjectsArguments(ToolArguments):
    objectType: ObjectType
    inputs: List[ObjectUpdateItem]


class BatchArchiveObjectsArguments(ToolArguments):
    objectType: ObjectType
    objectIds: List[str]


async def handle_list_objects(client, params: ListObjectsArguments):
    """Handle crm_list_objects tool"""
    return await client.execute(objects_path(params.objectType), {
        "properties": joined(params.properties),
        "after": params.after,
        "limit": params.limit,
        "archived": params.archived,
    })


async def handle_get_object(client, params: GetObjectArguments):
    """Handle crm_get_object tool"""
    return await client.execute(f"{objects_path(params.objectType)}/{segment(params.objectId)}", {
        "properties": joined(params.properties),
        "associations": joined(params.associations),
    })


async def handle_create_object(client, params: CreateObjectArguments):
    """Handle crm_create_object tool"""
    return await client.execute(
        objects_path(params.objectType), method="POST", body=params.payload("properties", "associations")
    )


async def handle_update_object(client, params: UpdateObjectArguments):
    """Handle crm_update_object tool"""
    return await client.execute(
        f"{objects_path(params.objectType)}/{segment(params.objectId)}",
        method="PATCH",
        body=params.payload("properties"),
    )


async def handle_archive_object(client, params: ObjectReference):
    """Handle crm_archive_object tool"""
    return await client.execute(f"{objects_path(params.objectType)}/{segment(params.objectId)}", method="DELETE")


async def handle_search_objects(client, params: ObjectSearchArguments):
    """Handle crm_search_objects tool"""
    body = params.payload("filterGroups", "properties", "limit", "after", "sorts")
    return await client.execute(f"{objects_path(params.objectType)}/search", method="POST", body=body)


async def handle_batch_create_objects(client, params: BatchCreateObjectsArguments):
    """Handle crm_batch_create_objects tool"""
    return await client.execute(
        f"{objects_path(params.objectType)}/batch/create", method="POST", body=params.payload("inputs")
    )


async def handle_batch_read_objects(client, params: BatchReadObjectsArguments):
    """Handle crm_batch_read_objects tool"""
    body = compact({
        "propertiesWithHistory": params.propertiesWithHistory,
        "idProperty": params.idProperty,
        "inputs": id_inputs(params.objectIds),
        "properties": params.properties,
    })
    return await client.execute(f"{objects_path(params.objectType)}/batch/read", method="POST", body=body)


async def handle_batch_update_objects(client, params: BatchUpdateObjectsArguments):
    """Handle crm_batch_update_objects tool"""
    return await client.execute(
        f"{objects_path(params.objectType)}/batch/update", method="POST", body=params.payload("inputs")
    )


async def handle_batch_archive_objects(client, params: BatchArchiveObjectsArguments):
    """Handle crm_batch_archive_objects tool"""
    return await client.execute(
        f"{objects_path(params.objectType)}/batch/archive", method="POST", body={"inputs": id_inputs(params.objectIds)}
    )


def object_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="crm_list_objects",
            description="List CRM objects of a specific type with optional filtering and pagination",
            arguments=ListObjectsArguments,
            handler=handle_list_objects,
        ),
        ToolDefinition(
            name="crm_get_object",
            description="Get a single CRM object by ID",
            arguments=GetObjectArguments,
            handler=handle_get_object,
        ),
        ToolDefinition(
            name="crm_create_object",
            description="Create a new CRM object",
            arguments=CreateObjectArguments,
            handler=handle_create_object,
        ),
        ToolDefinition(
            name="crm_update_object",
            description="Update an existing CRM object",
            arguments=UpdateObjectArguments,
            handler=handle_update_object,
        ),
        ToolDefinition(
            name="crm_archive_object",
            description="Archive (delete) a CRM object",
            arguments=ObjectReference,
            handler=handle_archive_object,
        ),
        ToolDefinition(
            name="crm_search_objects",
            description="Search CRM objects using filters",
            arguments=ObjectSearchArguments,
            handler=handle_search_objects,
        ),
        ToolDefinition(
            name="crm_batch_create_objects",
            description="Create multiple CRM objects in a single request",
            arguments=BatchCreateObjectsArguments,
            handler=handle_batch_create_objects,
        ),
        ToolDefinition(
            name="crm_batch_read_objects",
            description="Read multiple CRM objects in a single request",
            arguments=BatchReadObjectsArguments,
            handler=handle_batch_read_objects,
        ),
        ToolDefinition(
            name="crm_batch_update_objects",
            description="Update multiple CRM objects in a single request",
            arguments=BatchUpdateObjectsArguments,
            handler=handle_batch_update_objects,
        ),
        ToolDefinition(
            name="crm_batch_archive_objects",
            description="Archive (delete) multiple CRM objects in a single request",
            arguments=BatchArchiveObjectsArguments,
            handler=handle_batch_archive_objects,
        ),
    ]
