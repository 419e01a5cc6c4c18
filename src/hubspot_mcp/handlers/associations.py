"""
Association Handlers for MCP Server
Handles association types and links between CRM records (v4 API)
"""

import logging
from typing import Annotated, List, Optional

from pydantic import Field, StrictInt

from ..models.common import AssociationType, ObjectRef, ObjectType, ToolArguments
from .base import ToolDefinition, segment

logger = logging.getLogger(__name__)

AssociationPageLimit = Annotated[StrictInt, Field(ge=1, le=500)]


class ObjectTypePair(ToolArguments):
    fromObjectType: ObjectType
    toObjectType: ObjectType


class GetAssociationsArguments(ObjectTypePair):
    fromObjectId: str
    after: Optional[str] = None
    limit: Optional[AssociationPageLimit] = None


class AssociationLink(ObjectTypePair):
    fromObjectId: str
    toObjectId: str


class CreateAssociationArguments(AssociationLink):
    associationTypes: List[AssociationType]


class AssociationPair(ToolArguments):
    from_: ObjectRef = Field(alias="from")
    to: ObjectRef


class AssociationBatchItem(AssociationPair):
    types: List[AssociationType]


class BatchCreateAssociationsArguments(ObjectTypePair):
    inputs: List[AssociationBatchItem]


class BatchArchiveAssociationsArguments(ObjectTypePair):
    inputs: List[AssociationPair]


def link_path(params: AssociationLink) -> str:
    return (
        f"/crm/v4/objects/{segment(params.fromObjectType)}/{segment(params.fromObjectId)}"
        f"/associations/{segment(params.toObjectType)}/{segment(params.toObjectId)}"
    )


def batch_path(params: ObjectTypePair, action: str) -> str:
    return f"/crm/v4/associations/{segment(params.fromObjectType)}/{segment(params.toObjectType)}/batch/{action}"


async def handle_list_association_types(client, params: ObjectTypePair):
    """Handle crm_list_association_types tool"""
    path = f"/crm/v4/associations/{segment(params.fromObjectType)}/{segment(params.toObjectType)}/types"
    return await client.execute(path)


async def handle_get_associations(client, params: GetAssociationsArguments):
    """Handle crm_get_associations tool"""
    path = (
        f"/crm/v4/objects/{segment(params.fromObjectType)}/{segment(params.fromObjectId)}"
        f"/associations/{segment(params.toObjectType)}"
    )
    return await client.execute(path, {"after": params.after, "limit": params.limit})


async def handle_create_association(client, params: CreateAssociationArguments):
    """Handle crm_create_association tool"""
    body = {"types": [item.payload() for item in params.associationTypes]}
    return await client.execute(link_path(params), method="PUT", body=body)


async def handle_archive_association(client, params: AssociationLink):
    """Handle crm_archive_association tool"""
    return await client.execute(link_path(params), method="DELETE")


async def handle_batch_create_associations(client, params: BatchCreateAssociationsArguments):
    """Handle crm_batch_create_associations tool"""
    return await client.execute(batch_path(params, "create"), method="POST", body=params.payload("inputs"))


async def handle_batch_archive_associations(client, params: BatchArchiveAssociationsArguments):
    """Handle crm_batch_archive_associations tool"""
    return await client.execute(batch_path(params, "archive"), method="POST", body=params.payload("inputs"))


def association_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="crm_list_association_types",
            description="List all available association types for a given object type pair",
            arguments=ObjectTypePair,
            handler=handle_list_association_types,
        ),
        ToolDefinition(
            name="crm_get_associations",
            description="Get all associations of a specific type between objects",
            arguments=GetAssociationsArguments,
            handler=handle_get_associations,
        ),
        ToolDefinition(
            name="crm_create_association",
            description="Create an association between two objects",
            arguments=CreateAssociationArguments,
            handler=handle_create_association,
        ),
        ToolDefinition(
            name="crm_archive_association",
            description="Archive (delete) an association between two objects",
            arguments=AssociationLink,
            handler=handle_archive_association,
        ),
        ToolDefinition(
            name="crm_batch_create_associations",
            description="Create multiple associations in a single request",
            arguments=BatchCreateAssociationsArguments,
            handler=handle_batch_create_associations,
        ),
        ToolDefinition(
            name="crm_batch_archive_associations",
            description="Archive (delete) multiple associations in a single request",
            arguments=BatchArchiveAssociationsArguments,
            handler=handle_batch_archive_associations,
        ),
    ]
