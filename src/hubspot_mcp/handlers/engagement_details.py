"""
Engagement Details Handlers for MCP Server
Legacy v1 engagements API
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from ..models.common import Number, PageLimit, ToolArguments
from ..models.properties import EngagementDetails
from .base import ToolDefinition, joined, segment

logger = logging.getLogger(__name__)

ENGAGEMENTS_PATH = "/engagements/v1/engagements"


class EngagementIdArguments(ToolArguments):
    engagementId: str


class EngagementAssociations(ToolArguments):
    contactIds: Optional[List[str]] = None
    companyIds: Optional[List[str]] = None
    dealIds: Optional[List[str]] = None
    ownerIds: Optional[List[str]] = None
    ticketIds: Optional[List[str]] = None


class CreateEngagementArguments(ToolArguments):
    engagement: EngagementDetails
    associations: Optional[EngagementAssociations] = None
    metadata: Optional[Dict[str, Any]] = None


class UpdateEngagementArguments(ToolArguments):
    engagementId: str
    engagement: EngagementDetails
    metadata: Optional[Dict[str, Any]] = None


class ListEngagementsArguments(ToolArguments):
    limit: Optional[PageLimit] = None
    offset: Optional[Number] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    activityTypes: Optional[List[str]] = None


class AssociatedEngagementsArguments(ListEngagementsArguments):
    objectType: Literal["CONTACT", "COMPANY", "DEAL", "TICKET"]
    objectId: str


async def handle_engagement_get(client, params: EngagementIdArguments):
    """Handle engagement_details_get tool"""
    return await client.execute(f"{ENGAGEMENTS_PATH}/{segment(params.engagementId)}")


async def handle_engagement_create(client, params: CreateEngagementArguments):
    """Handle engagement_details_create tool"""
    return await client.execute(ENGAGEMENTS_PATH, method="POST", body=params.payload())


async def handle_engagement_update(client, params: UpdateEngagementArguments):
    """Handle engagement_details_update tool"""
    return await client.execute(
        f"{ENGAGEMENTS_PATH}/{segment(params.engagementId)}",
        method="PATCH",
        body=params.payload("engagement", "metadata"),
    )


def paging_query(params: ListEngagementsArguments) -> Dict[str, Any]:
    return {
        "limit": params.limit,
        "offset": params.offset,
        "startTime": params.startTime,
        "endTime": params.endTime,
        "activityTypes": joined(params.activityTypes),
    }


async def handle_engagement_list(client, params: ListEngagementsArguments):
    """Handle engagement_details_list tool"""
    return await client.execute(f"{ENGAGEMENTS_PATH}/paged", paging_query(params))


async def handle_engagement_archive(client, params: EngagementIdArguments):
    """Handle engagement_details_archive tool"""
    return await client.execute(f"{ENGAGEMENTS_PATH}/{segment(params.engagementId)}", method="DELETE")


async def handle_engagement_get_associated(client, params: AssociatedEngagementsArguments):
    """Handle engagement_details_get_associated tool"""
    path = f"{ENGAGEMENTS_PATH}/associated/{params.objectType}/{segment(params.objectId)}/paged"
    return await client.execute(path, paging_query(params))


def engagement_detail_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="engagement_details_get",
            description="Get details of a specific engagement",
            arguments=EngagementIdArguments,
            handler=handle_engagement_get,
        ),
        ToolDefinition(
            name="engagement_details_create",
            description="Create a new engagement with details",
            arguments=CreateEngagementArguments,
            handler=handle_engagement_create,
        ),
        ToolDefinition(
            name="engagement_details_update",
            description="Update an existing engagement's details",
            arguments=UpdateEngagementArguments,
            handler=handle_engagement_update,
        ),
        ToolDefinition(
            name="engagement_details_list",
            description="List all engagements with optional filtering",
            arguments=ListEngagementsArguments,
            handler=handle_engagement_list,
        ),
        ToolDefinition(
            name="engagement_details_archive",
            description="Archive (delete) an engagement",
            arguments=EngagementIdArguments,
            handler=handle_engagement_archive,
        ),
        ToolDefinition(
            name="engagement_details_get_associated",
            description="Get all engagements associated with an object",
            arguments=AssociatedEngagementsArguments,
            handler=handle_engagement_get_associated,
        ),
    ]
