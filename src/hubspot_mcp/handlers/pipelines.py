"""
Pipeline and Workflow Handlers for MCP Server
Read access to deal/ticket pipelines and automation flows
"""

import logging
from typing import List, Literal, Optional

from ..models.common import Flag, PageLimit, ToolArguments
from .base import ToolDefinition, segment

logger = logging.getLogger(__name__)

PipelineObjectType = Literal["deals", "tickets"]


class ListPipelinesArguments(ToolArguments):
    objectType: PipelineObjectType
    archived: Optional[Flag] = None


class PipelineArguments(ToolArguments):
    objectType: PipelineObjectType
    pipelineId: str


class ListWorkflowsArguments(ToolArguments):
    after: Optional[str] = None
    limit: Optional[PageLimit] = None


class WorkflowArguments(ToolArguments):
    flowId: str


def pipeline_path(params: PipelineArguments) -> str:
    return f"/crm/v3/pipelines/{params.objectType}/{segment(params.pipelineId)}"


async def handle_list_pipelines(client, params: ListPipelinesArguments):
    """Handle crm_list_pipelines tool"""
    return await client.execute(f"/crm/v3/pipelines/{params.objectType}", {"archived": params.archived})


async def handle_get_pipeline(client, params: PipelineArguments):
    """Handle crm_get_pipeline tool"""
    return await client.execute(pipeline_path(params))


async def handle_list_pipeline_stages(client, params: PipelineArguments):
    """Handle crm_list_pipeline_stages tool"""
    return await client.execute(f"{pipeline_path(params)}/stages")


async def handle_workflows_list(client, params: ListWorkflowsArguments):
    """Handle workflows_list tool"""
    return await client.execute("/automation/v4/flows", {"after": params.after, "limit": params.limit})


async def handle_workflows_get(client, params: WorkflowArguments):
    """Handle workflows_get tool"""
    return await client.execute(f"/automation/v4/flows/{segment(params.flowId)}")


def pipeline_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="crm_list_pipelines",
            description="List all pipelines for deals or tickets, including their stages",
            arguments=ListPipelinesArguments,
            handler=handle_list_pipelines,
        ),
        ToolDefinition(
            name="crm_get_pipeline",
            description="Get a single deal or ticket pipeline by ID",
            arguments=PipelineArguments,
            handler=handle_get_pipeline,
        ),
        ToolDefinition(
            name="crm_list_pipeline_stages",
            description="List the stages of a deal or ticket pipeline",
            arguments=PipelineArguments,
            handler=handle_list_pipeline_stages,
        ),
    ]


def workflow_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="workflows_list",
            description="List automation workflows with pagination",
            arguments=ListWorkflowsArguments,
            handler=handle_workflows_list,
        ),
        ToolDefinition(
            name="workflows_get",
            description="Get a single automation workflow by ID",
            arguments=WorkflowArguments,
            handler=handle_workflows_get,
        ),
    ]
