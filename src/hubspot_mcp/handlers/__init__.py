"""
HubSpot MCP Handlers Package
Contains all MCP tool definitions organized by HubSpot API area
"""

from functools import lru_cache
from typing import Tuple

from .base import ToolDefinition
from .crm_records import record_tools
from .objects import object_tools
from .associations import association_tools
from .engagements import engagement_tools
from .engagement_details import engagement_detail_tools
from .communications import communication_tools
from .products import product_tools
from .pipelines import pipeline_tools, workflow_tools
from .oauth import oauth_tools


@lru_cache(maxsize=None)
def build_tool_catalog() -> Tuple[ToolDefinition, ...]:
    """The full, immutable tool catalog, built once per process"""
    tools = [
        *record_tools(),
        *object_tools(),
        *association_tools(),
        *engagement_tools(),
        *engagement_detail_tools(),
        *communication_tools(),
        *product_tools(),
        *pipeline_tools(),
        *workflow_tools(),
        *oauth_tools(),
    ]
    names = [tool.name for tool in tools]
    duplicates = {name for name in names if names.count(name) > 1}
    if duplicates:
        raise ValueError(f"Duplicate tool names in catalog: {sorted(duplicates)}")
    return tuple(tools)


__all__ = [
    "ToolDefinition",
    "build_tool_catalog",
]
