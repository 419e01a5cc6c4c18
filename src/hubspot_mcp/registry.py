"""
Tool Registry for HubSpot MCP Server
Binds the immutable tool catalog to one HubSpot client
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx
from mcp.types import TextContent, Tool

from .client import HubSpotClient
from .config import Settings
from .formatting import format_response
from .handlers import ToolDefinition, build_tool_catalog

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Lists and dispatches tools for one connection context"""

    def __init__(self, client: HubSpotClient, tools: Optional[Iterable[ToolDefinition]] = None):
        self.client = client
        self.tools = tuple(tools) if tools is not None else build_tool_catalog()
        self._by_name: Dict[str, ToolDefinition] = {tool.name: tool for tool in self.tools}

    async def __aenter__(self) -> "ToolRegistry":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def __len__(self) -> int:
        return len(self.tools)

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._by_name.get(name)

    def list_tools(self) -> List[Tool]:
        return [tool.to_tool() for tool in self.tools]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Dispatch one tool call; the result is always a text envelope"""
        logger.info(f"Executing tool: {name}")
        logger.debug(f"Tool {name} arguments: {arguments}")

        tool = self.get(name)
        if tool is None:
            return format_response(f"Unknown tool: {name}")
        return await tool.invoke(self.client, arguments)


def build_registry(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> ToolRegistry:
    """Create a registry with its own HubSpot client for ``settings``"""
    if not settings.access_token:
        logger.debug("HUBSPOT_ACCESS_TOKEN is not set, API tools will report a configuration error")
    return ToolRegistry(HubSpotClient.from_settings(settings, transport=transport))
