"""
Tool definition and request helpers shared by all HubSpot tool handlers
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Type
from urllib.parse import quote

from mcp.types import TextContent, Tool
from pydantic import BaseModel, ConfigDict, ValidationError

from ..client import HubSpotClient
from ..formatting import format_response, handle_endpoint

logger = logging.getLogger(__name__)

Handler = Callable[[HubSpotClient, Any], Awaitable[List[TextContent]]]


class ToolDefinition(BaseModel):
    """One catalog entry: name, description, argument model and handler"""
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    description: str
    arguments: Type[BaseModel]
    handler: Handler

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.arguments.model_json_schema())

    async def invoke(self, client: HubSpotClient, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Validate arguments, then run the handler behind the endpoint error wrapper"""
        try:
            params = self.arguments.model_validate(arguments or {})
        except ValidationError as e:
            logger.warning(f"Rejected arguments for {self.name}: {e.error_count()} error(s)")
            return format_response(describe_validation_error(self.name, e))

        return await handle_endpoint(lambda: self.handler(client, params))


def describe_validation_error(tool_name: str, error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


def segment(value: Any) -> str:
    """Encode a value as a single URL path segment"""
    return quote(str(value), safe="")


def joined(values: Optional[Iterable[str]]) -> Optional[str]:
    """Comma-join a list for a query parameter, None stays None"""
    if values is None:
        return None
    return ",".join(values)


def id_inputs(ids: Iterable[str]) -> List[Dict[str, str]]:
    return [{"id": object_id} for object_id in ids]


def compact(body: Dict[str, Any]) -> Dict[str, Any]:
    """Drop unset top-level fields from a request body"""
    return {key: value for key, value in body.items() if value is not None}

