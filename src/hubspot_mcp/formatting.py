"""
Response formatting for MCP tool results
Every tool outcome, success or failure, leaves the server as a single text block
"""

import json
import logging
from typing import Any, Awaitable, Callable, List

from mcp.types import TextContent

logger = logging.getLogger(__name__)

NO_DATA_RETURNED = "No data returned"


def format_response(data: Any) -> List[TextContent]:
    """Wrap any value in the one-item text envelope"""
    if isinstance(data, str):
        text = data
    elif data is None:
        text = NO_DATA_RETURNED
    elif isinstance(data, bool):
        text = "true" if data else "false"
    elif isinstance(data, (dict, list, tuple)):
        try:
            text = json.dumps(data, indent=2, default=str)
        except (TypeError, ValueError):
            # circular references
            text = str(data)
    else:
        text = str(data)

    return [TextContent(type="text", text=text)]


async def handle_endpoint(api_call: Callable[[], Awaitable[Any]]) -> Any:
    """Run an endpoint call, turning any exception into an error envelope"""
    try:
        return await api_call()
    except Exception as e:
        logger.error(f"Endpoint call failed: {e}")
        return format_response(str(e))
