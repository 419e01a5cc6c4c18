"""
Response models for the MCP Server HTTP surface
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness payload for GET /health"""
    status: str = "ok"
    server: str = "HubSpot MCP"
    tools: int


class ErrorResponse(BaseModel):
    """Body returned when an MCP request fails before a response was started"""
    error: str = "Internal server error"
    message: str
