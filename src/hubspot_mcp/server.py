#!/usr/bin/env python3
"""
MCP Server for HubSpot CRM
Exposes HubSpot CRM operations as MCP tools and workflow prompts for LLM integration

Supports stdio mode for local clients and a stateless HTTP mode (POST /mcp)
where every request gets its own server, registry and HubSpot client.
"""

import asyncio
import json
import logging
import sys
import uuid
from typing import Any, Dict, List, Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from mcp.types import GetPromptResult, Prompt, TextContent, Tool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.types import Message, Receive, Scope, Send

from . import prompts
from .config import (
    CORS_ORIGINS, MCP_JSON_RESPONSE, MCP_SERVER_DESCRIPTION, MCP_SERVER_NAME,
    MCP_SERVER_PORT, MCP_SERVER_VERSION, get_config, resolve_server_mode
)
from .handlers import build_tool_catalog
from .models import ErrorResponse, HealthResponse
from .registry import ToolRegistry, build_registry

logger = logging.getLogger(__name__)


def create_server(registry: ToolRegistry) -> Server:
    """Build an MCP server bound to one tool registry"""
    server = Server(MCP_SERVER_NAME, version=MCP_SERVER_VERSION, instructions=MCP_SERVER_DESCRIPTION)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """List all available MCP tools"""
        return registry.list_tools()

    # Arguments are validated by the registry so failures come back as text results
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Handle tool execution - delegates to the registry"""
        return await registry.call_tool(name, arguments)

    @server.list_prompts()
    async def list_prompts() -> List[Prompt]:
        return prompts.list_prompts()

    @server.get_prompt()
    async def get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> GetPromptResult:
        return prompts.get_prompt(name, arguments)

    return server


class DistributedTracingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        # Extract trace ID from incoming request or generate new one
        trace_id = request.headers.get("X-Trace-ID") or str(uuid.uuid4())
        request.state.trace_id = trace_id

        logger.info(f"[TRACE:{trace_id}] MCP Server request: {request.method} {request.url.path}")
        response = await call_next(request)
        response.headers["X-Trace-ID"] = trace_id
        logger.info(f"[TRACE:{trace_id}] MCP Server response: {response.status_code}")

        return response


class StatelessMCPEndpoint:
    """ASGI app serving one MCP request with a freshly built server and registry"""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        json_response: bool = MCP_JSON_RESPONSE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.json_response = json_response
        self.transport = transport

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        client = scope.get("client")
        logger.info(f"New MCP request from {client[0] if client else 'unknown'}")

        started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            async with build_registry(get_config(self.config), transport=self.transport) as registry:
                manager = StreamableHTTPSessionManager(
                    app=create_server(registry),
                    event_store=None,
                    json_response=self.json_response,
                    stateless=True,
                )
                async with manager.run():
                    await manager.handle_request(scope, receive, send_wrapper)
        except Exception as e:
            logger.exception(f"Error handling MCP request: {e}")
            if not started:
                await self._send_error(send, str(e))

    @staticmethod
    async def _send_error(send: Send, message: str) -> None:
        body = json.dumps(ErrorResponse(message=message).model_dump()).encode()
        await send({
            "type": "http.response.start",
            "status": 500,
            "headers": [(b"content-type", b"application/json"), (b"content-length", str(len(body)).encode())],
        })
        await send({"type": "http.response.body", "body": body})


def create_http_app(
    config: Optional[Dict[str, Any]] = None,
    json_response: bool = MCP_JSON_RESPONSE,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the HTTP application: GET /health and stateless POST /mcp"""
    http_app = FastAPI(
        title="HubSpot MCP Server",
        description=MCP_SERVER_DESCRIPTION,
        version=MCP_SERVER_VERSION,
    )

    http_app.add_middleware(DistributedTracingMiddleware)
    http_app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Mcp-Session-Id", "X-Trace-ID"],
    )

    @http_app.get("/health", response_model=HealthResponse)
    async def http_health_check():
        """Health check for HTTP mode"""
        return HealthResponse(tools=len(build_tool_catalog()))

    http_app.add_route(
        "/mcp",
        StatelessMCPEndpoint(config=config, json_response=json_response, transport=transport),
        methods=["POST"],
    )

    return http_app


async def run_stdio(config: Optional[Dict[str, Any]] = None) -> None:
    """Serve MCP over stdin/stdout with a single registry for the process"""
    async with build_registry(get_config(config)) as registry:
        server = create_server(registry)
        logger.info(f"Starting MCP Server in stdio mode with {len(registry)} tools")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


async def run_http(port: int = MCP_SERVER_PORT) -> None:
    logger.info(f"Starting MCP Server in HTTP mode on port {port}")
    config = uvicorn.Config(create_http_app(), host="0.0.0.0", port=port, log_level="info")
    await uvicorn.Server(config).serve()


async def main(argv: Optional[List[str]] = None) -> None:
    """Main function to start the MCP server"""
    mode = resolve_server_mode(argv)
    logger.info(f"Starting MCP Server: {MCP_SERVER_NAME} v{MCP_SERVER_VERSION}")
    logger.info(f"Mode: {mode}")

    if mode == "http":
        await run_http()
    else:
        await run_stdio()


def run() -> None:
    """Console entry point"""
    try:
        asyncio.run(main(sys.argv[1:]))
    except KeyboardInterrupt:
        logger.info("MCP Server stopped")


if __name__ == "__main__":
    run()
