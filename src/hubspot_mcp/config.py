#!/usr/bin/env python3
"""
Configuration for HubSpot MCP Server
Contains environment loading, logging setup, server constants and per-registry settings
"""

import os
import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Configuration Constants
HUBSPOT_API_URL = os.getenv("HUBSPOT_API_URL", "https://api.hubapi.com")
HUBSPOT_AUTHORIZE_URL = "https://app.hubspot.com/oauth/authorize"

MCP_SERVER_NAME = "HubSpot-MCP"
MCP_SERVER_VERSION = "2.0.5"
MCP_SERVER_DESCRIPTION = "An extensive MCP for the HubSpot API"

# "stdio" or "http"; empty means decide from PORT
MCP_SERVER_MODE = os.getenv("MCP_SERVER_MODE", "")
MCP_SERVER_PORT = int(os.getenv("PORT", "3000"))
MCP_JSON_RESPONSE = os.getenv("MCP_JSON_RESPONSE", "false").lower() == "true"

# CORS Configuration
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

SETTING_KEYS = (
    "HUBSPOT_ACCESS_TOKEN",
    "HUBSPOT_CLIENT_ID",
    "HUBSPOT_CLIENT_SECRET",
    "HUBSPOT_REDIRECT_URI",
    "HUBSPOT_REFRESH_TOKEN",
    "TELEMETRY_ENABLED",
)


class Settings(BaseModel):
    """Credentials and switches used to build one tool registry"""
    access_token: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    refresh_token: Optional[str] = None
    telemetry_enabled: bool = True
    api_url: str = HUBSPOT_API_URL


def get_config(config: Optional[Dict[str, Any]] = None) -> Settings:
    """Resolve settings, values in ``config`` take precedence over the environment"""
    config = config or {}
    values: Dict[str, Optional[str]] = {}
    for key in SETTING_KEYS:
        values[key] = config.get(key) or os.getenv(key)

    telemetry = str(values["TELEMETRY_ENABLED"] or "true").lower()

    return Settings(
        access_token=values["HUBSPOT_ACCESS_TOKEN"] or None,
        client_id=values["HUBSPOT_CLIENT_ID"] or None,
        client_secret=values["HUBSPOT_CLIENT_SECRET"] or None,
        redirect_uri=values["HUBSPOT_REDIRECT_URI"] or None,
        refresh_token=values["HUBSPOT_REFRESH_TOKEN"] or None,
        telemetry_enabled=telemetry != "false",
        api_url=config.get("HUBSPOT_API_URL") or os.getenv("HUBSPOT_API_URL") or HUBSPOT_API_URL,
    )


def resolve_server_mode(argv: Optional[List[str]] = None) -> str:
    """Pick the transport: --http flag, then MCP_SERVER_MODE, then PORT presence"""
    if argv and "--http" in argv:
        return "http"
    mode = os.getenv("MCP_SERVER_MODE", MCP_SERVER_MODE).strip().lower()
    if mode in ("stdio", "http"):
        return mode
    return "http" if os.getenv("PORT") else "stdio"
