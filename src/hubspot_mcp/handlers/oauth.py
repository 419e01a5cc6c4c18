"""
OAuth Handlers for MCP Server
Authorization URL, code exchange, token refresh and token introspection

Token endpoints are called without a bearer token. Returned tokens are handed
back to the caller; the running server keeps the token it was configured with.
"""

import logging
from typing import List, Optional
from urllib.parse import urlencode

from ..client import ConfigurationError
from ..config import HUBSPOT_AUTHORIZE_URL
from ..formatting import format_response
from ..models.common import ToolArguments
from .base import ToolDefinition, segment

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/v1/token"


class AuthorizationUrlArguments(ToolArguments):
    scopes: List[str]
    optionalScopes: Optional[List[str]] = None
    state: Optional[str] = None
    redirectUri: Optional[str] = None


class ExchangeCodeArguments(ToolArguments):
    code: str
    redirectUri: Optional[str] = None


class RefreshTokenArguments(ToolArguments):
    refreshToken: Optional[str] = None


class TokenInfoArguments(ToolArguments):
    accessToken: Optional[str] = None


def require(value: Optional[str], setting: str) -> str:
    if not value:
        raise ConfigurationError(f"{setting} environment variable is not set")
    return value


async def handle_get_authorization_url(client, params: AuthorizationUrlArguments):
    """Handle oauth_get_authorization_url tool"""
    settings = client.settings
    query = {
        "client_id": require(settings.client_id, "HUBSPOT_CLIENT_ID"),
        "redirect_uri": require(params.redirectUri or settings.redirect_uri, "HUBSPOT_REDIRECT_URI"),
        "scope": " ".join(params.scopes),
    }
    if params.optionalScopes:
        query["optional_scope"] = " ".join(params.optionalScopes)
    if params.state:
        query["state"] = params.state
    return format_response({"authorizationUrl": f"{HUBSPOT_AUTHORIZE_URL}?{urlencode(query)}"})


async def handle_exchange_code(client, params: ExchangeCodeArguments):
    """Handle oauth_exchange_code tool"""
    settings = client.settings
    form = {
        "grant_type": "authorization_code",
        "client_id": require(settings.client_id, "HUBSPOT_CLIENT_ID"),
        "client_secret": require(settings.client_secret, "HUBSPOT_CLIENT_SECRET"),
        "redirect_uri": require(params.redirectUri or settings.redirect_uri, "HUBSPOT_REDIRECT_URI"),
        "code": params.code,
    }
    return await client.execute(TOKEN_PATH, method="POST", form=form, authenticated=False)


async def handle_refresh_access_token(client, params: RefreshTokenArguments):
    """Handle oauth_refresh_access_token tool"""
    settings = client.settings
    form = {
        "grant_type": "refresh_token",
        "client_id": require(settings.client_id, "HUBSPOT_CLIENT_ID"),
        "client_secret": require(settings.client_secret, "HUBSPOT_CLIENT_SECRET"),
        "refresh_token": require(params.refreshToken or settings.refresh_token, "HUBSPOT_REFRESH_TOKEN"),
    }
    logger.info("Refreshing HubSpot access token")
    return await client.execute(TOKEN_PATH, method="POST", form=form, authenticated=False)


async def handle_get_access_token_info(client, params: TokenInfoArguments):
    """Handle oauth_get_access_token_info tool"""
    token = require(params.accessToken or client.access_token, "HUBSPOT_ACCESS_TOKEN")
    return await client.execute(f"/oauth/v1/access-tokens/{segment(token)}", authenticated=False)


def oauth_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="oauth_get_authorization_url",
            description="Build the HubSpot OAuth authorization URL for the configured app",
            arguments=AuthorizationUrlArguments,
            handler=handle_get_authorization_url,
        ),
        ToolDefinition(
            name="oauth_exchange_code",
            description="Exchange an OAuth authorization code for access and refresh tokens",
            arguments=ExchangeCodeArguments,
            handler=handle_exchange_code,
        ),
        ToolDefinition(
            name="oauth_refresh_access_token",
            description="Obtain a new access token using a refresh token",
            arguments=RefreshTokenArguments,
            handler=handle_refresh_access_token,
        ),
        ToolDefinition(
            name="oauth_get_access_token_info",
            description="Get metadata (hub, user, scopes, expiry) for an access token",
            arguments=TokenInfoArguments,
            handler=handle_get_access_token_info,
        ),
    ]
