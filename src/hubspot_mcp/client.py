"""
HubSpot API Client
Issues single requests against the HubSpot REST API and classifies the outcome
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from mcp.types import TextContent
from pydantic import BaseModel

from .config import HUBSPOT_API_URL, Settings
from .formatting import format_response

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when a required credential is not configured"""


class ApiResult(BaseModel):
    """Outcome of one HubSpot request"""
    ok: bool
    status_code: int
    data: Any = None
    error_kind: Optional[str] = None
    message: Optional[str] = None

    @property
    def no_content(self) -> bool:
        return self.status_code == 204

    def to_payload(self) -> Any:
        """Adapt to the wire shape: parsed JSON, or a sentinel string"""
        if not self.ok:
            return self.message
        if self.no_content:
            return f"No data returned: Status {self.status_code}"
        return self.data


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _error_detail(response: httpx.Response) -> Optional[str]:
    """Pull the ``message`` field out of a HubSpot error body, if there is one"""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class HubSpotClient:
    """HTTP client for the HubSpot REST API"""

    def __init__(
        self,
        access_token: Optional[str],
        base_url: str = HUBSPOT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.settings = settings or Settings(access_token=access_token, api_url=self.base_url)
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport, follow_redirects=True)

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "HubSpotClient":
        return cls(settings.access_token, base_url=settings.api_url, transport=transport, settings=settings)

    async def __aenter__(self) -> "HubSpotClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def _headers(self, authenticated: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if authenticated:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def request(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        method: str = "GET",
        body: Optional[Any] = None,
        form: Optional[Dict[str, Any]] = None,
        authenticated: bool = True,
    ) -> ApiResult:
        """Make one request and classify the response"""
        if authenticated and not self.access_token:
            raise ConfigurationError("HUBSPOT_ACCESS_TOKEN environment variable is not set")

        query = {key: _query_value(value) for key, value in (params or {}).items() if value is not None}
        url = f"{self.base_url}{path}"

        kwargs: Dict[str, Any] = {"params": query, "headers": self._headers(authenticated)}
        if body is not None:
            kwargs["json"] = body
        elif form is not None:
            kwargs["data"] = {key: _query_value(value) for key, value in form.items() if value is not None}

        logger.debug(f"HubSpot request: {method} {path}")
        response = await self.client.request(method, url, **kwargs)

        if not response.is_success:
            message = f"Error fetching data from HubSpot: Status {response.status_code}"
            detail = _error_detail(response)
            if detail:
                message = f"{message} - {detail}"
            logger.warning(f"HubSpot {method} {path} failed with status {response.status_code}")
            return ApiResult(ok=False, status_code=response.status_code, error_kind="http_status", message=message)

        if response.status_code == 204:
            return ApiResult(ok=True, status_code=204)

        return ApiResult(ok=True, status_code=response.status_code, data=response.json())

    async def call(self, path: str, params: Optional[Dict[str, Any]] = None, method: str = "GET",
                   body: Optional[Any] = None, **kwargs) -> Any:
        """Make a request and return parsed JSON or a sentinel string"""
        result = await self.request(path, params, method, body, **kwargs)
        return result.to_payload()

    async def execute(self, path: str, params: Optional[Dict[str, Any]] = None, method: str = "GET",
                      body: Optional[Any] = None, **kwargs) -> List[TextContent]:
        """Make a request and format the outcome, reporting any failure as text"""
        try:
            data = await self.call(path, params, method, body, **kwargs)
            return format_response(data)
        except Exception as e:
            logger.error(f"Error performing request {method} {path}: {e}")
            return format_response(f"Error performing request: {e}")
