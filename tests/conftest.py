import json
from typing import Any, Callable, List, Optional

import httpx
import pytest

from hubspot_mcp.config import Settings
from hubspot_mcp.registry import ToolRegistry, build_registry


class RecordingTransport(httpx.MockTransport):
    """Mock HubSpot API that remembers every request it served"""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None) -> None:
        self.requests: List[httpx.Request] = []
        self._respond = handler or (lambda request: httpx.Response(200, json={"id": "1"}))
        super().__init__(self._record)

    def _record(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        access_token="test-token",
        client_id="client-123",
        client_secret="secret-456",
        redirect_uri="https://example.com/callback",
    )


@pytest.fixture
def registry(settings: Settings, transport: RecordingTransport) -> ToolRegistry:
    return build_registry(settings, transport=transport)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "HUBSPOT_ACCESS_TOKEN", "HUBSPOT_CLIENT_ID", "HUBSPOT_CLIENT_SECRET", "HUBSPOT_REDIRECT_URI",
        "HUBSPOT_REFRESH_TOKEN", "TELEMETRY_ENABLED", "HUBSPOT_API_URL", "MCP_SERVER_MODE", "PORT",
    ):
        monkeypatch.delenv(key, raising=False)
