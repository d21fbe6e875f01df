# ABOUTME: Dependency container for the time and weather agent using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient the weather tools send their single request through.

import httpx
from pydantic import BaseModel, ConfigDict

from timeweather.config import REQUEST_TIMEOUT_SECONDS


class ToolDeps(BaseModel):
    """Dependencies injected into agent tools via RunContext."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient


def create_http_client(timeout: float = REQUEST_TIMEOUT_SECONDS) -> httpx.AsyncClient:
    """Create the pooled httpx client shared by every weather tool call.

    No retry transport is installed: a failed or timed-out request surfaces immediately.
    """
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout))
