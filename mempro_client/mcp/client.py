"""Backend API client for the MCP bridge.

Issues the HTTP request described by a tool's BackendRequest and maps
transport failures, non-success statuses and malformed bodies to
BackendError. Paths, bodies and defaults all come from the tool catalog.
"""

import json
from typing import Any

import httpx

from mempro_client.config import Config
from mempro_client.log_config import get_logger
from mempro_client.mcp.tools import BackendRequest, ToolName, get_tool

log = get_logger("mcp.client")


class BackendError(Exception):
    """Error from backend API.

    A status_code of 0 means the request never produced a response
    (connection refused, DNS failure, timeout, ...).
    """

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        if self.status_code == 0:
            return self.detail
        return f"HTTP {self.status_code}: {self.detail}"


class InvalidResponseError(BackendError):
    """Backend answered with a success status but a body that is not JSON."""

    def _message(self) -> str:
        return self.detail


class BackendClient:
    """HTTP client for the MEMPRO backend API.

    Every call issues exactly one request, bounded by the configured timeout.
    """

    def __init__(self, config: Config):
        self.config = config
        self.base_url = config.backend_url
        self.timeout = config.timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Content-Type": "application/json"},
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def request(self, backend_request: BackendRequest) -> Any:
        """Issue a single request to the backend.

        Args:
            backend_request: Method, path and optional JSON body

        Returns:
            Parsed JSON response ({} for an empty body)

        Raises:
            BackendError: If the request fails or the final status is not 2xx
            InvalidResponseError: If a 2xx body is not valid JSON
        """
        method = backend_request.method
        path = backend_request.path
        client = await self._get_client()

        try:
            response = await client.request(
                method=method,
                url=path,
                json=backend_request.body,
            )
        except httpx.RequestError as e:
            log.error(f"Request to {path} failed: {e!r}")
            # Some httpx errors (notably timeouts) carry an empty message
            raise BackendError(0, str(e) or type(e).__name__) from e

        log.debug(
            f"{method} {path} -> {response.status_code} "
            f"in {response.elapsed.total_seconds() * 1000:.1f}ms"
        )
        if not response.is_success:
            raise BackendError(response.status_code, response.reason_phrase)

        text = response.text
        if not text:
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            log.warning(f"{method} {path} returned malformed JSON: {e}")
            raise InvalidResponseError(
                response.status_code, f"Invalid JSON response: {e}"
            ) from e

    async def health_check(self) -> Any:
        """Check backend health (the mempro_health request)."""
        return await self.request(get_tool(ToolName.HEALTH).build_request({}, self.config))
