"""Tests for the tool dispatcher."""

import json
from unittest.mock import AsyncMock

import httpx
import pytest
import respx
from httpx import Response

from mempro_client.mcp.dispatcher import ToolResult, dispatch

from conftest import BASE_URL, TEST_USER


class TestDispatchSuccess:
    """Successful tool calls."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_health(self, client, config):
        """mempro_health should GET /healthz and return the body unmodified."""
        payload = {"status": "ok", "backends": {"openmemory": "up", "zep": "up"}}
        route = respx.get(f"{BASE_URL}/healthz").mock(
            return_value=Response(200, json=payload)
        )

        result = await dispatch("mempro_health", {}, client, config)

        assert route.call_count == 1
        assert result.is_error is False
        assert json.loads(result.text) == payload
        assert result.text == json.dumps(payload, indent=2)
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_add_defaults_user(self, client, config):
        """mempro_add without user_id should send the configured default."""
        route = respx.post(f"{BASE_URL}/memory/add").mock(
            return_value=Response(200, json={"stored": True})
        )

        result = await dispatch("mempro_add", {"text": "hello"}, client, config)

        assert result.is_error is False
        body = json.loads(route.calls[0].request.content)
        assert body == {"text": "hello", "user_id": TEST_USER}
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_query(self, client, config):
        """mempro_query should POST to /memory/query."""
        route = respx.post(f"{BASE_URL}/memory/query").mock(
            return_value=Response(200, json={"results": ["a"]})
        )

        result = await dispatch(
            "mempro_query", {"query": "what", "user_id": "bob"}, client, config
        )

        assert json.loads(result.text) == {"results": ["a"]}
        body = json.loads(route.calls[0].request.content)
        assert body == {"query": "what", "user_id": "bob"}
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_defaults_top_k(self, client, config):
        """mempro_search without top_k should send top_k=5."""
        route = respx.post(f"{BASE_URL}/vector/search").mock(
            return_value=Response(200, json={"results": []})
        )

        await dispatch("mempro_search", {"query": "x"}, client, config)

        body = json.loads(route.calls[0].request.content)
        assert body["top_k"] == 5
        assert body["user_id"] == TEST_USER
        assert body["query"] == "x"
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_none_arguments(self, client, config):
        """A call with no arguments object should still dispatch."""
        respx.get(f"{BASE_URL}/healthz").mock(return_value=Response(200, json={}))

        result = await dispatch("mempro_health", None, client, config)

        assert result == ToolResult(text="{}")
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_body(self, client, config):
        """An empty backend body should come back as {}."""
        respx.post(f"{BASE_URL}/memory/add").mock(return_value=Response(200))

        result = await dispatch("mempro_add", {"text": "t"}, client, config)

        assert result.is_error is False
        assert result.text == "{}"
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_health_is_repeatable(self, client, config):
        """Repeated health calls should give structurally identical results."""
        respx.get(f"{BASE_URL}/healthz").mock(
            return_value=Response(200, json={"status": "ok", "uptime": 1})
        )

        first = await dispatch("mempro_health", {}, client, config)
        second = await dispatch("mempro_health", {}, client, config)

        assert first.is_error is second.is_error is False
        assert json.loads(first.text).keys() == json.loads(second.text).keys()
        await client.close()


class TestDispatchFailures:
    """Every failure becomes a flagged result."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_500(self, client, config):
        respx.post(f"{BASE_URL}/memory/add").mock(return_value=Response(500))

        result = await dispatch("mempro_add", {"text": "hello"}, client, config)

        assert result.is_error is True
        assert result.text.startswith("Error: HTTP 500")
        assert result.text == "Error: HTTP 500: Internal Server Error"
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_final_3xx_status_is_reported(self, client, config):
        """A 3xx that is not followed is a failure naming its status."""
        respx.get(f"{BASE_URL}/healthz").mock(return_value=Response(304))

        result = await dispatch("mempro_health", {}, client, config)

        assert result.is_error is True
        assert result.text == "Error: HTTP 304: Not Modified"
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_unknown_tool_makes_no_request(self, client, config):
        result = await dispatch("mempro_delete", {"id": "1"}, client, config)

        assert result.is_error is True
        assert result.text == "Error: Unknown tool: mempro_delete"
        assert respx.calls.call_count == 0
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error(self, client, config):
        respx.get(f"{BASE_URL}/healthz").mock(
            side_effect=httpx.ConnectError("Name or service not known")
        )

        result = await dispatch("mempro_health", {}, client, config)

        assert result.is_error is True
        assert result.text == "Error: Name or service not known"
        await client.close()

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_json(self, client, config):
        respx.post(f"{BASE_URL}/memory/query").mock(
            return_value=Response(200, text="{not json")
        )

        result = await dispatch("mempro_query", {"query": "q"}, client, config)

        assert result.is_error is True
        assert result.text.startswith("Error: Invalid JSON response:")
        await client.close()

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, config):
        """Unexpected exceptions are flagged too, not raised."""
        client = AsyncMock()
        client.request.side_effect = RuntimeError("socket closed")

        result = await dispatch("mempro_health", {}, client, config)

        assert result == ToolResult(text="Error: socket closed", is_error=True)


class TestToolResult:
    """Conversion to the MCP response envelope."""

    def test_success_envelope(self):
        envelope = ToolResult.success({"a": 1}).to_call_tool_result()

        assert envelope.isError is False
        assert len(envelope.content) == 1
        assert envelope.content[0].type == "text"
        assert envelope.content[0].text == '{\n  "a": 1\n}'

    def test_failure_envelope(self):
        envelope = ToolResult.failure("HTTP 502: Bad Gateway").to_call_tool_result()

        assert envelope.isError is True
        assert envelope.content[0].text == "Error: HTTP 502: Bad Gateway"

    def test_success_keeps_unicode(self):
        result = ToolResult.success({"text": "Grüße"})
        assert "Grüße" in result.text
