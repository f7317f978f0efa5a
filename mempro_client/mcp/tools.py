"""Tool catalog for the MEMPRO MCP bridge.

Each tool is a ToolSpec keyed by its ToolName. The spec both describes the
tool to MCP clients (name, description, input schema) and builds the
backend request for a call, so the catalog and the dispatch table cannot
drift apart.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from mempro_client.config import Config

DEFAULT_TOP_K = 5


class ToolName(str, Enum):
    """Names of the tools exposed over MCP, in catalog order."""

    HEALTH = "mempro_health"
    ADD = "mempro_add"
    QUERY = "mempro_query"
    SEARCH = "mempro_search"


class UnknownToolError(Exception):
    """Raised when a call names a tool that is not in the catalog."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


@dataclass(frozen=True)
class BackendRequest:
    """A single HTTP request to the backend."""

    method: str
    path: str
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class ToolField:
    """One property of a tool's input schema.

    Attributes:
        name: Argument name, also used as the request body key
        type: JSON schema type
        description: Human-readable description shown to clients
        required: Whether the schema lists the field as required
        default: Static default for optional fields
        default_to_user: Default to the configured user id instead
    """

    name: str
    type: str
    description: str
    required: bool = False
    default: Any = None
    default_to_user: bool = False

    def resolve_default(self, config: Config) -> Any:
        if self.default_to_user:
            return config.default_user_id
        return self.default

    def schema(self, config: Config) -> dict[str, Any]:
        prop: dict[str, Any] = {"type": self.type, "description": self.description}
        if not self.required:
            prop["default"] = self.resolve_default(config)
        return prop


@dataclass(frozen=True)
class ToolSpec:
    """Descriptor of one tool plus the HTTP call it maps to."""

    name: ToolName
    description: str
    method: str
    path: str
    fields: tuple[ToolField, ...] = field(default_factory=tuple)

    def input_schema(self, config: Config) -> dict[str, Any]:
        """JSON schema for the tool's arguments."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {f.name: f.schema(config) for f in self.fields},
        }
        required = [f.name for f in self.fields if f.required]
        if required:
            schema["required"] = required
        return schema

    def build_request(self, arguments: Mapping[str, Any], config: Config) -> BackendRequest:
        """Map call arguments to the backend request.

        Optional fields fall back to their defaults. Missing required fields
        are left out of the body for the backend to reject. Arguments not in
        the schema are ignored.
        """
        if not self.fields:
            return BackendRequest(method=self.method, path=self.path)

        body: dict[str, Any] = {}
        for f in self.fields:
            if f.name in arguments:
                body[f.name] = arguments[f.name]
            elif not f.required:
                body[f.name] = f.resolve_default(config)
        return BackendRequest(method=self.method, path=self.path, body=body)


def _user_id(description: str) -> ToolField:
    return ToolField("user_id", "string", description, default_to_user=True)


_TOOLS: dict[ToolName, ToolSpec] = {
    ToolName.HEALTH: ToolSpec(
        name=ToolName.HEALTH,
        description="Check MEMPRO backend health status (OpenMemory, Zep, LightRAG)",
        method="GET",
        path="/healthz",
    ),
    ToolName.ADD: ToolSpec(
        name=ToolName.ADD,
        description="Add memory to MEMPRO (writes to OpenMemory + Zep Cloud in parallel)",
        method="POST",
        path="/memory/add",
        fields=(
            ToolField("text", "string", "Text to store in memory", required=True),
            _user_id("User ID (defaults to the configured user)"),
        ),
    ),
    ToolName.QUERY: ToolSpec(
        name=ToolName.QUERY,
        description="Query MEMPRO memory (searches OpenMemory + Zep, returns combined results)",
        method="POST",
        path="/memory/query",
        fields=(
            ToolField("query", "string", "Natural language search query", required=True),
            _user_id("User ID"),
        ),
    ),
    ToolName.SEARCH: ToolSpec(
        name=ToolName.SEARCH,
        description="Vector search across MEMPRO backends (multi-backend top-k search)",
        method="POST",
        path="/vector/search",
        fields=(
            ToolField("query", "string", "Search query", required=True),
            _user_id("User ID"),
            ToolField(
                "top_k",
                "number",
                f"Maximum number of results (default: {DEFAULT_TOP_K})",
                default=DEFAULT_TOP_K,
            ),
        ),
    ),
}

# Every ToolName needs exactly one spec registered under its own name
_missing = [n.value for n in ToolName if n not in _TOOLS]
_mismatched = [k.value for k, spec in _TOOLS.items() if spec.name is not k]
if _missing or _mismatched:
    raise RuntimeError(
        f"Tool catalog out of sync: missing={_missing}, mismatched={_mismatched}"
    )


def list_tools() -> list[ToolSpec]:
    """Return all tool specs in stable catalog order (health, add, query, search)."""
    return [_TOOLS[name] for name in ToolName]


def get_tool(name: str) -> ToolSpec:
    """Resolve a tool name to its spec.

    Raises:
        UnknownToolError: If the name is not in the catalog
    """
    try:
        return _TOOLS[ToolName(name)]
    except ValueError:
        raise UnknownToolError(name) from None
