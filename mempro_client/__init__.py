"""MEMPRO Client - MCP bridge to the MEMPRO memory backend.

Exposes four tools over the MCP stdio protocol and forwards each call as a
single HTTP request to the MEMPRO backend:
- mempro_health
- mempro_add
- mempro_query
- mempro_search
"""

__version__ = "4.0.0"

from mempro_client.config import Config

__all__ = [
    "Config",
    "__version__",
]
