"""
Greeting MCP Server

MCP server exposing greeting, arithmetic, time and image-generation tools,
a demo status resource and a code review prompt, built on a declarative
capability registry and dispatcher hosted by FastMCP.
"""

__version__ = "1.0.0"

try:
    import importlib.metadata

    __version__ = importlib.metadata.version("greeting-mcp")
except (importlib.metadata.PackageNotFoundError, ImportError):
    # Fallback for development mode
    pass

__all__ = ["__version__"]
