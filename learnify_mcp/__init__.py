"""Learnify MCP server: exposes the Learnify API as agent-callable tools."""

__version__ = "0.1.0"
