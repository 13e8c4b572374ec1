"""Main MCP server exposing the Learnify tools over stdio."""

import asyncio
import logging
import os
import sys
from typing import Any, Dict, Optional

from mcp import Tool
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import TextContent

from . import __version__
from .config.settings import ApiSettings, load_api_settings
from .extensions import ServiceCollection, add_learnify_mcp_server
from .registry import ToolInvoker

# stdout carries the protocol; logs go to stderr
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    stream=sys.stderr,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVER_NAME = "learnify-mcp"


class LearnifyMCPServer:
    """MCP server that routes tool calls through the in-process invoker."""

    def __init__(self, settings: Optional[ApiSettings] = None):
        self.settings = settings or load_api_settings()

        services = ServiceCollection()
        add_learnify_mcp_server(services, self.settings)
        self.provider = services.build_service_provider()
        self.invoker: ToolInvoker = self.provider.resolve(ToolInvoker)

        self.server = Server(SERVER_NAME)
        self._register_handlers()

        logger.info(f"Learnify MCP server configured for {self.settings.base_url}")

    def list_tools(self) -> list[Tool]:
        """All discovered tools with their input schemas."""
        return [
            Tool(name=name, description=spec["description"], inputSchema=spec["inputSchema"])
            for name, spec in self.invoker.describe_operations().items()
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> list[TextContent]:
        """Invoke a tool; failures come back as error payloads, never exceptions."""
        result = await self.invoker.invoke(name, arguments or {})
        return [TextContent(type="text", text=result)]

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            return self.list_tools()

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
            return await self.call_tool(name, arguments)

    async def run(self):
        """Run the MCP server."""
        from mcp.server.stdio import stdio_server

        # Tools are discovered before the first request
        self.invoker.registry.discover()
        logger.info(f"Serving {len(self.invoker.registry)} tools")

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=__version__,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )


def main():
    """Main entry point for the MCP server."""
    server = LearnifyMCPServer()
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
