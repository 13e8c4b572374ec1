"""
Tool invoker - resolves, binds, and calls registered tool operations.

invoke() never raises. Every failure becomes a
``{"success": false, "message": ...}`` JSON string, so the calling protocol
always receives a well-formed payload.
"""

import inspect
import json
import logging
from typing import Any, Dict, List, Protocol

from pydantic import BaseModel

from ..utils.response import error_payload
from .binding import bind_arguments
from .operation_registry import OperationRegistry
from .schema import describe_operation

logger = logging.getLogger(__name__)

NULL_RESULT_MESSAGE = "Tool returned null result"


class ServiceResolver(Protocol):
    """Produces live service instances by type."""

    def resolve(self, service_type: type) -> Any:
        """Return an instance of ``service_type``; raise if none is registered."""
        ...


class ToolInvoker:
    """
    In-process tool invoker over an OperationRegistry.

    Args:
        registry: Registry the tools are discovered into
        resolver: Supplies the service instance each tool is called on
    """

    def __init__(self, registry: OperationRegistry, resolver: ServiceResolver):
        self.registry = registry
        self.resolver = resolver

    def list_operations(self) -> List[str]:
        """Names of all available tools."""
        return self.registry.list_names()

    def describe_operations(self) -> Dict[str, Dict[str, Any]]:
        """Description and input schema for every tool, keyed by name."""
        return {
            descriptor.name: describe_operation(descriptor)
            for descriptor in self.registry.descriptors()
        }

    async def invoke(self, name: str, arguments: Any = None) -> str:
        """
        Call a tool by name with an untyped argument bag.

        Args:
            name: Tool name
            arguments: JSON-shaped arguments (mapping, JSON string, or None)

        Returns:
            The tool's result as a string, or an error payload
        """
        self.registry.discover()

        descriptor = self.registry.lookup(name)
        if descriptor is None:
            return error_payload(f"Tool '{name}' not found")

        try:
            logger.info(f"Calling tool: {name} with arguments: {_render(arguments)}")

            service = self.resolver.resolve(descriptor.owner_type)
            bound = bind_arguments(descriptor, arguments)
            result = descriptor.handle(service, *bound)

            if inspect.isawaitable(result):
                result = await result
                if result is None and not descriptor.returns_value:
                    # Completed without producing a value
                    result = ""

            if result is None:
                return error_payload(NULL_RESULT_MESSAGE)
            return _stringify(result)

        except Exception as e:
            logger.exception(f"Error calling tool: {name}")
            return error_payload(str(e))

    call = invoke


def _stringify(result: Any) -> str:
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump_json()
    if isinstance(result, (dict, list, tuple)):
        return json.dumps(result, default=str)
    return str(result)


def _render(arguments: Any) -> str:
    try:
        return json.dumps(arguments if arguments is not None else {}, default=str)
    except (TypeError, ValueError):
        return repr(arguments)
