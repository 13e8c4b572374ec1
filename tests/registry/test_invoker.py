"""
Tests for ToolInvoker - resolving, binding and calling tools

Tests cover:
1. Successful sync and async calls
2. Argument coercion through the invoker
3. Error payloads (unknown tool, raising tool, binding and resolution failures)
4. Null results
5. Listing and describing operations
"""

import json
from typing import Annotated, Optional
from unittest.mock import MagicMock

import pytest
from pydantic import BaseModel, Field

from learnify_mcp.extensions import ServiceCollection
from learnify_mcp.registry import (
    CancellationToken,
    OperationRegistry,
    ToolInvoker,
    tool,
    tool_service,
)


class Point(BaseModel):
    x: int
    y: int


@tool_service
class MathService:
    def __init__(self):
        self.calls = 0

    @tool("Add two numbers")
    def add(
        self,
        a: Annotated[int, Field(description="First operand")],
        b: Annotated[int, Field(description="Second operand")],
    ) -> int:
        self.calls += 1
        return a + b

    @tool("Always fails")
    def explode(self) -> str:
        raise RuntimeError("kaboom")

    @tool("Returns nothing synchronously")
    def nothing(self) -> None:
        return None

    @tool("Returns nothing asynchronously")
    async def fire_and_forget(self, cancellation_token: CancellationToken = CancellationToken.NONE) -> None:
        return None

    @tool("Look something up asynchronously")
    async def maybe(self, hit: bool) -> Optional[str]:
        return "found" if hit else None

    @tool("Async greeting")
    async def greet(self, name: str, suffix: Optional[str] = None) -> str:
        return f"Hello, {name}{suffix or ''}"

    @tool("Returns a dict")
    def as_dict(self) -> dict:
        return {"ok": True, "items": [1, 2]}

    @tool("Returns a model")
    def as_model(self) -> Point:
        return Point(x=1, y=2)

    @tool("Echo the point back")
    def move(self, point: Point, dx: int = 0) -> str:
        return f"{point.x + dx},{point.y}"


@tool_service
class UnregisteredService:
    @tool("Service that the container cannot build")
    def orphan(self) -> str:
        return "never"


@tool_service
class KeywordOnlyService:
    @tool("Scale a value")
    def scaled(self, value: int, *, factor: int = 2) -> int:
        return value * factor


@pytest.fixture
def invoker():
    services = ServiceCollection()
    services.add_singleton(MathService)
    provider = services.build_service_provider()
    registry = OperationRegistry(service_types=[MathService, UnregisteredService])
    return ToolInvoker(registry, provider)


class TestInvokeSuccess:
    """Test successful invocations."""

    @pytest.mark.asyncio
    async def test_sync_tool(self, invoker):
        assert await invoker.invoke("add", {"a": 2, "b": 3}) == "5"

    @pytest.mark.asyncio
    async def test_string_argument_is_coerced(self, invoker):
        assert await invoker.invoke("add", {"a": "2", "b": 3}) == "5"

    @pytest.mark.asyncio
    async def test_json_string_arguments(self, invoker):
        assert await invoker.invoke("add", '{"a": 10, "b": -4}') == "6"

    @pytest.mark.asyncio
    async def test_async_tool(self, invoker):
        assert await invoker.invoke("greet", {"name": "Ada"}) == "Hello, Ada"

    @pytest.mark.asyncio
    async def test_optional_argument(self, invoker):
        assert await invoker.invoke("greet", {"name": "Ada", "suffix": "!"}) == "Hello, Ada!"

    @pytest.mark.asyncio
    async def test_dict_result_is_json(self, invoker):
        result = await invoker.invoke("as_dict")

        assert json.loads(result) == {"ok": True, "items": [1, 2]}

    @pytest.mark.asyncio
    async def test_model_result_is_json(self, invoker):
        result = await invoker.invoke("as_model", {})

        assert json.loads(result) == {"x": 1, "y": 2}

    @pytest.mark.asyncio
    async def test_structured_argument(self, invoker):
        assert await invoker.invoke("move", {"point": {"x": 1, "y": 5}, "dx": "2"}) == "3,5"

    @pytest.mark.asyncio
    async def test_call_alias(self, invoker):
        assert await invoker.call("add", {"a": 1, "b": 1}) == "2"

    @pytest.mark.asyncio
    async def test_missing_scalars_use_zero_values(self, invoker):
        assert await invoker.invoke("add", {}) == "0"


class TestInvokeFailures:
    """Test that failures become error payloads instead of exceptions."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, invoker):
        result = json.loads(await invoker.invoke("Missing", {}))

        assert result == {"success": False, "message": "Tool 'Missing' not found"}

    @pytest.mark.asyncio
    async def test_raising_tool(self, invoker):
        result = json.loads(await invoker.invoke("explode"))

        assert result["success"] is False
        assert "kaboom" in result["message"]

    @pytest.mark.asyncio
    async def test_invoker_usable_after_failure(self, invoker):
        await invoker.invoke("explode")

        assert await invoker.invoke("add", {"a": 1, "b": 2}) == "3"

    @pytest.mark.asyncio
    async def test_sync_null_result(self, invoker):
        result = json.loads(await invoker.invoke("nothing"))

        assert result == {"success": False, "message": "Tool returned null result"}

    @pytest.mark.asyncio
    async def test_async_null_result_is_empty_string(self, invoker):
        assert await invoker.invoke("fire_and_forget") == ""

    @pytest.mark.asyncio
    async def test_async_value_tool_returning_none(self, invoker):
        result = json.loads(await invoker.invoke("maybe", {"hit": False}))

        assert result == {"success": False, "message": "Tool returned null result"}

    @pytest.mark.asyncio
    async def test_async_value_tool_returning_value(self, invoker):
        assert await invoker.invoke("maybe", {"hit": "true"}) == "found"

    @pytest.mark.asyncio
    async def test_keyword_only_tool_is_never_registered(self, caplog):
        services = ServiceCollection()
        services.add_singleton(KeywordOnlyService)
        registry = OperationRegistry(service_types=[KeywordOnlyService])
        invoker = ToolInvoker(registry, services.build_service_provider())

        with caplog.at_level("WARNING"):
            result = json.loads(await invoker.invoke("scaled", {"value": 3, "factor": 5}))

        assert result == {"success": False, "message": "Tool 'scaled' not found"}
        assert "keyword-only parameter 'factor'" in caplog.text

    @pytest.mark.asyncio
    async def test_coercion_failure(self, invoker):
        result = json.loads(await invoker.invoke("add", {"a": "two", "b": 1}))

        assert result["success"] is False
        assert "'a'" in result["message"]

    @pytest.mark.asyncio
    async def test_resolution_failure(self, invoker):
        result = json.loads(await invoker.invoke("orphan"))

        assert result["success"] is False
        assert "UnregisteredService" in result["message"]

    @pytest.mark.asyncio
    async def test_invalid_argument_bag(self, invoker):
        result = json.loads(await invoker.invoke("add", "[1, 2]"))

        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_resolver_called_per_invocation(self):
        resolver = MagicMock()
        resolver.resolve.return_value = MathService()
        invoker = ToolInvoker(OperationRegistry(service_types=[MathService]), resolver)

        await invoker.invoke("add", {"a": 1, "b": 1})
        await invoker.invoke("add", {"a": 1, "b": 1})

        assert resolver.resolve.call_count == 2
        resolver.resolve.assert_called_with(MathService)


class TestListing:
    """Test listing and describing operations."""

    def test_list_operations(self, invoker):
        names = invoker.list_operations()

        assert "add" in names
        assert "orphan" in names

    def test_describe_operations(self, invoker):
        described = invoker.describe_operations()

        assert described["add"]["description"] == "Add two numbers"
        assert described["add"]["inputSchema"] == {
            "type": "object",
            "properties": {
                "a": {"description": "First operand", "type": "integer"},
                "b": {"description": "Second operand", "type": "integer"},
            },
            "required": ["a", "b"],
        }

    def test_cancellation_hidden_from_schema(self, invoker):
        described = invoker.describe_operations()

        assert described["fire_and_forget"]["inputSchema"]["properties"] == {}
