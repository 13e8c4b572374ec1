"""Tests for parameter descriptors and the input schemas generated from them."""

from decimal import Decimal
from enum import IntEnum
from typing import Annotated, Dict, List, Optional

import pytest
from pydantic import BaseModel, Field

from learnify_mcp.registry import (
    CancellationToken,
    ParameterKind,
    describe_method,
    describe_operation,
    schema_for,
    tool,
)
from learnify_mcp.registry.descriptors import classify_annotation, unwrap_optional
from learnify_mcp.registry.markers import ToolMarker, get_tool_marker, is_tool_service, tool_service


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Payload(BaseModel):
    name: str
    size: int = 0


class SampleService:
    @tool("Exercise every parameter shape")
    async def sample(
        self,
        item_id: Annotated[int, Field(description="The item ID")],
        label: str,
        ratio: float,
        enabled: bool,
        note: Annotated[Optional[str], Field(description="Optional note")] = None,
        page: Annotated[int, Field(description="Page number")] = 1,
        level: Optional[Level] = None,
        payload: Optional[Payload] = None,
        tags: Annotated[List[str], "Tags to apply"] = (),
        amount: Decimal = Decimal("0"),
        cancellation_token: CancellationToken = CancellationToken.NONE,
    ) -> str:
        return ""

    def optional_without_default(self, value: Optional[int]) -> str:
        return ""

    def pep604(self, value: "int | None") -> str:
        return ""

    def generic_without_default(self, item_ids: List[int], lookup: Dict[str, int], name: str) -> str:
        return ""

    async def returns_none(self) -> None:
        return None

    async def unannotated_return(self):
        return None


@pytest.fixture
def descriptor():
    function = SampleService.sample
    return describe_method(SampleService, function, get_tool_marker(function))


@pytest.fixture
def schema(descriptor):
    return schema_for(descriptor)


class TestMarkers:
    """Test the tool and tool_service markers."""

    def test_tool_with_description(self):
        marker = get_tool_marker(SampleService.sample)

        assert marker == ToolMarker("Exercise every parameter shape")

    def test_bare_tool_marker(self):
        @tool
        def bare(self):
            return None

        assert get_tool_marker(bare) == ToolMarker()

    def test_service_marker_is_not_inherited(self):
        @tool_service
        class Base:
            pass

        class Derived(Base):
            pass

        assert is_tool_service(Base)
        assert not is_tool_service(Derived)
        assert not is_tool_service(Base())

    def test_none_token_cannot_be_cancelled(self):
        CancellationToken.NONE.cancel()

        assert not CancellationToken.NONE.can_be_cancelled
        assert not CancellationToken.NONE.is_cancelled
        CancellationToken.NONE.raise_if_cancelled()

    def test_cancelled_token_raises(self):
        import asyncio

        token = CancellationToken()
        token.cancel()

        with pytest.raises(asyncio.CancelledError):
            token.raise_if_cancelled()


class TestDescriptors:
    """Test ParameterMetadata built from method signatures."""

    def test_parameters_in_declared_order(self, descriptor):
        assert [p.name for p in descriptor.parameters] == [
            "item_id", "label", "ratio", "enabled", "note", "page",
            "level", "payload", "tags", "amount", "cancellation_token",
        ]

    def test_kinds(self, descriptor):
        kinds = {p.name: p.kind for p in descriptor.parameters}

        assert kinds["item_id"] is ParameterKind.INTEGER
        assert kinds["label"] is ParameterKind.STRING
        assert kinds["ratio"] is ParameterKind.NUMBER
        assert kinds["amount"] is ParameterKind.NUMBER
        assert kinds["enabled"] is ParameterKind.BOOLEAN
        assert kinds["payload"] is ParameterKind.STRUCTURED
        assert kinds["tags"] is ParameterKind.STRUCTURED
        assert kinds["cancellation_token"] is ParameterKind.CANCELLATION

    def test_annotations_are_unwrapped(self, descriptor):
        params = {p.name: p for p in descriptor.parameters}

        assert params["item_id"].annotation is int
        assert params["note"].annotation is str
        assert params["note"].is_optional
        assert params["payload"].annotation is Payload

    def test_defaults(self, descriptor):
        params = {p.name: p for p in descriptor.parameters}

        assert params["page"].has_default and params["page"].default_value == 1
        assert not params["item_id"].has_default
        assert params["item_id"].default_value is None

    def test_descriptions(self, descriptor):
        params = {p.name: p for p in descriptor.parameters}

        assert params["item_id"].description == "The item ID"
        assert params["tags"].description == "Tags to apply"
        assert params["label"].description == "Parameter label"

    def test_visible_parameters_exclude_cancellation(self, descriptor):
        assert "cancellation_token" not in [p.name for p in descriptor.visible_parameters]

    def test_variadic_parameters_rejected(self):
        def collect(self, *values: int) -> int:
            return 0

        with pytest.raises(TypeError, match="variadic"):
            describe_method(SampleService, collect, ToolMarker())

    def test_keyword_only_parameters_rejected(self):
        def scaled(self, value: int, *, factor: int = 2) -> int:
            return value * factor

        with pytest.raises(TypeError, match="keyword-only parameter 'factor'"):
            describe_method(SampleService, scaled, ToolMarker())

    @pytest.mark.parametrize("function, expected", [
        (SampleService.sample, True),
        (SampleService.returns_none, False),
        (SampleService.unannotated_return, False),
    ])
    def test_returns_value(self, function, expected):
        assert describe_method(SampleService, function, ToolMarker()).returns_value is expected

    def test_generic_parameters_flagged(self, descriptor):
        params = {p.name: p for p in descriptor.parameters}

        assert params["tags"].is_generic
        assert not params["payload"].is_generic
        assert not params["item_id"].is_generic

    def test_pep604_optional(self):
        function = SampleService.pep604
        descriptor = describe_method(SampleService, function, ToolMarker())

        assert descriptor.parameters[0].is_optional
        assert descriptor.parameters[0].annotation is int

    def test_unwrap_optional(self):
        assert unwrap_optional(Optional[int]) == (int, True)
        assert unwrap_optional(int) == (int, False)

    def test_bool_is_not_integer(self):
        assert classify_annotation(bool) is ParameterKind.BOOLEAN


class TestSchema:
    """Test input schema generation."""

    def test_cancellation_parameter_absent(self, schema):
        assert "cancellation_token" not in schema["properties"]
        assert "cancellation_token" not in schema["required"]

    def test_required_parameters(self, schema):
        assert schema["required"] == ["item_id", "label", "ratio", "enabled"]

    def test_optional_without_default_not_required(self):
        function = SampleService.optional_without_default
        descriptor = describe_method(SampleService, function, ToolMarker())

        assert schema_for(descriptor)["required"] == []

    def test_generic_without_default_not_required(self):
        function = SampleService.generic_without_default
        descriptor = describe_method(SampleService, function, ToolMarker())

        assert schema_for(descriptor)["required"] == ["name"]

    def test_property_types(self, schema):
        types = {name: prop["type"] for name, prop in schema["properties"].items()}

        assert types == {
            "item_id": "integer",
            "label": "string",
            "ratio": "number",
            "enabled": "boolean",
            "note": "string",
            "page": "integer",
            "level": "string",
            "payload": "string",
            "tags": "string",
            "amount": "number",
        }

    def test_property_descriptions(self, schema):
        assert schema["properties"]["page"]["description"] == "Page number"
        assert schema["properties"]["ratio"]["description"] == "Parameter ratio"

    def test_schema_is_an_object(self, schema):
        assert schema["type"] == "object"

    def test_describe_operation(self, descriptor):
        described = describe_operation(descriptor)

        assert described["description"] == "Exercise every parameter shape"
        assert described["inputSchema"] == schema_for(descriptor)

    def test_no_parameters(self):
        def ping(self) -> str:
            return "pong"

        schema = schema_for(describe_method(SampleService, ping, ToolMarker()))

        assert schema == {"type": "object", "properties": {}, "required": []}
