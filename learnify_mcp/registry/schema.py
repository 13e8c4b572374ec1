"""JSON-schema-like input schemas for tool operations."""

from typing import Any, Dict, List

from .descriptors import OperationDescriptor, ParameterKind

JSONSchema = Dict[str, Any]

_JSON_TYPES = {
    ParameterKind.BOOLEAN: "boolean",
    ParameterKind.INTEGER: "integer",
    ParameterKind.NUMBER: "number",
    ParameterKind.STRING: "string",
}


def json_schema_type(kind: ParameterKind) -> str:
    """Map a ParameterKind to a JSON schema type; structured values are strings."""
    return _JSON_TYPES.get(kind, "string")


def schema_for(descriptor: OperationDescriptor) -> JSONSchema:
    """
    Generate the input schema for an operation.

    The cancellation parameter never appears. A parameter is required when it
    has no default and its declared type is not optional.

    Args:
        descriptor: Operation to describe

    Returns:
        ``{"type": "object", "properties": {...}, "required": [...]}``
    """
    properties: Dict[str, Dict[str, str]] = {}
    required: List[str] = []

    for param in descriptor.visible_parameters:
        properties[param.name] = {
            "description": param.description,
            "type": json_schema_type(param.kind),
        }
        if param.is_required:
            required.append(param.name)

    return {
        "type": "object",
        "properties": properties,
        "required": required,
    }


def describe_operation(descriptor: OperationDescriptor) -> Dict[str, Any]:
    """Description plus input schema, as returned by describe_operations()."""
    return {
        "description": descriptor.description,
        "inputSchema": schema_for(descriptor),
    }
