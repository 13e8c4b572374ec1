"""
Tool registry for the Learnify MCP server.

Discovers tagged service methods, describes their parameters, binds untyped
arguments to them, and invokes them.
"""

from .binding import (
    ArgumentBindingError,
    ArgumentCoercionError,
    MissingArgumentError,
    bind_arguments,
    coerce_value,
)
from .descriptors import (
    OperationDescriptor,
    ParameterKind,
    ParameterMetadata,
    describe_method,
)
from .invoker import ServiceResolver, ToolInvoker
from .markers import CancellationToken, tool, tool_service
from .operation_registry import (
    OperationNotFound,
    OperationRegistry,
    OperationRegistryError,
)
from .schema import describe_operation, schema_for

__all__ = [
    'OperationRegistry',
    'OperationDescriptor',
    'ParameterKind',
    'ParameterMetadata',
    'ToolInvoker',
    'ServiceResolver',
    'CancellationToken',
    'tool',
    'tool_service',
    'describe_method',
    'describe_operation',
    'schema_for',
    'bind_arguments',
    'coerce_value',
    # Exceptions
    'OperationNotFound',
    'OperationRegistryError',
    'ArgumentBindingError',
    'ArgumentCoercionError',
    'MissingArgumentError',
]
