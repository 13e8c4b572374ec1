"""
Operation descriptors built from tagged service methods.

A descriptor is created once, during discovery, and is immutable thereafter.
Parameter order in a descriptor is invocation order.
"""

import inspect
import logging
import types
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Callable, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from pydantic.fields import FieldInfo

from .markers import CancellationToken, ToolMarker

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "No description available"


class ParameterKind(Enum):
    """Closed set of declared parameter kinds."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    STRUCTURED = "structured"       # Anything else (models, lists, dicts)
    CANCELLATION = "cancellation"   # Always bound to CancellationToken.NONE


@dataclass(frozen=True)
class ParameterMetadata:
    """Describes one parameter of a tool method.

    Attributes:
        name: Parameter name as callers supply it
        annotation: Declared type with Annotated/Optional wrappers removed
        kind: Scalar kind derived from the annotation
        has_default: Whether the signature declares a default
        default_value: The default, or None when has_default is False
        is_optional: Declared type accepts None (Optional[X] / X | None)
        is_generic: Declared type is parameterized (List[X], Dict[K, V], ...)
        description: Human-readable description for schemas
    """
    name: str
    annotation: Any
    kind: ParameterKind
    has_default: bool = False
    default_value: Any = None
    is_optional: bool = False
    is_generic: bool = False
    description: str = ""

    @property
    def is_cancellation_token(self) -> bool:
        return self.kind is ParameterKind.CANCELLATION

    @property
    def is_required(self) -> bool:
        # generic and optional declared types are never required
        return not (self.has_default or self.is_optional or self.is_generic or self.is_cancellation_token)


@dataclass(frozen=True)
class OperationDescriptor:
    """Immutable description of a discovered tool operation.

    ``handle`` is the plain function captured at discovery; it is called with
    a resolved service instance as its first argument. ``returns_value`` is
    False when the method is annotated ``-> None`` or not annotated at all.
    """
    name: str
    owner_type: type
    handle: Callable[..., Any]
    description: str = DEFAULT_DESCRIPTION
    parameters: Tuple[ParameterMetadata, ...] = ()
    returns_value: bool = False

    @property
    def visible_parameters(self) -> Tuple[ParameterMetadata, ...]:
        """Parameters callers can see and supply."""
        return tuple(p for p in self.parameters if not p.is_cancellation_token)


def unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    """
    Strip an Optional wrapper from an annotation.

    Args:
        annotation: Type annotation, possibly ``Optional[X]`` or ``X | None``

    Returns:
        Tuple of (underlying type, whether None was allowed)
    """
    origin = get_origin(annotation)
    if origin is Union or isinstance(annotation, types.UnionType):
        args = get_args(annotation)
        non_none = [arg for arg in args if arg is not type(None)]
        if len(non_none) < len(args):
            if len(non_none) == 1:
                return non_none[0], True
            return Union[tuple(non_none)], True
    return annotation, False


def classify_annotation(annotation: Any) -> ParameterKind:
    """Map a (non-optional) annotation to its ParameterKind."""
    if annotation is CancellationToken:
        return ParameterKind.CANCELLATION
    # bool before int: bool is an int subclass
    if annotation is bool:
        return ParameterKind.BOOLEAN
    if annotation is int:
        return ParameterKind.INTEGER
    if annotation in (float, Decimal):
        return ParameterKind.NUMBER
    if annotation is str:
        return ParameterKind.STRING
    return ParameterKind.STRUCTURED


def _split_annotated(annotation: Any) -> Tuple[Any, Optional[str]]:
    """Return (bare type, description) from ``Annotated[T, Field(...)]``."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        description = None
        for extra in extras:
            if isinstance(extra, FieldInfo) and extra.description:
                description = extra.description
            elif isinstance(extra, str):
                description = extra
        return base, description
    return annotation, None


def describe_parameter(parameter: inspect.Parameter, annotation: Any) -> ParameterMetadata:
    """Build ParameterMetadata from a signature parameter and its resolved hint."""
    bare, description = _split_annotated(annotation)
    underlying, is_optional = unwrap_optional(bare)
    underlying, inner_description = _split_annotated(underlying)
    # Python 3.10 wraps Annotated hints with a None default in Optional[...]
    underlying, inner_optional = unwrap_optional(underlying)
    is_optional = is_optional or inner_optional
    has_default = parameter.default is not inspect.Parameter.empty

    return ParameterMetadata(
        name=parameter.name,
        annotation=underlying,
        kind=classify_annotation(underlying),
        has_default=has_default,
        default_value=parameter.default if has_default else None,
        is_optional=is_optional,
        is_generic=get_origin(underlying) is not None,
        description=description or inner_description or f"Parameter {parameter.name}",
    )


def describe_method(owner_type: type, function: Callable[..., Any], marker: ToolMarker) -> OperationDescriptor:
    """
    Build an OperationDescriptor for a tagged method.

    Args:
        owner_type: Service class the method belongs to
        function: The plain function object (looked up on the class)
        marker: ToolMarker attached by the @tool decorator

    Returns:
        OperationDescriptor with parameters in declared order

    Raises:
        TypeError: If the method uses *args/**kwargs or keyword-only
            parameters, which cannot be bound positionally
        NameError: If a forward-referenced annotation cannot be resolved
    """
    signature = inspect.signature(function)
    hints = get_type_hints(function, include_extras=True)

    parameters = []
    for index, parameter in enumerate(signature.parameters.values()):
        if index == 0 and parameter.name in ("self", "cls"):
            continue
        if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise TypeError(
                f"Tool '{function.__name__}' on {owner_type.__name__} declares "
                f"variadic parameter '{parameter.name}'"
            )
        if parameter.kind is inspect.Parameter.KEYWORD_ONLY:
            raise TypeError(
                f"Tool '{function.__name__}' on {owner_type.__name__} declares "
                f"keyword-only parameter '{parameter.name}'"
            )
        annotation = hints.get(parameter.name, Any)
        parameters.append(describe_parameter(parameter, annotation))

    return_hint = hints.get("return")

    return OperationDescriptor(
        name=function.__name__,
        owner_type=owner_type,
        handle=function,
        description=marker.description or DEFAULT_DESCRIPTION,
        parameters=tuple(parameters),
        returns_value=return_hint is not None and return_hint is not type(None),
    )
