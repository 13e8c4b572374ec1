"""
Argument binding - untyped JSON-shaped argument bags to typed parameter lists.

Binding walks the descriptor's parameters in declared order:

1. cancellation parameter -> CancellationToken.NONE (bag entry ignored)
2. value present in the bag -> coerced to the declared type
3. declared default -> the default
4. missing boolean/integer/number with no default -> zero value (lenient),
   or MissingArgumentError when strict binding is enabled
5. anything else -> None

Coercion rules, applied in order:
    exact type match, optional unwrap, structured payload -> model,
    JSON text -> model, scalar conversion, JSON round-trip. Anything else is an
    ArgumentCoercionError.
"""

import json
import logging
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, get_origin

from pydantic import BaseModel, TypeAdapter

from ..config.settings import is_enabled
from .descriptors import OperationDescriptor, ParameterKind, ParameterMetadata, unwrap_optional
from .markers import CancellationToken

logger = logging.getLogger(__name__)

_ZERO_VALUE_KINDS = (ParameterKind.BOOLEAN, ParameterKind.INTEGER, ParameterKind.NUMBER)
_TRUE_STRINGS = ("true", "1", "yes", "y", "on")
_FALSE_STRINGS = ("false", "0", "no", "n", "off")


# ============================================================================
# Exceptions
# ============================================================================

class ArgumentBindingError(Exception):
    """Base exception for argument binding failures."""

    def __init__(self, message: str, parameter: Optional[str] = None):
        super().__init__(message)
        self.parameter = parameter


class MissingArgumentError(ArgumentBindingError):
    """A required argument was not supplied."""

    def __init__(self, parameter: str):
        super().__init__(f"Missing required argument '{parameter}'", parameter)


class ArgumentCoercionError(ArgumentBindingError):
    """A supplied value could not be converted to the declared type."""

    def __init__(self, parameter: str, value_type: Any, declared_type: Any):
        self.value_type = value_type
        self.declared_type = declared_type
        super().__init__(
            f"Cannot convert argument '{parameter}' from "
            f"{_type_name(value_type)} to {_type_name(declared_type)}",
            parameter,
        )


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


# ============================================================================
# Binding
# ============================================================================

def bind_arguments(
    descriptor: OperationDescriptor,
    arguments: Any = None,
    strict: Optional[bool] = None,
) -> List[Any]:
    """
    Bind an argument bag to the descriptor's parameter list.

    Args:
        descriptor: Target operation
        arguments: Mapping, JSON object string, pydantic model, or None
        strict: Reject missing required arguments instead of substituting
            zero values. Defaults to the 'strict_argument_binding' flag.

    Returns:
        Positional argument list in declared parameter order

    Raises:
        MissingArgumentError: Required argument absent (strict mode only)
        ArgumentCoercionError: A value cannot be converted to its declared type
        ArgumentBindingError: The argument bag itself is not an object
    """
    if strict is None:
        strict = is_enabled('strict_argument_binding')

    bag = normalize_arguments(arguments)
    bound: List[Any] = []

    for param in descriptor.parameters:
        if param.is_cancellation_token:
            bound.append(CancellationToken.NONE)
        elif param.name in bag:
            bound.append(coerce_value(param, bag[param.name]))
        elif param.has_default:
            bound.append(param.default_value)
        elif strict and param.is_required:
            raise MissingArgumentError(param.name)
        elif param.kind in _ZERO_VALUE_KINDS and not param.is_optional:
            logger.debug(
                f"Argument '{param.name}' missing for {descriptor.name}; "
                f"using zero value"
            )
            bound.append(param.annotation())
        else:
            bound.append(None)

    return bound


def normalize_arguments(arguments: Any) -> Dict[str, Any]:
    """
    Turn whatever the caller supplied into a name -> value dict.

    Raises:
        ArgumentBindingError: If the arguments do not form a JSON object
    """
    if arguments is None:
        return {}
    if isinstance(arguments, Mapping):
        return dict(arguments)
    if isinstance(arguments, BaseModel):
        return arguments.model_dump()

    try:
        if isinstance(arguments, (str, bytes)):
            parsed = json.loads(arguments) if arguments.strip() else {}
        else:
            parsed = json.loads(json.dumps(arguments, default=vars))
    except (TypeError, ValueError) as e:
        raise ArgumentBindingError(f"Arguments are not a JSON object: {e}") from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ArgumentBindingError(
            f"Arguments must be a JSON object, got {type(parsed).__name__}"
        )
    return parsed


# ============================================================================
# Coercion
# ============================================================================

def coerce_value(param: ParameterMetadata, value: Any) -> Any:
    """Coerce one bag value to the parameter's declared type."""
    if param.is_cancellation_token:
        return CancellationToken.NONE
    return _coerce(param.name, value, param.annotation)


def _coerce(name: str, value: Any, target: Any) -> Any:
    if value is None or target is Any or target is object:
        return value

    underlying, optional = unwrap_optional(target)
    if optional:
        return _coerce(name, value, underlying)

    if _matches(value, target):
        return value

    if isinstance(value, (dict, list)) and _is_structured(target):
        try:
            return _adapter(target).validate_python(value)
        except (TypeError, ValueError) as e:
            raise ArgumentCoercionError(name, type(value), target) from e

    # structured parameters are advertised as strings, so accept JSON text
    if isinstance(value, (str, bytes)) and _is_structured(target):
        try:
            return _adapter(target).validate_json(value)
        except ValueError:
            pass

    try:
        return _convert_scalar(value, target)
    except (TypeError, ValueError, ArithmeticError):
        pass

    try:
        return _adapter(target).validate_json(json.dumps(value))
    except (TypeError, ValueError) as e:
        raise ArgumentCoercionError(name, type(value), target) from e


def _matches(value: Any, target: Any) -> bool:
    if not isinstance(target, type) or get_origin(target) is not None:
        return False
    # bool is an int subclass but never an int argument
    if isinstance(value, bool) and target is not bool:
        return False
    return isinstance(value, target)


def _is_structured(target: Any) -> bool:
    return target not in (bool, int, float, str) and not (
        isinstance(target, type) and issubclass(target, Enum)
    )


def _convert_scalar(value: Any, target: Any) -> Any:
    """Generic scalar conversion, e.g. "3" -> 3. Raises on anything else."""
    if target is bool:
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
            raise ValueError(f"Not a boolean: {value!r}")
        if isinstance(value, (int, float)) and value in (0, 1):
            return bool(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to bool")

    if target is int:
        if isinstance(value, str):
            return int(value.strip())
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"Not an integer: {value!r}")
            return int(value)
        if isinstance(value, int):
            return int(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to int")

    if target is float:
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return float(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to float")

    if target is str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to str")

    if isinstance(target, type) and issubclass(target, Enum):
        return target(value)

    raise TypeError(f"No scalar conversion to {_type_name(target)}")


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)
