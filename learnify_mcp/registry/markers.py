"""
Markers that make service classes and their methods discoverable as tools.

Usage:
    from typing import Annotated
    from pydantic import Field
    from learnify_mcp.registry.markers import CancellationToken, tool, tool_service

    @tool_service
    class CourseApiService(BaseApiService):

        @tool("Get course details by ID")
        async def get_course(
            self,
            course_id: Annotated[int, Field(description="The course ID")],
            cancellation_token: CancellationToken = CancellationToken.NONE,
        ) -> str:
            ...
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, Union, overload

SERVICE_MARKER_ATTR = "__tool_service__"
TOOL_MARKER_ATTR = "__tool_marker__"

C = TypeVar("C", bound=type)
F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class ToolMarker:
    """Metadata attached to a method exposed as a tool."""
    description: Optional[str] = None


class CancellationToken:
    """Cooperative cancellation signal passed to tool methods.

    Tools declare a parameter of this type to receive it; the binder always
    supplies ``CancellationToken.NONE``, which can never be cancelled.
    """

    NONE: "CancellationToken"

    def __init__(self, can_be_cancelled: bool = True):
        self._can_be_cancelled = can_be_cancelled
        self._cancelled = False

    @property
    def can_be_cancelled(self) -> bool:
        return self._can_be_cancelled

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Request cancellation. No-op for the NONE token."""
        if self._can_be_cancelled:
            self._cancelled = True

    def raise_if_cancelled(self) -> None:
        """Raise asyncio.CancelledError if cancellation was requested."""
        if self._cancelled:
            raise asyncio.CancelledError("Operation was cancelled")

    def __repr__(self) -> str:
        if not self._can_be_cancelled:
            return "CancellationToken.NONE"
        return f"CancellationToken(cancelled={self._cancelled})"


CancellationToken.NONE = CancellationToken(can_be_cancelled=False)


def tool_service(cls: C) -> C:
    """Mark a class as a tool service whose tagged methods become tools."""
    setattr(cls, SERVICE_MARKER_ATTR, True)
    return cls


@overload
def tool(description: F) -> F: ...


@overload
def tool(description: Optional[str] = None) -> Callable[[F], F]: ...


def tool(description: Union[str, Callable[..., Any], None] = None):
    """Mark a method as a tool operation.

    Works both bare (``@tool``) and with a description (``@tool("...")``).
    """
    if callable(description):
        func = description
        setattr(func, TOOL_MARKER_ATTR, ToolMarker())
        return func

    def decorator(func: F) -> F:
        setattr(func, TOOL_MARKER_ATTR, ToolMarker(description=description))
        return func

    return decorator


def is_tool_service(obj: Any) -> bool:
    """Check whether a class carries the tool-service marker."""
    return isinstance(obj, type) and obj.__dict__.get(SERVICE_MARKER_ATTR, False) is True


def get_tool_marker(func: Any) -> Optional[ToolMarker]:
    """Return the tool marker attached to a function, if any."""
    return getattr(func, TOOL_MARKER_ATTR, None)
