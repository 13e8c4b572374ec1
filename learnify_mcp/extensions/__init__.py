"""Service container and registration helpers."""

from .service_collection import (
    ServiceCollection,
    ServiceLifetime,
    ServiceProvider,
    ServiceResolutionError,
    add_learnify_mcp_server,
)

__all__ = [
    'ServiceCollection',
    'ServiceLifetime',
    'ServiceProvider',
    'ServiceResolutionError',
    'add_learnify_mcp_server',
]
