"""
Service container used to host the Learnify MCP tools.

Usage:
    services = ServiceCollection()
    add_learnify_mcp_server(services)
    provider = services.build_service_provider()

    invoker = provider.resolve(ToolInvoker)
    result = await invoker.invoke("get_course", {"course_id": 1})
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

import requests

from ..config.settings import ApiSettings, load_api_settings
from ..registry import OperationRegistry, ToolInvoker

logger = logging.getLogger(__name__)

Factory = Callable[["ServiceProvider"], Any]


class ServiceLifetime(Enum):
    """How long a resolved instance lives."""
    SINGLETON = "singleton"   # One instance per provider
    TRANSIENT = "transient"   # New instance per resolve


class ServiceResolutionError(LookupError):
    """No registration exists for the requested service type."""
    pass


@dataclass(frozen=True)
class ServiceDescriptor:
    """One registration in a ServiceCollection."""
    service_type: type
    factory: Factory
    lifetime: ServiceLifetime


class ServiceCollection:
    """Registrations that a ServiceProvider is built from."""

    def __init__(self):
        self._descriptors: Dict[type, ServiceDescriptor] = {}

    def add_singleton(self, service_type: type, factory: Optional[Factory] = None) -> "ServiceCollection":
        """Register a type created once per provider."""
        return self._add(service_type, factory, ServiceLifetime.SINGLETON)

    def add_transient(self, service_type: type, factory: Optional[Factory] = None) -> "ServiceCollection":
        """Register a type created on every resolve."""
        return self._add(service_type, factory, ServiceLifetime.TRANSIENT)

    def add_instance(self, service_type: type, instance: Any) -> "ServiceCollection":
        """Register an existing object as a singleton."""
        return self._add(service_type, lambda _: instance, ServiceLifetime.SINGLETON)

    def _add(self, service_type: type, factory: Optional[Factory], lifetime: ServiceLifetime) -> "ServiceCollection":
        if factory is None:
            factory = lambda _: service_type()  # noqa: E731
        if service_type in self._descriptors:
            logger.debug(f"Replacing registration for {service_type.__name__}")
        self._descriptors[service_type] = ServiceDescriptor(service_type, factory, lifetime)
        return self

    def __contains__(self, service_type: object) -> bool:
        return service_type in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def build_service_provider(self) -> "ServiceProvider":
        return ServiceProvider(dict(self._descriptors))


class ServiceProvider:
    """Resolves service instances from a fixed set of registrations."""

    def __init__(self, descriptors: Dict[type, ServiceDescriptor]):
        self._descriptors = descriptors
        self._singletons: Dict[type, Any] = {}
        self._lock = threading.RLock()

    def resolve(self, service_type: type) -> Any:
        """
        Return an instance of ``service_type``.

        Raises:
            ServiceResolutionError: If the type was never registered
        """
        descriptor = self._descriptors.get(service_type)
        if descriptor is None:
            raise ServiceResolutionError(
                f"No service for type '{getattr(service_type, '__name__', service_type)}' "
                f"has been registered"
            )

        if descriptor.lifetime is ServiceLifetime.TRANSIENT:
            return descriptor.factory(self)

        with self._lock:
            if service_type not in self._singletons:
                self._singletons[service_type] = descriptor.factory(self)
            return self._singletons[service_type]

    def try_resolve(self, service_type: type) -> Optional[Any]:
        """Like resolve(), but return None for unregistered types."""
        try:
            return self.resolve(service_type)
        except ServiceResolutionError:
            return None


def add_learnify_mcp_server(
    services: ServiceCollection,
    settings: Optional[ApiSettings] = None,
) -> ServiceCollection:
    """
    Register every Learnify MCP feature plus the registry and invoker.

    Args:
        services: Collection to add registrations to
        settings: API settings; loaded from the environment when omitted

    Returns:
        The same collection, for chaining
    """
    from ..features.answers.feature import add_answer_feature
    from ..features.categories.feature import add_category_feature
    from ..features.courses.feature import add_course_feature
    from ..features.lessons.feature import add_lesson_feature
    from ..features.quizzes.feature import add_quiz_feature

    settings = settings or load_api_settings()

    services.add_instance(ApiSettings, settings)
    # requests.Session is not thread-safe; each service instance gets its own
    services.add_transient(requests.Session, lambda _: requests.Session())

    add_lesson_feature(services)
    add_course_feature(services)
    add_category_feature(services)
    add_quiz_feature(services)
    add_answer_feature(services)

    services.add_singleton(
        OperationRegistry,
        lambda p: OperationRegistry(packages=p.resolve(ApiSettings).tool_packages),
    )
    services.add_singleton(
        ToolInvoker,
        lambda p: ToolInvoker(p.resolve(OperationRegistry), p),
    )
    return services
