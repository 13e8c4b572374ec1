"""
Operation Registry - discovers tool operations from tagged service classes.

Provides:
- One-time, thread-safe discovery of @tool_service classes
- Lookup of operation descriptors by name
- Enumeration of registered operation names

Lifecycle: create one registry at process start; the table is written once
by discover() and is read-only afterwards, so reads take no lock.
"""

import importlib
import inspect
import logging
import pkgutil
import threading
from types import ModuleType
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from .descriptors import OperationDescriptor, describe_method
from .markers import get_tool_marker, is_tool_service

logger = logging.getLogger(__name__)


# ============================================================================
# Exceptions
# ============================================================================

class OperationRegistryError(Exception):
    """Base exception for registry errors."""
    pass


class OperationNotFound(OperationRegistryError):
    """Operation not found in registry."""
    pass


# ============================================================================
# Operation Registry
# ============================================================================

class OperationRegistry:
    """
    Registry of tool operations discovered from tool-service classes.

    Args:
        packages: Dotted package names whose modules are imported and
            scanned for tool services
        service_types: Tool-service classes to scan in addition to packages
    """

    def __init__(
        self,
        packages: Sequence[str] = (),
        service_types: Iterable[type] = (),
    ):
        self._packages = tuple(packages)
        self._service_types = tuple(service_types)
        self._operations: Dict[str, OperationDescriptor] = {}
        self._discovered = False
        self._discovery_lock = threading.Lock()

    # ========================================================================
    # Discovery
    # ========================================================================

    @property
    def is_discovered(self) -> bool:
        return self._discovered

    def discover(self) -> None:
        """
        Populate the operation table. Idempotent and safe to call from many
        threads; the scan itself runs exactly once.
        """
        if self._discovered:
            return

        with self._discovery_lock:
            if self._discovered:
                return

            # Publish the finished table in one assignment
            self._operations = self._scan()
            self._discovered = True

    def _scan(self) -> Dict[str, OperationDescriptor]:
        """Scan every candidate service type. Never raises."""
        logger.info("Discovering MCP tools...")
        table: Dict[str, OperationDescriptor] = {}

        for service_type in self._candidate_types():
            try:
                for descriptor in self._scan_type(service_type):
                    existing = table.get(descriptor.name)
                    if existing is not None and existing.owner_type is not service_type:
                        logger.warning(
                            f"Tool '{descriptor.name}' from {service_type.__name__} "
                            f"replaces the one from {existing.owner_type.__name__}"
                        )
                    table[descriptor.name] = descriptor
                    logger.debug(
                        f"Discovered tool: {descriptor.name} "
                        f"from service: {service_type.__name__}"
                    )
            except Exception as e:
                logger.warning(
                    f"Failed to discover tools from service type: "
                    f"{getattr(service_type, '__name__', service_type)}: {e}"
                )

        logger.info(f"Discovered {len(table)} tools")
        return table

    def _candidate_types(self) -> List[type]:
        """Explicit service types first, then tool services found in packages."""
        candidates: List[type] = []
        seen = set()

        def add(service_type: type) -> None:
            if service_type not in seen:
                seen.add(service_type)
                candidates.append(service_type)

        for service_type in self._service_types:
            add(service_type)

        for module in self._iter_modules():
            for _, member in inspect.getmembers(module, inspect.isclass):
                if member.__module__ == module.__name__ and is_tool_service(member):
                    add(member)

        return candidates

    def _iter_modules(self) -> Iterator[ModuleType]:
        """Import each configured package and all of its submodules."""
        for package_name in self._packages:
            try:
                package = importlib.import_module(package_name)
            except Exception as e:
                logger.warning(f"Failed to import tool package {package_name}: {e}")
                continue

            yield package

            package_path = getattr(package, "__path__", None)
            if not package_path:
                continue

            for module_info in pkgutil.walk_packages(package_path, prefix=f"{package_name}."):
                try:
                    yield importlib.import_module(module_info.name)
                except Exception as e:
                    logger.warning(f"Failed to import tool module {module_info.name}: {e}")

    @staticmethod
    def _scan_type(service_type: type) -> List[OperationDescriptor]:
        """Collect descriptors for the public tagged methods of one type."""
        descriptors = []
        for name, member in inspect.getmembers(service_type, inspect.isfunction):
            if name.startswith("_"):
                continue
            marker = get_tool_marker(member)
            if marker is None:
                continue
            descriptors.append(describe_method(service_type, member, marker))
        return descriptors

    # ========================================================================
    # Retrieval
    # ========================================================================

    def lookup(self, name: str) -> Optional[OperationDescriptor]:
        """Return the descriptor for ``name`` or None if it is not registered."""
        self.discover()
        return self._operations.get(name)

    def get(self, name: str) -> OperationDescriptor:
        """
        Retrieve an operation by name.

        Raises:
            OperationNotFound: If the operation doesn't exist
        """
        descriptor = self.lookup(name)
        if descriptor is None:
            raise OperationNotFound(f"Tool '{name}' not found")
        return descriptor

    def list_names(self) -> List[str]:
        """Return all registered operation names."""
        self.discover()
        return list(self._operations.keys())

    def descriptors(self) -> List[OperationDescriptor]:
        """Return all registered operation descriptors."""
        self.discover()
        return list(self._operations.values())

    def __contains__(self, name: object) -> bool:
        self.discover()
        return name in self._operations

    def __len__(self) -> int:
        self.discover()
        return len(self._operations)
