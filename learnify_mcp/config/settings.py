"""
Configuration and Feature Flags for the Learnify MCP server

Settings are read from environment variables so the server can be pointed
at a different Learnify API, or have binding behaviour toggled, without
code changes.

Usage:
    from learnify_mcp.config.settings import is_enabled, load_api_settings

    if is_enabled('strict_argument_binding'):
        # Missing required tool arguments are rejected
        ...

    settings = load_api_settings()
    session.get(f"{settings.base_url}/api/courses", timeout=settings.timeout)

Environment Variables:
    LEARNIFY_API_BASE_URL=<url>       - Base URL of the Learnify resource API
    LEARNIFY_API_TIMEOUT=<seconds>    - HTTP timeout for API calls
    LEARNIFY_TOOL_PACKAGES=<a,b>      - Packages scanned for tool services
    LEARNIFY_STRICT_BINDING=true/false - Reject missing required arguments
    LOG_LEVEL=<level>                 - Root logging level for the server
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Tuple


DEFAULT_API_BASE_URL = "http://localhost:5271"
DEFAULT_API_TIMEOUT = 30.0
DEFAULT_TOOL_PACKAGES = ("learnify_mcp.features",)


# Feature flags with environment variable overrides
FEATURE_FLAGS: Dict[str, bool] = {
    # Missing required scalars fail binding instead of receiving a zero value
    'strict_argument_binding': os.getenv('LEARNIFY_STRICT_BINDING', 'false').lower() == 'true',
}


def is_enabled(flag: str) -> bool:
    """
    Check if a feature flag is enabled.

    Args:
        flag: Feature flag name (e.g., 'strict_argument_binding')

    Returns:
        True if flag is enabled, False otherwise

    Raises:
        KeyError: If flag name is not recognized

    Example:
        >>> is_enabled('strict_argument_binding')
        False  # Default

        >>> # After: export LEARNIFY_STRICT_BINDING=true
        >>> is_enabled('strict_argument_binding')
        True
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    return FEATURE_FLAGS[flag]


def get_all_flags() -> Dict[str, bool]:
    """
    Get all feature flags and their current state.

    Returns:
        Dictionary of flag names to boolean values
    """
    return FEATURE_FLAGS.copy()


def set_flag(flag: str, enabled: bool) -> None:
    """
    Programmatically set a feature flag (for testing only).

    Args:
        flag: Feature flag name
        enabled: True to enable, False to disable

    Warning:
        This is for testing only. In production, use environment variables.
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    FEATURE_FLAGS[flag] = enabled


@dataclass(frozen=True)
class ApiSettings:
    """Connection settings for the Learnify resource API.

    Attributes:
        base_url: Root URL every relative endpoint is joined to
        timeout: Per-request timeout in seconds
        tool_packages: Packages scanned for tool services at discovery
    """
    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_API_TIMEOUT
    tool_packages: Tuple[str, ...] = field(default=DEFAULT_TOOL_PACKAGES)


def load_api_settings() -> ApiSettings:
    """
    Build ApiSettings from the environment.

    Returns:
        ApiSettings with environment overrides applied

    Raises:
        ValueError: If LEARNIFY_API_TIMEOUT is not a number
    """
    raw_timeout = os.getenv('LEARNIFY_API_TIMEOUT')
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_API_TIMEOUT
    except ValueError as e:
        raise ValueError(
            f"LEARNIFY_API_TIMEOUT must be a number of seconds, got '{raw_timeout}'"
        ) from e

    raw_packages = os.getenv('LEARNIFY_TOOL_PACKAGES', '')
    packages = tuple(p.strip() for p in raw_packages.split(',') if p.strip())

    return ApiSettings(
        base_url=os.getenv('LEARNIFY_API_BASE_URL', DEFAULT_API_BASE_URL),
        timeout=timeout,
        tool_packages=packages or DEFAULT_TOOL_PACKAGES,
    )
