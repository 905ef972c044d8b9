"""
prismapack Common Package

Shared primitives used by the schema, sdk and cli packages:
- Exception classes for consistent error handling
- Constants for supported values, defaults and the engine table
- Logging helpers

Usage:
    from prismapack.common import CommandError, get_logger
    from prismapack.common import DEFAULT_ENGINE_PATTERNS, LIFECYCLE_EVENT
"""

# Error classes
from .errors import (
    PrismapackError,
    ConfigError,
    CommandError,
    MaterializeError,
    PruneError,
)

# Constants
from .constants import (
    PRISMAPACK_VERSION,
    LIFECYCLE_EVENT,
    SERVICE_PACKAGE,
    BUILD_DIR_NAME,
    DEFAULT_SERVICE_FILE,
    SUPPORTED_PACKAGE_MANAGERS,
    NODE_RUNTIME_MARKER,
    DEFAULT_RUNTIME,
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_SCHEMA_DIR_NAME,
    GENERATOR_PACKAGE,
    DATA_PROXY_FLAG,
    DEFAULT_KEEP_TARGET,
    ENGINE_FAMILIES,
    EXTRA_ENGINE_PATTERNS,
    DEFAULT_ENGINE_PATTERNS,
    build_engine_patterns,
)

# Logger
from .logger import (
    PrismapackLogger,
    get_logger,
    configure_logging,
    set_function_context,
    get_function_context,
    clear_function_context,
)

__all__ = [
    # Errors
    "PrismapackError",
    "ConfigError",
    "CommandError",
    "MaterializeError",
    "PruneError",
    # Constants
    "PRISMAPACK_VERSION",
    "LIFECYCLE_EVENT",
    "SERVICE_PACKAGE",
    "BUILD_DIR_NAME",
    "DEFAULT_SERVICE_FILE",
    "SUPPORTED_PACKAGE_MANAGERS",
    "NODE_RUNTIME_MARKER",
    "DEFAULT_RUNTIME",
    "DEFAULT_PACKAGE_MANAGER",
    "DEFAULT_SCHEMA_DIR_NAME",
    "GENERATOR_PACKAGE",
    "DATA_PROXY_FLAG",
    "DEFAULT_KEEP_TARGET",
    "ENGINE_FAMILIES",
    "EXTRA_ENGINE_PATTERNS",
    "DEFAULT_ENGINE_PATTERNS",
    "build_engine_patterns",
    # Logger
    "PrismapackLogger",
    "get_logger",
    "configure_logging",
    "set_function_context",
    "get_function_context",
    "clear_function_context",
]
