"""
prismapack Shared Constants

Single source of truth for defaults, command names and the engine table.

Usage:
    from prismapack.common.constants import DEFAULT_PACKAGE_MANAGER, ENGINE_FAMILIES
"""

from typing import List, Sequence, Tuple

# =============================================================================
# VERSION INFORMATION
# =============================================================================

PRISMAPACK_VERSION = "0.3.0"
"""Current prismapack version"""


# =============================================================================
# HOST INTEGRATION
# =============================================================================

LIFECYCLE_EVENT = "after:webpack:package:packExternalModules"
"""Host lifecycle point: after external modules are packed, before zipping"""

SERVICE_PACKAGE = "service"
"""Build directory name used when the service is packaged as one unit"""

BUILD_DIR_NAME = ".webpack"
"""Directory under the build output root that holds per-function bundles"""

DEFAULT_SERVICE_FILE = "serverless.yml"
"""Service definition file looked up by the CLI"""


# =============================================================================
# SUPPORTED VALUES
# =============================================================================

SUPPORTED_PACKAGE_MANAGERS = ["npm", "yarn"]
"""Package managers whose command syntax is known"""

NODE_RUNTIME_MARKER = "node"
"""Substring identifying a JavaScript runtime (nodejs18.x, nodejs20.x, ...)"""

DEFAULT_RUNTIME = "nodejs"
"""Runtime assumed when neither the function nor the provider sets one"""


# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULT_PACKAGE_MANAGER = "npm"
DEFAULT_INSTALL_DEPS = True
DEFAULT_USE_SYMLINK = False
DEFAULT_DATA_PROXY = False

DEFAULT_SCHEMA_DIR_NAME = "prisma"
"""Schema directory name, both under the schema root and inside a bundle"""

GENERATOR_PACKAGE = "prisma"
"""npm package providing the generator CLI"""

GENERATOR_ACTION = "generate"
DATA_PROXY_FLAG = "--data-proxy"


# =============================================================================
# ENGINE TABLE
# =============================================================================

DEFAULT_KEEP_TARGET = "rhel"
"""Platform variant kept in the bundle (the Lambda runtime is RHEL based)"""

ENGINE_FAMILIES: Tuple[str, ...] = (
    "node_modules/.prisma/client/libquery_engine",
    "node_modules/prisma/libquery_engine",
    "node_modules/@prisma/engines/libquery_engine",
    "node_modules/@prisma/engines/migration-engine",
    "node_modules/@prisma/engines/prisma-fmt",
    "node_modules/@prisma/engines/introspection-engine",
)
"""Engine binary families, in the order their patterns are evaluated"""

EXTRA_ENGINE_PATTERNS: Tuple[str, ...] = (
    "node_modules/prisma/engines/**",
)
"""Patterns appended after the families (removed without a keep rule)"""


def build_engine_patterns(
    families: Sequence[str] = ENGINE_FAMILIES,
    keep_target: str = DEFAULT_KEEP_TARGET,
    extra: Sequence[str] = EXTRA_ENGINE_PATTERNS,
) -> List[str]:
    """
    Expand engine families into ordered include/exclude glob patterns.

    Each family yields a pair: ``<family>*`` selects every variant and
    ``!<family>-<keep_target>*`` puts the needed variant back.

    Args:
        families: Path prefixes of the engine binaries, relative to a bundle
        keep_target: Platform variant to keep
        extra: Patterns appended as-is after the pairs

    Returns:
        Ordered pattern list

    Example:
        >>> build_engine_patterns(["node_modules/prisma/libquery_engine"], extra=())
        ['node_modules/prisma/libquery_engine*', '!node_modules/prisma/libquery_engine-rhel*']
    """
    patterns: List[str] = []
    for family in families:
        patterns.append(f"{family}*")
        patterns.append(f"!{family}-{keep_target}*")
    patterns.extend(extra)
    return patterns


DEFAULT_ENGINE_PATTERNS: Tuple[str, ...] = tuple(build_engine_patterns())
"""Engine patterns used when the configuration does not override them"""
