"""
Service Loading
===============

Reads ``serverless.yml`` and resolves the hook configuration from its
``custom`` section. Every option is optional; missing ones fall back to the
defaults in ``prismapack.common.constants``.
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from prismapack.common.errors import ConfigError
from prismapack.common.logger import get_logger
from prismapack.common.constants import (
    DEFAULT_DATA_PROXY,
    DEFAULT_INSTALL_DEPS,
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_SCHEMA_DIR_NAME,
    DEFAULT_USE_SYMLINK,
)
from prismapack.schema import HookConfig, ServiceDefinition

logger = get_logger(__name__)


def load_service(path: Union[str, Path]) -> ServiceDefinition:
    """Load and validate a service definition file.

    Args:
        path: Path to ``serverless.yml``

    Returns:
        Validated ServiceDefinition

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or does not
            match the expected structure

    Example:
        >>> service = load_service("serverless.yml")
        >>> list(service.functions)
        ['createUser', 'listUsers']
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ConfigError(f"Service file not found: {file_path}")

    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Service file {file_path} must contain a mapping at the top level")

    try:
        service = ServiceDefinition.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid service definition in {file_path}: {e}") from e

    logger.debug(f"Loaded service '{service.service_name}' with {len(service.functions)} functions")
    return service


def _resolve_root(value: Any, service_root: Path) -> Path:
    """Relative roots are taken relative to the service directory"""
    if value is None or value == "":
        return service_root
    root = Path(str(value))
    if not root.is_absolute():
        root = service_root / root
    return root


def resolve_config(
    service: ServiceDefinition,
    service_path: Union[str, Path],
    **overrides: Any,
) -> HookConfig:
    """Build the hook configuration from the ``custom`` section.

    Recognized keys:
        custom.webpack.packager            npm | yarn (default npm)
        custom.webpack.webpackOutputPath   build output root (default service root)
        custom.prisma.prismaPath           schema root (default service root)
        custom.prisma.installDeps          default true
        custom.prisma.useSymLinkForPrisma  default false
        custom.prisma.ignoreFunctions      default []
        custom.prisma.dataProxy            default false
        custom.prisma.schemaDirName        default "prisma"
        custom.prisma.enginePatterns       default: the built-in engine table

    Args:
        service: Loaded service definition
        service_path: Service root directory
        **overrides: HookConfig fields that take precedence (used by the CLI)

    Returns:
        Frozen HookConfig

    Raises:
        ConfigError: If a present value is invalid (e.g. unknown packager)
    """
    service_root = Path(service_path)

    values = {
        "package_manager": service.get_custom("webpack", "packager", default=DEFAULT_PACKAGE_MANAGER),
        "build_path": _resolve_root(service.get_custom("webpack", "webpackOutputPath"), service_root),
        "schema_path": _resolve_root(service.get_custom("prisma", "prismaPath"), service_root),
        "install_deps": service.get_custom("prisma", "installDeps", default=DEFAULT_INSTALL_DEPS),
        "use_symlink": service.get_custom("prisma", "useSymLinkForPrisma", default=DEFAULT_USE_SYMLINK),
        "ignore_functions": service.get_custom("prisma", "ignoreFunctions", default=[]),
        "data_proxy": service.get_custom("prisma", "dataProxy", default=DEFAULT_DATA_PROXY),
        "schema_dir_name": service.get_custom("prisma", "schemaDirName", default=DEFAULT_SCHEMA_DIR_NAME),
        "engine_patterns": service.get_custom("prisma", "enginePatterns"),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = HookConfig.model_validate(values)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid prisma packaging options: {e}") from e

    logger.debug(
        f"Resolved config: packager={config.package_manager}, "
        f"schema={config.schema_dir}, build root={config.build_path}, "
        f"install_deps={config.install_deps}, symlink={config.use_symlink}"
    )
    return config


def load_config(
    service_file: Union[str, Path],
    service_path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> tuple[ServiceDefinition, HookConfig]:
    """Load a service file and resolve its configuration in one call.

    The service root defaults to the directory containing the file.
    """
    file_path = Path(service_file).resolve()
    service = load_service(file_path)
    root = Path(service_path).resolve() if service_path else file_path.parent
    return service, resolve_config(service, root, **overrides)
