"""
Generator Dependency
====================

Adds the generator CLI as a temporary dev dependency of a bundle before
generation and removes it afterwards, so it never ships with the function.
"""

from pathlib import Path
from typing import List, Union

from prismapack.common.constants import DEFAULT_PACKAGE_MANAGER, GENERATOR_PACKAGE
from prismapack.common.logger import get_logger
from prismapack.sdk.commands import run_command

logger = get_logger(__name__)


def install_command(package_name: str, package_manager: str = DEFAULT_PACKAGE_MANAGER, dev: bool = True) -> List[str]:
    """
    Build the install argv for ``package_manager``.

    Examples:
        >>> install_command("prisma")
        ['npm', 'install', '-D', 'prisma']
        >>> install_command("prisma", "yarn", dev=False)
        ['yarn', 'add', 'prisma']
    """
    if package_manager == "npm":
        command = ["npm", "install"]
    else:
        command = [package_manager, "add"]
    if dev:
        command.append("-D")
    command.append(package_name)
    return command


def remove_command(package_name: str, package_manager: str = DEFAULT_PACKAGE_MANAGER) -> List[str]:
    """``npm remove <pkg>`` or ``yarn remove <pkg>``."""
    return [package_manager, "remove", package_name]


def install_generator(
    build_dir: Union[str, Path],
    package_manager: str = DEFAULT_PACKAGE_MANAGER,
    package_name: str = GENERATOR_PACKAGE,
) -> None:
    """Install the generator as a dev dependency inside ``build_dir``."""
    logger.info(f"Install {package_name} devDependencies for generate")
    run_command(install_command(package_name, package_manager, dev=True), cwd=build_dir)


def remove_generator(
    build_dir: Union[str, Path],
    package_manager: str = DEFAULT_PACKAGE_MANAGER,
    package_name: str = GENERATOR_PACKAGE,
) -> None:
    """Remove the temporary generator dependency from ``build_dir``."""
    logger.info(f"Remove {package_name} devDependencies")
    run_command(remove_command(package_name, package_manager), cwd=build_dir)
