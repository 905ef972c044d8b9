"""Client generation: ``npx prisma generate`` inside a bundle."""

from pathlib import Path
from typing import List, Union

from prismapack.common.constants import DATA_PROXY_FLAG, GENERATOR_ACTION, GENERATOR_PACKAGE
from prismapack.common.logger import get_logger
from prismapack.sdk.commands import run_command

logger = get_logger(__name__)


def generate_command(data_proxy: bool = False) -> List[str]:
    """
    Build the generator argv.

    Examples:
        >>> generate_command()
        ['npx', 'prisma', 'generate']
        >>> generate_command(data_proxy=True)
        ['npx', 'prisma', 'generate', '--data-proxy']
    """
    command = ["npx", GENERATOR_PACKAGE, GENERATOR_ACTION]
    if data_proxy:
        command.append(DATA_PROXY_FLAG)
    return command


def generate_client(build_dir: Union[str, Path], data_proxy: bool = False, function_name: str = "") -> None:
    """Run the generator with ``build_dir`` as working directory."""
    target = function_name or Path(build_dir).name
    logger.info(f"Generate prisma client for {target}...")
    run_command(generate_command(data_proxy), cwd=build_dir)
