"""
Schema Materialization
======================

Makes the schema directory available inside a bundle, either as a copy or
as a relative symbolic link. A relative link keeps working when the whole
project is moved, which matters for monorepos and CI caches.
"""

import os
import shutil
from pathlib import Path
from typing import Union

from prismapack.common.constants import DEFAULT_SCHEMA_DIR_NAME
from prismapack.common.errors import MaterializeError
from prismapack.common.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def relative_schema_path(build_dir: PathLike, schema_dir: PathLike) -> str:
    """
    Relative path from ``build_dir`` to ``schema_dir``.

    Relative inputs are resolved against the current working directory first,
    so ``build_dir / result`` always resolves to ``schema_dir`` regardless of
    how deeply the bundle is nested.

    Example:
        >>> relative_schema_path("/srv/app/.webpack/createUser", "/srv/app/prisma")
        '../../prisma'
    """
    build_abs = Path(build_dir).resolve()
    schema_abs = Path(schema_dir).resolve()
    return os.path.relpath(schema_abs, build_abs)


def _clear_target(target: Path) -> None:
    """Remove whatever occupies ``target`` (link, directory or file)."""
    if target.is_symlink() or target.is_file():
        target.unlink()
    elif target.is_dir():
        shutil.rmtree(target)


def copy_schema(build_dir: PathLike, schema_dir: PathLike, dir_name: str = DEFAULT_SCHEMA_DIR_NAME) -> Path:
    """
    Recursively copy ``schema_dir`` to ``build_dir/<dir_name>``.

    Existing files are overwritten, so running it twice is harmless. A link
    left by an earlier symlink-mode run is replaced by a real directory.
    """
    source = Path(schema_dir)
    target = Path(build_dir) / dir_name

    if not source.is_dir():
        raise MaterializeError(f"Schema directory not found: {source}")

    try:
        if target.is_symlink() or target.is_file():
            target.unlink()
        shutil.copytree(source, target, dirs_exist_ok=True)
    except OSError as e:
        raise MaterializeError(f"Failed to copy schema from {source} to {target}: {e}") from e
    return target


def link_schema(build_dir: PathLike, schema_dir: PathLike, dir_name: str = DEFAULT_SCHEMA_DIR_NAME) -> Path:
    """
    Create ``build_dir/<dir_name>`` as a relative symlink to ``schema_dir``.

    Equivalent to running ``ln -s <relative path> <dir_name>`` inside the
    bundle; any previous copy or link at that name is replaced.
    """
    source = Path(schema_dir)
    target = Path(build_dir) / dir_name

    if not source.is_dir():
        raise MaterializeError(f"Schema directory not found: {source}")

    relative = relative_schema_path(build_dir, source)
    try:
        _clear_target(target)
        target.symlink_to(relative, target_is_directory=True)
    except OSError as e:
        raise MaterializeError(f"Failed to link schema {relative} at {target}: {e}") from e
    logger.debug(f"Linked {target} -> {relative}")
    return target


def materialize_schema(
    function_name: str,
    build_dir: PathLike,
    schema_dir: PathLike,
    use_symlink: bool = False,
    dir_name: str = DEFAULT_SCHEMA_DIR_NAME,
) -> Path:
    """
    Put the schema into a function bundle.

    Args:
        function_name: Function being packaged (for progress output)
        build_dir: The function's bundle directory
        schema_dir: Directory holding ``schema.prisma``
        use_symlink: Link instead of copying
        dir_name: Name of the schema directory inside the bundle

    Returns:
        Path of the created directory or link

    Raises:
        MaterializeError: If the source is missing or the filesystem fails
    """
    if use_symlink:
        logger.info(f"Symlink prisma schema for {function_name}...")
        return link_schema(build_dir, schema_dir, dir_name)

    logger.info(f"Copy prisma schema for {function_name}...")
    return copy_schema(build_dir, schema_dir, dir_name)
