"""Engines command - Inspect the engine patterns and what they match."""
import typer
from pathlib import Path
from typing import List

from prismapack.common import DEFAULT_ENGINE_PATTERNS, DEFAULT_SERVICE_FILE
from prismapack.sdk import find_unused_engines, load_config, prune_engines
from .utils import console, success, error, info, handle_error


def resolve_patterns(service_file: str | None) -> List[str]:
    """
    Patterns in effect for a service.

    An explicit service file must exist. Without one, ``serverless.yml`` in
    the current directory is used when present, otherwise the built-in table.
    """
    if service_file is None:
        if not Path(DEFAULT_SERVICE_FILE).exists():
            return list(DEFAULT_ENGINE_PATTERNS)
        service_file = DEFAULT_SERVICE_FILE
    _, config = load_config(service_file)
    return config.patterns


def engines(
    build_dir: str | None = typer.Argument(
        None,
        help="Bundle directory to scan (omit to print the patterns)"
    ),
    service: str | None = typer.Option(
        None,
        "--service", "-s",
        help="serverless.yml whose custom.prisma.enginePatterns apply (default: ./serverless.yml if present)"
    ),
    delete: bool = typer.Option(
        False,
        "--delete",
        help="Delete the matched engines instead of listing them"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show detailed output"
    )
):
    """
    Show the engine patterns, or the unused engines inside a bundle.

    Examples:
        prismapack engines
        prismapack engines .webpack/createUser
        prismapack engines .webpack/createUser --service services/api/serverless.yml
        prismapack engines .webpack/createUser --delete
    """
    try:
        patterns = resolve_patterns(service)

        if build_dir is None:
            info("Engine patterns (evaluated in order, '!' keeps a match):")
            for pattern in patterns:
                console.print(f"  {pattern}", markup=False)
            return

        if not Path(build_dir).is_dir():
            error(f"Bundle directory not found: {build_dir}")
            raise typer.Exit(1)

        if delete:
            removed = prune_engines(build_dir, patterns)
            success(f"Removed {len(removed)} unused engine file(s)")
            return

        unused = find_unused_engines(build_dir, patterns)
        if not unused:
            success("No unused engines found")
            return
        info(f"{len(unused)} unused engine file(s):")
        for engine in unused:
            console.print(f"  - {engine}", markup=False)

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
