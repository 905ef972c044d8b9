"""
External Commands
=================

Every external process (package manager, generator) goes through
``run_command``: blocking, scoped by an explicit working directory, no
timeout, and a non-zero exit becomes a CommandError.
"""

import subprocess
from pathlib import Path
from typing import List, Sequence, Union

from prismapack.common.errors import CommandError
from prismapack.common.logger import get_logger

logger = get_logger(__name__)


def run_command(command: Sequence[str], cwd: Union[str, Path]) -> subprocess.CompletedProcess:
    """
    Run ``command`` in ``cwd`` and wait for it.

    The parent process working directory is never changed.

    Args:
        command: argv list, e.g. ``["npx", "prisma", "generate"]``
        cwd: Directory the command runs in

    Returns:
        The completed process (stdout/stderr captured as text)

    Raises:
        CommandError: If the executable is missing or exits non-zero
    """
    argv: List[str] = [str(part) for part in command]
    logger.debug(f"Running: {' '.join(argv)} (cwd: {cwd})")

    try:
        result = subprocess.run(
            argv,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        logger.error(f"Command failed ({e.returncode}): {' '.join(argv)}")
        raise CommandError(argv, returncode=e.returncode, stderr=e.stderr or "", cwd=str(cwd)) from e
    except (FileNotFoundError, NotADirectoryError) as e:
        # Raised for a missing executable as well as a missing cwd
        raise CommandError(argv, returncode=None, stderr=str(e), cwd=str(cwd)) from e

    if result.stdout:
        logger.debug(result.stdout.rstrip())
    return result
