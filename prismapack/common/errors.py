"""
prismapack Error Classes

All errors raised by prismapack derive from PrismapackError, so callers (the
CLI, a host build tool) can catch a single base class and still report the
specific failure.

Every error carries a stable ``code`` and a human-readable ``message`` and can
be serialized with ``to_dict()``.

Usage:
    from prismapack.common.errors import CommandError

    raise CommandError(["npx", "prisma", "generate"], returncode=1, stderr="...")
"""

from typing import Any, Dict, List, Optional, Sequence


class PrismapackError(Exception):
    """Base class for all prismapack errors."""

    code = "PRISMAPACK_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for structured output."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }


class ConfigError(PrismapackError):
    """Raised when the service file or a configuration value is invalid."""

    code = "CONFIG_ERROR"


class CommandError(PrismapackError):
    """
    Raised when an external command exits non-zero or cannot be started.

    Attributes:
        command: The argv that was executed
        returncode: Exit status (None when the executable was not found)
        stderr: Captured standard error, if any
        cwd: Working directory the command ran in
    """

    code = "COMMAND_ERROR"

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
        cwd: Optional[str] = None,
    ):
        self.command: List[str] = list(command)
        self.returncode = returncode
        self.stderr = stderr or ""
        self.cwd = cwd

        rendered = " ".join(self.command)
        if returncode is None:
            message = f"Command could not be started: {rendered}"
        else:
            message = f"Command failed with exit code {returncode}: {rendered}"
        if cwd:
            message += f" (cwd: {cwd})"
        if self.stderr.strip():
            message += f"\n{self.stderr.strip()}"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "command": self.command,
                "returncode": self.returncode,
                "cwd": self.cwd,
            }
        )
        return data


class MaterializeError(PrismapackError):
    """Raised when the schema directory cannot be copied or linked."""

    code = "MATERIALIZE_ERROR"


class PruneError(PrismapackError):
    """Raised when an engine artifact exists but cannot be deleted."""

    code = "PRUNE_ERROR"


__all__ = [
    "PrismapackError",
    "ConfigError",
    "CommandError",
    "MaterializeError",
    "PruneError",
]
