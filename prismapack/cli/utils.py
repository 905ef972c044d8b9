"""Console helpers shared by all CLI commands."""
from rich.console import Console

from prismapack.common.errors import CommandError, PrismapackError

console = Console()


def success(message: str) -> None:
    console.print(f"[bold green]✔[/bold green] {message}")


def error(message: str) -> None:
    console.print(f"[bold red]✘[/bold red] {message}")


def warning(message: str) -> None:
    console.print(f"[bold yellow]![/bold yellow] {message}")


def info(message: str) -> None:
    console.print(f"[bold cyan]›[/bold cyan] {message}")


def handle_error(e: Exception, verbose: bool = False) -> None:
    """
    Print an error in a user-friendly way.

    prismapack errors print their message; a failed command also shows its
    exit code and working directory. Anything else is unexpected and prints
    a traceback when verbose.
    """
    if isinstance(e, CommandError):
        error(f"Command failed: [bold]{' '.join(e.command)}[/bold]")
        if e.returncode is not None:
            console.print(f"  [dim]exit code {e.returncode}, cwd {e.cwd}[/dim]")
        if e.stderr.strip():
            console.print(e.stderr.strip(), style="dim", markup=False)
    elif isinstance(e, PrismapackError):
        error(e.message)
    else:
        error(f"Unexpected error: {e}")
        if verbose:
            console.print_exception()
