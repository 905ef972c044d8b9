"""Info commands - Version and doctor diagnostics."""
import shutil
import subprocess
import sys
from pathlib import Path

from rich.table import Table

from prismapack import __version__
from prismapack.common import DEFAULT_SERVICE_FILE
from .utils import console, success, warning, info


def version():
    """
    Show prismapack version information.

    Examples:
        prismapack version
    """
    python_version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

    table = Table(title="prismapack Version Information", show_header=True, header_style="bold cyan")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Version", style="green")
    table.add_row("prismapack", __version__)
    table.add_row("Python", python_version)
    console.print(table)


def _tool_version(executable: str) -> str | None:
    """Return ``<tool> --version`` output, or None if it is unavailable."""
    if shutil.which(executable) is None:
        return None
    try:
        result = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
            timeout=10
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def doctor():
    """
    Diagnose common issues with your packaging setup.

    Checks for:
    - npm / npx / yarn availability
    - serverless.yml in the current directory
    - prisma schema directory

    Examples:
        prismapack doctor
    """
    console.print("[bold cyan]Running diagnostics...[/bold cyan]\n")

    issues = []
    checks_passed = 0
    total_checks = 0

    for tool, required in (("npm", True), ("npx", True), ("yarn", False)):
        total_checks += 1
        found = _tool_version(tool)
        if found:
            success(f"{tool} {found}")
            checks_passed += 1
        elif required:
            warning(f"{tool} not found")
            issues.append(f"Install Node.js so that '{tool}' is on PATH")
        else:
            info(f"{tool} not found (only needed with custom.webpack.packager: yarn)")
            checks_passed += 1

    total_checks += 1
    service_file = Path(DEFAULT_SERVICE_FILE)
    if service_file.exists():
        success(f"Found {DEFAULT_SERVICE_FILE} in current directory")
        checks_passed += 1
    else:
        info(f"No {DEFAULT_SERVICE_FILE} in current directory")

    total_checks += 1
    if (Path("prisma") / "schema.prisma").exists():
        success("Found prisma/schema.prisma")
        checks_passed += 1
    else:
        warning("prisma/schema.prisma not found")
        issues.append("Set custom.prisma.prismaPath to the directory containing prisma/")

    console.print()
    console.print("[bold]Summary:[/bold]")
    if checks_passed == total_checks:
        success(f"All checks passed! ({checks_passed}/{total_checks})")
    else:
        info(f"Passed {checks_passed}/{total_checks} checks")
        if issues:
            console.print("\n[bold yellow]Action items:[/bold yellow]")
            for idx, issue in enumerate(issues, 1):
                console.print(f"  {idx}. {issue}")

    console.print()
