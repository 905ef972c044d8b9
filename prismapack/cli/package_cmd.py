"""Package command - Generate the Prisma client into every function bundle."""
import typer
from pathlib import Path
from rich.table import Table

from prismapack.common import DEFAULT_SERVICE_FILE, configure_logging
from prismapack.sdk import load_config, package_service, plan_packaging
from .utils import console, success, error, info, warning, handle_error


def package(
    path: str = typer.Argument(
        DEFAULT_SERVICE_FILE,
        help="Path to serverless.yml"
    ),
    service_path: str | None = typer.Option(
        None,
        "--service-path", "-s",
        help="Service root (default: directory of the service file)"
    ),
    package_manager: str | None = typer.Option(
        None,
        "--packager",
        help="Override custom.webpack.packager (npm or yarn)"
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would run without touching the bundles"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show detailed output"
    )
):
    """
    Generate the Prisma client into the packaged function bundles.

    Run this after the external modules have been packed into
    .webpack/<function> and before the bundles are zipped. For each bundle:

    - installs prisma as a temporary devDependency (unless installDeps: false)
    - copies or links the prisma schema directory
    - runs npx prisma generate
    - removes engines built for other platforms

    Examples:
        prismapack package
        prismapack package services/api/serverless.yml
        prismapack package --dry-run
    """
    configure_logging("debug" if verbose else "info")

    try:
        if not Path(path).exists():
            error(f"Service file not found: {path}")
            raise typer.Exit(1)

        service, config = load_config(path, service_path, package_manager=package_manager)
        plans = plan_packaging(config, service)

        if not plans:
            warning("No function bundles need a Prisma client")
            return

        if dry_run:
            table = Table(title="Packaging plan", show_header=True, header_style="bold cyan")
            table.add_column("Function", style="cyan", no_wrap=True)
            table.add_column("Bundle")
            table.add_column("Steps", style="green")
            for plan in plans:
                table.add_row(plan.name, str(plan.build_dir), " → ".join(step.value for step in plan.steps))
            console.print(table)
            return

        info(f"Generating Prisma client for {len(plans)} bundle(s)")
        reports = package_service(config, service)

        console.print()
        for report in reports:
            success(f"{report.name}: removed {len(report.removed_engines)} unused engine file(s)")

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        info("\nPackaging cancelled by user")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
