"""Functions command - Show which bundles get a Prisma client."""
import typer
from pathlib import Path
from rich.table import Table

from prismapack.common import DEFAULT_SERVICE_FILE
from prismapack.sdk import effective_runtime, load_config, select_service_functions
from .utils import console, error, info, handle_error


def functions(
    path: str = typer.Argument(
        DEFAULT_SERVICE_FILE,
        help="Path to serverless.yml"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show detailed output"
    )
):
    """
    List the functions of a service and whether they are processed.

    A function is skipped when it is listed in custom.prisma.ignoreFunctions,
    is deployed from a container image, or does not use a Node.js runtime.
    Without package.individually the whole service is one bundle.

    Examples:
        prismapack functions
        prismapack functions services/api/serverless.yml
    """
    try:
        if not Path(path).exists():
            error(f"Service file not found: {path}")
            raise typer.Exit(1)

        service, config = load_config(path)
        selected = select_service_functions(service, ignore=config.ignore_functions)

        if not service.package.individually:
            info("package.individually is off: the service is packaged as one bundle")

        table = Table(title=f"Functions of {service.service_name}", show_header=True, header_style="bold cyan")
        table.add_column("Function", style="cyan", no_wrap=True)
        table.add_column("Runtime")
        table.add_column("Image")
        table.add_column("Processed", justify="center")

        for name, function in service.functions.items():
            image = function.image_ref
            if not service.package.individually:
                processed = "yes (service bundle)"
            else:
                processed = "yes" if name in selected else "no"
            table.add_row(
                name,
                effective_runtime(function, service.provider.runtime),
                str(image) if image else "-",
                processed,
            )
        console.print(table)
        console.print(f"Bundles: {', '.join(selected) if selected else '(none)'}")

    except typer.Exit:
        raise
    except Exception as e:
        handle_error(e, verbose)
        raise typer.Exit(1)
