"""prismapack command line.

Runs the Prisma packaging step outside a serverless host, and inspects
what it would do to a service's function bundles.
"""
import typer
from . import package_cmd, functions_cmd, engines_cmd, info_cmd

app = typer.Typer(
    name="prismapack",
    help=(
        "Generate the Prisma client into each webpack function bundle "
        "and drop engines built for other platforms."
    ),
    no_args_is_help=True,
    add_completion=False
)

# Packaging
app.command()(package_cmd.package)

# Inspection: what gets processed, what gets pruned
app.command()(functions_cmd.functions)
app.command()(engines_cmd.engines)

# Environment
app.command()(info_cmd.version)
app.command()(info_cmd.doctor)


def main():
    """Console script entry point (``prismapack``)."""
    app()


if __name__ == "__main__":
    main()
