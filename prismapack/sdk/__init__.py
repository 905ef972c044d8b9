"""prismapack SDK - Prisma client generation for serverless function bundles.

This package provides:
- Loading serverless.yml and resolving packaging options
- Selecting the bundles that need a client
- Installing/removing the generator, materializing the schema
- Running the generator and pruning unused native engines

Example:
    >>> from prismapack.sdk import load_config, package_service
    >>> service, config = load_config("serverless.yml")
    >>> reports = package_service(config, service)
"""

from .commands import run_command
from .dependencies import install_command, install_generator, remove_command, remove_generator
from .generator import generate_client, generate_command
from .hook import (
    FunctionPlan,
    FunctionReport,
    Step,
    build_hooks,
    execute_plan,
    package_service,
    plan_packaging,
    plan_steps,
)
from .loader import load_config, load_service, resolve_config
from .materializer import copy_schema, link_schema, materialize_schema, relative_schema_path
from .pruner import (
    compile_patterns,
    delete_artifact,
    find_unused_engines,
    is_unused,
    pattern_matches,
    prune_engines,
)
from .selector import (
    effective_runtime,
    is_node_runtime,
    select_functions,
    select_node_functions,
    select_service_functions,
)

__all__ = [
    # Loading
    "load_service",
    "load_config",
    "resolve_config",
    # Selection
    "select_functions",
    "select_node_functions",
    "select_service_functions",
    "is_node_runtime",
    "effective_runtime",
    # Steps
    "run_command",
    "install_command",
    "remove_command",
    "install_generator",
    "remove_generator",
    "relative_schema_path",
    "copy_schema",
    "link_schema",
    "materialize_schema",
    "generate_command",
    "generate_client",
    "compile_patterns",
    "is_unused",
    "pattern_matches",
    "find_unused_engines",
    "delete_artifact",
    "prune_engines",
    # Coordination
    "Step",
    "FunctionPlan",
    "FunctionReport",
    "plan_steps",
    "plan_packaging",
    "execute_plan",
    "package_service",
    "build_hooks",
]
