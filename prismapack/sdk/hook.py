"""
Packaging Hook
==============

Coordinates the per-bundle pipeline:

    install? -> materialize schema -> generate client -> prune engines -> remove?

``plan_packaging`` is pure and describes what will happen; ``package_service``
runs the plans one bundle at a time and stops at the first failure.
Configuration and the service definition are passed in explicitly; nothing
is kept between runs.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Tuple, Union

from prismapack.common.constants import LIFECYCLE_EVENT
from prismapack.common.logger import clear_function_context, get_logger, set_function_context
from prismapack.schema import HookConfig, ServiceDefinition
from prismapack.sdk.dependencies import install_generator, remove_generator
from prismapack.sdk.generator import generate_client
from prismapack.sdk.loader import resolve_config
from prismapack.sdk.materializer import materialize_schema
from prismapack.sdk.pruner import prune_engines
from prismapack.sdk.selector import select_service_functions

logger = get_logger(__name__)


class Step(str, Enum):
    """Pipeline steps, in execution order."""

    INSTALL = "install"
    MATERIALIZE = "materialize"
    GENERATE = "generate"
    PRUNE = "prune"
    REMOVE = "remove"


@dataclass(frozen=True)
class FunctionPlan:
    """What will be done to one bundle."""

    name: str
    build_dir: Path
    steps: Tuple[Step, ...]


@dataclass
class FunctionReport:
    """Outcome of one bundle's pipeline."""

    name: str
    build_dir: Path
    steps: List[Step] = field(default_factory=list)
    removed_engines: List[str] = field(default_factory=list)


def plan_steps(config: HookConfig) -> Tuple[Step, ...]:
    """Ordered steps for every bundle under ``config``."""
    steps: List[Step] = []
    if config.install_deps:
        steps.append(Step.INSTALL)
    steps.extend([Step.MATERIALIZE, Step.GENERATE, Step.PRUNE])
    if config.install_deps:
        steps.append(Step.REMOVE)
    return tuple(steps)


def plan_packaging(config: HookConfig, service: ServiceDefinition) -> List[FunctionPlan]:
    """
    Describe the run without touching the filesystem.

    Args:
        config: Resolved hook configuration
        service: Service definition (function registry and packaging mode)

    Returns:
        One plan per selected bundle, in processing order
    """
    steps = plan_steps(config)
    names = select_service_functions(service, ignore=config.ignore_functions)
    return [FunctionPlan(name=name, build_dir=config.build_dir_for(name), steps=steps) for name in names]


def run_step(step: Step, plan: FunctionPlan, config: HookConfig, report: FunctionReport) -> None:
    """Execute a single step for one bundle."""
    if step is Step.INSTALL:
        install_generator(plan.build_dir, config.package_manager, config.generator_package)
    elif step is Step.MATERIALIZE:
        materialize_schema(
            plan.name,
            plan.build_dir,
            config.schema_dir,
            use_symlink=config.use_symlink,
            dir_name=config.schema_dir_name,
        )
    elif step is Step.GENERATE:
        generate_client(plan.build_dir, config.data_proxy, function_name=plan.name)
    elif step is Step.PRUNE:
        report.removed_engines = prune_engines(plan.build_dir, config.patterns)
    elif step is Step.REMOVE:
        remove_generator(plan.build_dir, config.package_manager, config.generator_package)
    report.steps.append(step)


def execute_plan(plan: FunctionPlan, config: HookConfig) -> FunctionReport:
    """
    Run every step of ``plan`` in order.

    Any exception aborts the remaining steps and propagates; completed steps
    are not rolled back.
    """
    report = FunctionReport(name=plan.name, build_dir=plan.build_dir)
    set_function_context(plan.name)
    try:
        for step in plan.steps:
            run_step(step, plan, config, report)
    finally:
        clear_function_context()
    return report


def package_service(config: HookConfig, service: ServiceDefinition) -> List[FunctionReport]:
    """
    Generate a client into every selected bundle.

    Bundles are processed sequentially in selection order; the first failure
    stops the run.

    Returns:
        One report per processed bundle
    """
    plans = plan_packaging(config, service)
    logger.info(f"Prisma packaging for: {', '.join(plan.name for plan in plans) or '(no functions)'}")
    return [execute_plan(plan, config) for plan in plans]


def build_hooks(service: ServiceDefinition, service_path: Union[str, Path]) -> Dict[str, Callable[[], List[FunctionReport]]]:
    """
    Hook table for hosts that dispatch by lifecycle event name.

    The configuration is resolved when the hook fires, not when it is
    registered, so the host may still adjust the service in between.

    Example:
        >>> hooks = build_hooks(service, "/srv/app")
        >>> hooks["after:webpack:package:packExternalModules"]()
    """

    def after_pack_external_modules() -> List[FunctionReport]:
        config = resolve_config(service, service_path)
        return package_service(config, service)

    return {LIFECYCLE_EVENT: after_pack_external_modules}
