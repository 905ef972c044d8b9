"""
Function Selection
==================

Decides which bundles get a generated client. When the service is packaged
as one unit there is a single bundle, ``service``. With per-function
packaging every function bundle qualifies unless it is ignored, is deployed
from a prebuilt container image, or does not run on Node.js.
"""

from typing import Iterable, List, Mapping, Optional

from prismapack.common.constants import DEFAULT_RUNTIME, NODE_RUNTIME_MARKER, SERVICE_PACKAGE
from prismapack.common.logger import get_logger
from prismapack.schema import FunctionDefinition, ServiceDefinition

logger = get_logger(__name__)


def is_node_runtime(runtime: str) -> bool:
    """True for any runtime identifier containing ``node`` (nodejs18.x, ...)."""
    return NODE_RUNTIME_MARKER in runtime


def effective_runtime(function: FunctionDefinition, provider_runtime: Optional[str] = None) -> str:
    """Function runtime, else the provider default, else Node.js."""
    return function.runtime or provider_runtime or DEFAULT_RUNTIME


def select_node_functions(
    functions: Mapping[str, FunctionDefinition],
    provider_runtime: Optional[str] = None,
    ignore: Iterable[str] = (),
) -> List[str]:
    """
    Return the functions whose bundles need a generated client, in registry order.

    Args:
        functions: Ordered mapping of function name to definition
        provider_runtime: Provider-level default runtime
        ignore: Function names to leave untouched

    Returns:
        Qualifying function names
    """
    ignored = set(ignore)
    selected: List[str] = []

    for name, function in functions.items():
        if name in ignored:
            logger.debug(f"Skipping {name}: listed in ignoreFunctions")
            continue

        # Images with a uri or a bare image name are built outside the host
        if function.image_ref is not None:
            logger.debug(f"Skipping {name}: deployed from image {function.image_ref}")
            continue

        runtime = effective_runtime(function, provider_runtime)
        if not is_node_runtime(runtime):
            logger.debug(f"Skipping {name}: runtime '{runtime}' is not Node.js")
            continue

        selected.append(name)

    return selected


def select_functions(
    individually: bool,
    functions: Mapping[str, FunctionDefinition],
    provider_runtime: Optional[str] = None,
    ignore: Iterable[str] = (),
) -> List[str]:
    """
    Build the work list for one packaging run.

    Returns ``["service"]`` when per-function packaging is off, whatever the
    registry holds; otherwise the result of ``select_node_functions``.
    """
    if not individually:
        return [SERVICE_PACKAGE]
    return select_node_functions(functions, provider_runtime, ignore)


def select_service_functions(service: ServiceDefinition, ignore: Iterable[str] = ()) -> List[str]:
    """``select_functions`` fed from a loaded service definition."""
    return select_functions(
        service.package.individually,
        service.functions,
        service.provider.runtime,
        ignore,
    )
