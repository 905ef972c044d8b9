"""
prismapack Service Schema

Pydantic models for the parts of a serverless service definition that the
packaging hook reads, plus the resolved hook configuration.

Design Principles:
- Pure validation: receives dicts, returns typed objects
- No file I/O: reading serverless.yml is the loader's job
- Lenient: unknown fields are accepted, missing sections fall back to defaults

Usage:
    from prismapack.schema import ServiceDefinition

    service = ServiceDefinition.model_validate(yaml.safe_load(text))
    for fn in service.functions.values():
        print(fn.name, fn.image_ref)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing_extensions import Self

from prismapack.common.constants import (
    BUILD_DIR_NAME,
    DEFAULT_DATA_PROXY,
    DEFAULT_ENGINE_PATTERNS,
    DEFAULT_INSTALL_DEPS,
    DEFAULT_PACKAGE_MANAGER,
    DEFAULT_SCHEMA_DIR_NAME,
    DEFAULT_USE_SYMLINK,
    GENERATOR_PACKAGE,
    SUPPORTED_PACKAGE_MANAGERS,
)
from prismapack.common.errors import ConfigError


# =============================================================================
# IMAGE REFERENCES
# =============================================================================

@dataclass(frozen=True)
class ImageUri:
    """Image given as ``image: {uri: ...}``, built outside the host."""

    uri: str


@dataclass(frozen=True)
class ImageName:
    """Image given as a bare string (a name or a remote path)."""

    name: str


ImageRef = Union[ImageUri, ImageName]


def parse_image(raw: Any) -> Optional[ImageRef]:
    """
    Turn the raw ``image`` field into a tagged reference.

    An image object without ``uri`` is built by the host itself and is not
    an external reference, so it maps to None like a missing image.

    Examples:
        >>> parse_image({"uri": "123.dkr.ecr/app:1"})
        ImageUri(uri='123.dkr.ecr/app:1')
        >>> parse_image("appimage")
        ImageName(name='appimage')
        >>> parse_image({"name": "appimage"}) is None
        True
    """
    if isinstance(raw, str):
        return ImageName(raw) if raw else None
    if isinstance(raw, dict):
        uri = raw.get("uri")
        return ImageUri(str(uri)) if uri else None
    return None


# =============================================================================
# SERVICE DEFINITION
# =============================================================================

class FunctionDefinition(BaseModel):
    """One entry of the ``functions`` section."""

    name: str = ""
    handler: Optional[str] = None
    runtime: Optional[str] = None
    image: Optional[Union[str, Dict[str, Any]]] = None

    model_config = ConfigDict(extra="allow")

    @property
    def image_ref(self) -> Optional[ImageRef]:
        return parse_image(self.image)


class ProviderConfig(BaseModel):
    """Provider section; only the default runtime matters here."""

    name: Optional[str] = None
    runtime: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class PackageConfig(BaseModel):
    """Package section; ``individually`` switches per-function packaging on."""

    individually: bool = False

    model_config = ConfigDict(extra="allow")


class ServiceDefinition(BaseModel):
    """
    The subset of a serverless service definition used by the hook.

    ``functions`` keeps the order of the YAML mapping; that order is the
    processing order.
    """

    service: Union[str, Dict[str, Any]] = "service"
    provider: ProviderConfig = ProviderConfig()
    package: PackageConfig = PackageConfig()
    functions: Dict[str, FunctionDefinition] = {}
    custom: Dict[str, Any] = {}

    model_config = ConfigDict(extra="allow")

    @field_validator("provider", "package", "custom", mode="before")
    @classmethod
    def empty_section_to_default(cls, v: Any) -> Any:
        """An empty YAML section (``custom:``) parses as None"""
        return {} if v is None else v

    @field_validator("functions", mode="before")
    @classmethod
    def normalize_functions(cls, v: Any) -> Dict[str, Any]:
        """Accept a missing section and entries without a body"""
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ConfigError(
                f"'functions' must be a mapping of name to definition, got {type(v).__name__}"
            )
        return {name: (body if body is not None else {}) for name, body in v.items()}

    @model_validator(mode="after")
    def fill_function_names(self) -> Self:
        """Every function knows its own key"""
        for name, definition in self.functions.items():
            if not definition.name:
                definition.name = name
        return self

    @property
    def service_name(self) -> str:
        if isinstance(self.service, dict):
            return str(self.service.get("name", "service"))
        return self.service

    def get_custom(self, *keys: str, default: Any = None) -> Any:
        """
        Read a nested value from the ``custom`` section.

        Missing keys and non-mapping intermediate values return ``default``.

        Example:
            >>> service.get_custom("prisma", "installDeps", default=True)
        """
        current: Any = self.custom
        for key in keys:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return default if current is None else current


# =============================================================================
# HOOK CONFIGURATION
# =============================================================================

class HookConfig(BaseModel):
    """
    Resolved packaging options, read once per run.

    Every field except the two roots has a default; ``resolve_config`` in the
    loader fills the roots from the service directory.
    """

    package_manager: str = DEFAULT_PACKAGE_MANAGER
    schema_path: Path
    build_path: Path
    install_deps: bool = DEFAULT_INSTALL_DEPS
    use_symlink: bool = DEFAULT_USE_SYMLINK
    ignore_functions: List[str] = []
    data_proxy: bool = DEFAULT_DATA_PROXY
    schema_dir_name: str = DEFAULT_SCHEMA_DIR_NAME
    generator_package: str = GENERATOR_PACKAGE
    engine_patterns: Optional[List[str]] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("package_manager")
    @classmethod
    def validate_package_manager(cls, v: str) -> str:
        """Only npm and yarn command syntax is known"""
        if v not in SUPPORTED_PACKAGE_MANAGERS:
            raise ConfigError(
                f"Unsupported package manager: '{v}'. "
                f"Supported: {', '.join(SUPPORTED_PACKAGE_MANAGERS)}"
            )
        return v

    @field_validator("ignore_functions", mode="before")
    @classmethod
    def validate_ignore_functions(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("schema_dir_name")
    @classmethod
    def validate_schema_dir_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ConfigError(f"Schema directory name must be a plain directory name, got '{v}'")
        return v

    @property
    def schema_dir(self) -> Path:
        """Directory holding the schema, copied or linked into each bundle"""
        return self.schema_path / self.schema_dir_name

    @property
    def patterns(self) -> List[str]:
        """Engine patterns in effect for this run"""
        if self.engine_patterns is not None:
            return list(self.engine_patterns)
        return list(DEFAULT_ENGINE_PATTERNS)

    def build_dir_for(self, function_name: str) -> Path:
        """Bundle directory the host prepared for ``function_name``"""
        return self.build_path / BUILD_DIR_NAME / function_name
