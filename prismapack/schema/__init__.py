"""
prismapack Schema Package

Typed models for the service definition and the hook configuration.

Usage:
    from prismapack.schema import ServiceDefinition, HookConfig
"""

from .service import (
    FunctionDefinition,
    HookConfig,
    ImageName,
    ImageRef,
    ImageUri,
    PackageConfig,
    ProviderConfig,
    ServiceDefinition,
    parse_image,
)

__all__ = [
    "FunctionDefinition",
    "HookConfig",
    "ImageName",
    "ImageRef",
    "ImageUri",
    "PackageConfig",
    "ProviderConfig",
    "ServiceDefinition",
    "parse_image",
]
