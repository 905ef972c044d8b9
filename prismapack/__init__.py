"""prismapack - Prisma client generation and engine pruning for serverless bundles."""

from prismapack.common.constants import PRISMAPACK_VERSION

__version__ = PRISMAPACK_VERSION
