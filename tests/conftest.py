"""Pytest configuration and fixtures for prismapack tests.

Nothing here runs npm or npx: subprocess calls are recorded by the
``recorded_commands`` fixture and succeed unless told otherwise.
"""
import subprocess
import pytest
from pathlib import Path
from typing import List


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests that build a full service layout on disk"
    )


SERVERLESS_YML = """
service: users-api

provider:
  name: aws
  runtime: nodejs18.x

package:
  individually: true

functions:
  createUser:
    handler: src/users.create
  listUsers:
    handler: src/users.list
  reportJob:
    handler: jobs/report.handler
    runtime: python3.11
  imageFn:
    image:
      uri: 123456789012.dkr.ecr.eu-west-1.amazonaws.com/app:latest

custom:
  webpack:
    packager: npm
  prisma:
    installDeps: true
"""


class CommandRecorder:
    """Stand-in for subprocess.run that records argv and cwd."""

    def __init__(self):
        self.calls: List[dict] = []
        self.fail_on: List[str] = []
        self.on_call = None

    def __call__(self, argv, cwd=None, **kwargs):
        self.calls.append({"argv": list(argv), "cwd": cwd})
        if self.on_call:
            self.on_call(list(argv), cwd)
        rendered = " ".join(argv)
        for fragment in self.fail_on:
            if fragment in rendered:
                raise subprocess.CalledProcessError(1, argv, output="", stderr=f"{fragment} failed")
        return subprocess.CompletedProcess(argv, 0, stdout="", stderr="")

    @property
    def commands(self) -> List[str]:
        return [" ".join(call["argv"]) for call in self.calls]


@pytest.fixture
def recorded_commands(monkeypatch):
    """Replace subprocess.run inside prismapack with a recorder."""
    recorder = CommandRecorder()
    monkeypatch.setattr("prismapack.sdk.commands.subprocess.run", recorder)
    return recorder


@pytest.fixture
def schema_dir(tmp_path) -> Path:
    """A prisma schema directory at <tmp>/prisma."""
    prisma = tmp_path / "prisma"
    prisma.mkdir()
    (prisma / "schema.prisma").write_text(
        'generator client {\n  provider = "prisma-client-js"\n}\n'
    )
    (prisma / "migrations").mkdir()
    (prisma / "migrations" / "0001_init.sql").write_text("CREATE TABLE users (id int);\n")
    return prisma


@pytest.fixture
def build_dir(tmp_path) -> Path:
    """An empty function bundle at <tmp>/.webpack/createUser."""
    bundle = tmp_path / ".webpack" / "createUser"
    bundle.mkdir(parents=True)
    return bundle


@pytest.fixture
def service_dir(tmp_path, schema_dir) -> Path:
    """A service root with serverless.yml, a schema and one bundle per node function."""
    (tmp_path / "serverless.yml").write_text(SERVERLESS_YML)
    for name in ("createUser", "listUsers"):
        (tmp_path / ".webpack" / name).mkdir(parents=True, exist_ok=True)
    return tmp_path


def touch(root: Path, relative: str) -> Path:
    """Create an empty file (and its parents) under ``root``."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x7fELF")
    return path


@pytest.fixture
def engine_bundle(build_dir) -> Path:
    """A bundle holding engines for several platforms."""
    for relative in (
        "node_modules/.prisma/client/libquery_engine-darwin.dylib.node",
        "node_modules/.prisma/client/libquery_engine-debian-openssl-3.0.x.so.node",
        "node_modules/.prisma/client/libquery_engine-rhel-openssl-1.0.x.so.node",
        "node_modules/.prisma/client/index.js",
        "node_modules/@prisma/engines/migration-engine-darwin",
        "node_modules/@prisma/engines/migration-engine-rhel-openssl-1.0.x",
        "node_modules/@prisma/engines/prisma-fmt-debian-openssl-1.1.x",
        "node_modules/@prisma/engines/introspection-engine-windows.exe",
        "node_modules/prisma/libquery_engine-debian-openssl-1.1.x.so.node",
        "node_modules/prisma/libquery_engine-rhel-openssl-1.0.x.so.node",
        "node_modules/prisma/engines/abc123/query-engine",
        "node_modules/prisma/build/index.js",
    ):
        touch(build_dir, relative)
    return build_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging so they never outlive a test."""
    import logging
    yield
    root = logging.getLogger("prismapack")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
