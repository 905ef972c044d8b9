"""Tests for service loading and configuration resolution."""

from pathlib import Path

import pytest

from prismapack.common import DEFAULT_ENGINE_PATTERNS
from prismapack.common.errors import ConfigError
from prismapack.schema import HookConfig, ServiceDefinition
from prismapack.sdk import load_config, load_service, resolve_config


def write_service(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "serverless.yml"
    path.write_text(text)
    return path


class TestLoadService:
    """Tests for load_service."""

    def test_loads_functions_in_order(self, service_dir):
        service = load_service(service_dir / "serverless.yml")

        assert service.service_name == "users-api"
        assert list(service.functions) == ["createUser", "listUsers", "reportJob", "imageFn"]
        assert service.functions["createUser"].name == "createUser"
        assert service.provider.runtime == "nodejs18.x"
        assert service.package.individually is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_service(tmp_path / "serverless.yml")

    def test_invalid_yaml(self, tmp_path):
        path = write_service(tmp_path, "functions: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_service(path)

    def test_empty_file(self, tmp_path):
        service = load_service(write_service(tmp_path, ""))
        assert service.functions == {}
        assert service.package.individually is False

    def test_top_level_list(self, tmp_path):
        with pytest.raises(ConfigError):
            load_service(write_service(tmp_path, "- a\n- b\n"))

    def test_empty_sections(self, tmp_path):
        path = write_service(tmp_path, "service: x\nprovider:\ncustom:\nfunctions:\n  a:\n  b:\n    runtime: nodejs\n")
        service = load_service(path)
        assert list(service.functions) == ["a", "b"]
        assert service.functions["a"].runtime is None
        assert service.custom == {}

    def test_functions_not_mapping(self, tmp_path):
        with pytest.raises(ConfigError):
            load_service(write_service(tmp_path, "functions:\n  - a\n"))

    def test_service_object_form(self, tmp_path):
        service = load_service(write_service(tmp_path, "service:\n  name: legacy\n"))
        assert service.service_name == "legacy"


class TestResolveConfig:
    """Tests for resolve_config."""

    def test_defaults(self, tmp_path):
        config = resolve_config(ServiceDefinition(), tmp_path)

        assert config.package_manager == "npm"
        assert config.schema_path == tmp_path
        assert config.build_path == tmp_path
        assert config.install_deps is True
        assert config.use_symlink is False
        assert config.ignore_functions == []
        assert config.data_proxy is False
        assert config.schema_dir == tmp_path / "prisma"
        assert config.patterns == list(DEFAULT_ENGINE_PATTERNS)

    def test_custom_values(self, tmp_path):
        service = ServiceDefinition.model_validate({
            "custom": {
                "webpack": {"packager": "yarn", "webpackOutputPath": "build"},
                "prisma": {
                    "prismaPath": "../shared",
                    "installDeps": False,
                    "useSymLinkForPrisma": True,
                    "ignoreFunctions": ["a", "b"],
                    "dataProxy": True,
                    "enginePatterns": ["x/*"],
                },
            }
        })
        config = resolve_config(service, tmp_path)

        assert config.package_manager == "yarn"
        assert config.build_path == tmp_path / "build"
        assert config.schema_path == tmp_path / "../shared"
        assert config.install_deps is False
        assert config.use_symlink is True
        assert config.ignore_functions == ["a", "b"]
        assert config.data_proxy is True
        assert config.patterns == ["x/*"]

    def test_absolute_paths_kept(self, tmp_path):
        shared = tmp_path / "shared"
        service = ServiceDefinition.model_validate({"custom": {"prisma": {"prismaPath": str(shared)}}})
        assert resolve_config(service, tmp_path / "svc").schema_path == shared

    def test_single_ignore_name(self, tmp_path):
        service = ServiceDefinition.model_validate({"custom": {"prisma": {"ignoreFunctions": "a"}}})
        assert resolve_config(service, tmp_path).ignore_functions == ["a"]

    def test_null_options_fall_back(self, tmp_path):
        service = ServiceDefinition.model_validate({"custom": {"webpack": None, "prisma": {"installDeps": None}}})
        config = resolve_config(service, tmp_path)
        assert config.install_deps is True
        assert config.package_manager == "npm"

    def test_unknown_packager(self, tmp_path):
        service = ServiceDefinition.model_validate({"custom": {"webpack": {"packager": "pnpm"}}})
        with pytest.raises(ConfigError, match="Unsupported package manager"):
            resolve_config(service, tmp_path)

    def test_bad_schema_dir_name(self, tmp_path):
        with pytest.raises(ConfigError):
            resolve_config(ServiceDefinition(), tmp_path, schema_dir_name="../x")

    def test_overrides_win(self, tmp_path):
        service = ServiceDefinition.model_validate({"custom": {"webpack": {"packager": "yarn"}}})
        config = resolve_config(service, tmp_path, package_manager="npm", use_symlink=None)
        assert config.package_manager == "npm"
        assert config.use_symlink is False

    def test_config_is_frozen(self, tmp_path):
        config = resolve_config(ServiceDefinition(), tmp_path)
        with pytest.raises(Exception):
            config.install_deps = False

    def test_build_dir_for(self, tmp_path):
        config = HookConfig(schema_path=tmp_path, build_path=tmp_path / "out")
        assert config.build_dir_for("fn") == tmp_path / "out" / ".webpack" / "fn"


class TestLoadConfig:
    """Tests for load_config."""

    def test_root_defaults_to_file_directory(self, service_dir):
        service, config = load_config(service_dir / "serverless.yml")
        assert service.service_name == "users-api"
        assert config.build_path == (service_dir).resolve()

    def test_explicit_service_path(self, service_dir, tmp_path):
        _, config = load_config(service_dir / "serverless.yml", service_path=tmp_path / "elsewhere")
        assert config.schema_path == (tmp_path / "elsewhere").resolve()
