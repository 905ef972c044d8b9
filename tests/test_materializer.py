"""Tests for schema materialization (copy and symlink modes)."""

import os
from pathlib import Path

import pytest

from prismapack.common.errors import MaterializeError
from prismapack.sdk import copy_schema, link_schema, materialize_schema, relative_schema_path


class TestCopySchema:
    """Tests for copy mode."""

    def test_copies_recursively(self, build_dir, schema_dir):
        target = materialize_schema("createUser", build_dir, schema_dir)

        assert target == build_dir / "prisma"
        assert (target / "schema.prisma").read_text() == (schema_dir / "schema.prisma").read_text()
        assert (target / "migrations" / "0001_init.sql").exists()
        assert not target.is_symlink()

    def test_copy_twice_overwrites(self, build_dir, schema_dir):
        copy_schema(build_dir, schema_dir)
        (schema_dir / "schema.prisma").write_text("// changed\n")

        copy_schema(build_dir, schema_dir)

        assert (build_dir / "prisma" / "schema.prisma").read_text() == "// changed\n"

    def test_copy_replaces_previous_link(self, build_dir, schema_dir):
        link_schema(build_dir, schema_dir)
        copy_schema(build_dir, schema_dir)

        target = build_dir / "prisma"
        assert not target.is_symlink()
        assert (target / "schema.prisma").exists()
        # the source was not written through the old link
        assert sorted(p.name for p in schema_dir.iterdir()) == ["migrations", "schema.prisma"]

    def test_custom_dir_name(self, build_dir, schema_dir):
        target = copy_schema(build_dir, schema_dir, dir_name="db")
        assert target == build_dir / "db"
        assert (target / "schema.prisma").exists()

    def test_missing_source(self, build_dir, tmp_path):
        with pytest.raises(MaterializeError):
            copy_schema(build_dir, tmp_path / "nope")


class TestRelativeSchemaPath:
    """Relative path computation for symlink mode."""

    def test_sibling_layout(self, tmp_path):
        build = tmp_path / ".webpack" / "createUser"
        schema = tmp_path / "prisma"
        assert relative_schema_path(build, schema) == os.path.join("..", "..", "prisma")

    @pytest.mark.parametrize("depth", [1, 2, 3, 5])
    def test_round_trip_at_any_depth(self, tmp_path, depth):
        schema = tmp_path / "packages" / "db" / "prisma"
        schema.mkdir(parents=True)
        build = tmp_path / "out"
        for level in range(depth):
            build = build / f"level{level}"
        build.mkdir(parents=True)

        relative = relative_schema_path(build, schema)

        assert not os.path.isabs(relative)
        assert (build / relative).resolve() == schema.resolve()

    def test_relative_inputs_use_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "prisma").mkdir()
        (tmp_path / ".webpack" / "fn").mkdir(parents=True)
        monkeypatch.chdir(tmp_path)

        relative = relative_schema_path(Path(".webpack/fn"), Path("prisma"))

        assert (tmp_path / ".webpack" / "fn" / relative).resolve() == (tmp_path / "prisma").resolve()


class TestLinkSchema:
    """Tests for symlink mode."""

    def test_creates_relative_link(self, build_dir, schema_dir):
        target = materialize_schema("createUser", build_dir, schema_dir, use_symlink=True)

        assert target.is_symlink()
        assert not os.path.isabs(os.readlink(target))
        assert target.resolve() == schema_dir.resolve()
        assert (target / "schema.prisma").exists()

    def test_link_twice(self, build_dir, schema_dir):
        link_schema(build_dir, schema_dir)
        target = link_schema(build_dir, schema_dir)
        assert target.resolve() == schema_dir.resolve()

    def test_link_replaces_copied_dir(self, build_dir, schema_dir):
        copy_schema(build_dir, schema_dir)
        target = link_schema(build_dir, schema_dir)
        assert target.is_symlink()

    def test_relative_schema_dir(self, tmp_path, monkeypatch, schema_dir, build_dir):
        monkeypatch.chdir(tmp_path)
        target = link_schema(build_dir, Path("prisma"))
        assert target.resolve() == schema_dir.resolve()

    def test_missing_source(self, build_dir, tmp_path):
        with pytest.raises(MaterializeError):
            link_schema(build_dir, tmp_path / "nope")
