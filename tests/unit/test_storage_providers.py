"""Unit tests for the storage providers and the tenant provisioner."""

import json
from pathlib import Path

import pytest

from jsonstore.utils.tenant_dirs import TenantProvisioner


pytestmark = pytest.mark.unit


class TestProviders:
    def test_read_missing_returns_none(self, storage):
        storage.make_dirs(storage.path("t1"))
        assert storage.read_text(storage.path("t1", "nope.json")) is None

    def test_write_then_read(self, storage):
        storage.make_dirs(storage.path("t1"))
        target = storage.path("t1", "a.json")
        storage.write_text(target, "{}")
        assert storage.read_text(target) == "{}"
        assert storage.exists(target)

    def test_delete_is_idempotent(self, storage):
        storage.make_dirs(storage.path("t1"))
        target = storage.path("t1", "a.json")
        storage.write_text(target, "{}")
        assert storage.delete(target) is True
        assert storage.delete(target) is False
        assert not storage.exists(target)

    def test_write_without_directory_fails(self, storage):
        with pytest.raises(FileNotFoundError):
            storage.write_text(storage.path("missing", "a.json"), "{}")


class TestLocalProvider:
    def test_write_leaves_no_temp_files(self, local_storage, storage_root):
        local_storage.make_dirs(local_storage.path("t1"))
        local_storage.write_text(local_storage.path("t1", "a.json"), "one")
        local_storage.write_text(local_storage.path("t1", "a.json"), "two")
        assert sorted(p.name for p in (storage_root / "t1").iterdir()) == ["a.json"]
        assert (storage_root / "t1" / "a.json").read_text() == "two"

    def test_ping_creates_root(self, local_storage, storage_root):
        assert local_storage.ping() is True
        assert storage_root.is_dir()


class TestProvisioner:
    def test_ensure_creates_directory_and_index(self, local_storage, storage_root):
        paths = TenantProvisioner(local_storage).ensure("t1")
        assert Path(paths.directory).is_dir()
        assert json.loads(Path(paths.index_path).read_text()) == []
        assert paths.index_path.endswith("fileIndex.json")
        assert paths.config_path.endswith("config.json")

    def test_ensure_is_idempotent(self, storage):
        provisioner = TenantProvisioner(storage)
        first = provisioner.ensure("t1")
        storage.write_text(first.index_path, json.dumps([{"id": "x"}]))
        second = provisioner.ensure("t1")
        assert first == second
        assert json.loads(storage.read_text(second.index_path)) == [{"id": "x"}]

    @pytest.mark.parametrize("content", ["", "   \n", "{not json"])
    def test_ensure_heals_blank_or_corrupt_index(self, storage, content):
        provisioner = TenantProvisioner(storage)
        paths = provisioner.ensure("t1")
        storage.write_text(paths.index_path, content)
        provisioner.ensure("t1")
        assert json.loads(storage.read_text(paths.index_path)) == []
