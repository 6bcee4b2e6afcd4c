"""Tests for the filesystem and in-memory vhost stores."""

from __future__ import annotations

from pathlib import Path

import pytest

from rpx.services.config_store import FileConfigStore, MemoryConfigStore


@pytest.fixture
def store(tmp_path: Path) -> FileConfigStore:
    return FileConfigStore(tmp_path / "sites-available", tmp_path / "sites-enabled")


class TestFileConfigStore:
    def test_write_and_activate(self, store: FileConfigStore):
        store.write("example.com", "server {}\n")
        store.activate("example.com")

        link = store.activation_path("example.com")
        assert link.is_symlink()
        assert link.resolve() == store.definition_path("example.com").resolve()
        assert store.enabled("example.com")
        assert store.read("example.com") == "server {}\n"

    def test_activate_replaces_existing_link(self, store: FileConfigStore, tmp_path: Path):
        store.write("example.com", "new")
        store.enabled_dir.mkdir(parents=True)
        stale = tmp_path / "stale"
        stale.write_text("old")
        store.activation_path("example.com").symlink_to(stale)

        store.activate("example.com")
        assert store.enabled("example.com")
        assert store.activation_path("example.com").read_text() == "new"

    def test_remove_both_paths(self, store: FileConfigStore):
        store.write("example.com", "server {}")
        store.activate("example.com")
        store.remove("example.com")
        assert not store.definition_path("example.com").exists()
        assert not store.activation_path("example.com").is_symlink()
        assert store.read("example.com") is None

    def test_remove_dangling_link(self, store: FileConfigStore):
        store.enabled_dir.mkdir(parents=True)
        store.activation_path("gone.com").symlink_to(store.definition_path("gone.com"))
        store.remove("gone.com")
        assert not store.activation_path("gone.com").is_symlink()

    def test_remove_missing_is_noop(self, store: FileConfigStore):
        store.remove("never.example.com")

    def test_remove_default(self, store: FileConfigStore):
        store.enabled_dir.mkdir(parents=True)
        (store.enabled_dir / "default").write_text("server { listen 80 default_server; }")
        assert store.remove_default() is True
        assert not (store.enabled_dir / "default").exists()
        assert store.remove_default() is False

    def test_enabled_domains(self, store: FileConfigStore):
        assert store.enabled_domains() == []
        for domain in ("b.com", "a.com"):
            store.write(domain, "")
            store.activate(domain)
        assert store.enabled_domains() == ["a.com", "b.com"]


class TestMemoryConfigStore:
    def test_same_semantics(self):
        store = MemoryConfigStore(with_default=True)
        assert store.enabled("default")
        assert store.remove_default() is True
        assert not store.enabled("default")

        store.write("example.com", "v1")
        store.activate("example.com")
        store.write("example.com", "v2")
        assert store.read("example.com") == "v2"
        assert store.enabled_domains() == ["example.com"]

        store.remove("example.com")
        assert store.read("example.com") is None
        assert not store.enabled("example.com")

    def test_activate_requires_definition(self):
        with pytest.raises(FileNotFoundError):
            MemoryConfigStore().activate("missing.com")
