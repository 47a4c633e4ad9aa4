"""Tests for Registry and LiveRegistry."""

import threading
from unittest.mock import MagicMock

import pytest

from slashdeck.core.definition import Kind
from slashdeck.core.exceptions import (
    InvalidManifestError,
    MissingDefinitionError,
    RegistryNotLoadedError,
    UnregisteredDefinitionError,
)
from slashdeck.core.manifest import Manifest
from slashdeck.core.registry import LiveRegistry, Registry
from slashdeck.core.store import DefinitionStore


class TestRegistry:
    def test_requires_frozen_store(self):
        with pytest.raises(ValueError):
            Registry(DefinitionStore(), Manifest())

    def test_categories_and_counts(self, loader):
        registry = loader.load()

        assert registry.categories(Kind.COMMAND) == ["api"]
        assert registry.count(Kind.COMMAND) == 2
        assert registry.count(Kind.AGENT) == 1
        assert registry.loaded_at is not None


class TestLiveRegistry:
    def test_current_before_load_raises(self, loader):
        live = LiveRegistry(loader)

        assert not live.is_loaded
        with pytest.raises(RegistryNotLoadedError):
            live.current

    def test_reload_publishes(self, loader):
        live = LiveRegistry(loader)

        registry = live.reload()

        assert live.is_loaded
        assert live.current is registry

    def test_reload_replaces_whole_registry(self, loader, plugin_root):
        live = LiveRegistry(loader)
        first = live.reload()

        (plugin_root / "commands" / "lint.md").write_text(
            "---\ndescription: Lint v2\n---\nLint again."
        )
        second = live.reload()

        assert second is not first
        assert live.current is second
        assert second.get(Kind.COMMAND, "lint").description == "Lint v2"
        # Old snapshot is untouched
        assert first.get(Kind.COMMAND, "lint").description == "Run the project linters"

    def test_failed_reload_keeps_previous_registry(self, loader, plugin_root):
        live = LiveRegistry(loader)
        previous = live.reload()

        (plugin_root / "commands" / "lint.md").unlink()
        with pytest.raises(MissingDefinitionError):
            live.reload()

        assert live.current is previous
        assert (Kind.COMMAND, "lint") in live.current

    def test_failed_reload_with_unregistered_file(self, loader, plugin_root):
        live = LiveRegistry(loader)
        previous = live.reload()

        (plugin_root / "agents" / "extra.md").write_text(
            "---\nname: extra\ndescription: Extra\n---\nExtra."
        )
        with pytest.raises(UnregisteredDefinitionError):
            live.reload()

        assert live.current is previous

    def test_failed_initial_load_leaves_nothing_published(self, loader, plugin_root):
        (plugin_root / "plugin.yaml").unlink()
        live = LiveRegistry(loader)

        with pytest.raises(InvalidManifestError):
            live.reload()

        assert not live.is_loaded

    def test_reloads_are_serialized(self):
        """A second reload waits for the first to publish."""
        started = threading.Event()
        release = threading.Event()
        calls = []

        def slow_load():
            calls.append("start")
            started.set()
            release.wait(timeout=5)
            calls.append("end")
            return MagicMock(spec=Registry)

        loader = MagicMock()
        loader.load.side_effect = slow_load
        live = LiveRegistry(loader)

        first = threading.Thread(target=live.reload)
        first.start()
        started.wait(timeout=5)
        second = threading.Thread(target=live.reload)
        second.start()
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert calls == ["start", "end", "start", "end"]
