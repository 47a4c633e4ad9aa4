"""Shared test fixtures for slashdeck test suite."""

from pathlib import Path
from typing import Callable

import pytest

from slashdeck.core.context import SharedContext
from slashdeck.core.loader import RegistryLoader
from slashdeck.utils.config import Config
from slashdeck.utils.logging import reset_logging

from plugin_fixtures import DEFAULT_ENTRIES, DEFAULT_FILES, write_manifest


@pytest.fixture(autouse=True)
def _reset_slashdeck_logging():
    """Close handlers attached by setup_logging during a test."""
    yield
    reset_logging()


@pytest.fixture
def make_plugin(tmp_path: Path) -> Callable[..., Path]:
    """Builder for a plugin tree under tmp_path.

    Files and manifest entries default to a small consistent plugin with two
    commands (one categorized) and one agent.
    """

    def _make(
        files: dict[str, str] | None = None,
        entries: list[dict] | None = None,
    ) -> Path:
        root = tmp_path / "plugin"
        for rel, content in (DEFAULT_FILES if files is None else files).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        root.mkdir(exist_ok=True)
        write_manifest(root, DEFAULT_ENTRIES if entries is None else entries)
        return root

    return _make


@pytest.fixture
def plugin_root(make_plugin) -> Path:
    """Default consistent plugin tree."""
    return make_plugin()


@pytest.fixture
def test_config(plugin_root: Path) -> Config:
    """Config rooted at the default plugin tree."""
    return Config(root=plugin_root)


@pytest.fixture
def loader(test_config: Config) -> RegistryLoader:
    return RegistryLoader(test_config)


@pytest.fixture
def test_context(test_config: Config) -> SharedContext:
    """SharedContext with test config."""
    return SharedContext(config=test_config)
