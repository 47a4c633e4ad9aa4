"""Immutable registry and its atomically swapped live handle."""

import logging
import threading
from datetime import datetime
from typing import TYPE_CHECKING

from slashdeck.core.definition import Definition, Kind
from slashdeck.core.exceptions import RegistryNotLoadedError
from slashdeck.core.manifest import Manifest
from slashdeck.core.store import DefinitionListing, DefinitionStore

if TYPE_CHECKING:
    from slashdeck.core.loader import RegistryLoader

logger = logging.getLogger(__name__)


class Registry:
    """Read-only collection of the definitions from one load pass."""

    def __init__(self, store: DefinitionStore, manifest: Manifest):
        if not store.frozen:
            raise ValueError("Registry requires a frozen DefinitionStore")
        self._store = store
        self.manifest = manifest
        self.loaded_at = datetime.now()

    @property
    def name(self) -> str | None:
        return self.manifest.name

    def get(self, kind: Kind, identifier: str) -> Definition:
        return self._store.get(kind, identifier)

    def list(self, kind: Kind) -> DefinitionListing:
        return self._store.list(kind)

    def categories(self, kind: Kind) -> "list[str]":
        return self._store.categories(kind)

    def count(self, kind: Kind) -> int:
        return len(self._store.list(kind))

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store


class LiveRegistry:
    """
    Holds the currently published Registry.

    Readers take the current reference without locking; reload() builds a
    complete new Registry and swaps the reference, so a reader sees either
    the old registry or the new one, never a mix.
    """

    def __init__(self, loader: "RegistryLoader"):
        self.loader = loader
        self._current: Registry | None = None
        self._reload_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> Registry:
        registry = self._current
        if registry is None:
            raise RegistryNotLoadedError()
        return registry

    def reload(self) -> Registry:
        """
        Build a new Registry and publish it.

        Returns:
            The newly published Registry

        Raises:
            DefError: Load failed; the previous Registry stays published
        """
        with self._reload_lock:
            try:
                registry = self.loader.load()
            except Exception as e:
                if self._current is not None:
                    logger.error(f"Reload failed, keeping previous registry: {e}")
                else:
                    logger.error(f"Initial load failed: {e}")
                raise

            self._current = registry
            logger.info(
                f"Published registry with {registry.count(Kind.COMMAND)} commands "
                f"and {registry.count(Kind.AGENT)} agents"
            )
            return registry
