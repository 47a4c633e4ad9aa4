from slashdeck.core.loader import RegistryLoader
from slashdeck.core.registry import LiveRegistry, Registry
from slashdeck.core.resolver import InvocationResolver
from slashdeck.utils.config import Config


class SharedContext:
    """Global shared state for the application."""

    config: Config
    loader: RegistryLoader
    live_registry: LiveRegistry
    resolver: InvocationResolver

    def __init__(self, config: Config):
        self.config = config
        self.loader = RegistryLoader.from_config(config)
        self.live_registry = LiveRegistry(self.loader)
        self.resolver = InvocationResolver.from_live(
            self.live_registry,
            placeholder=config.placeholder,
            marker=config.command_marker,
        )

    @property
    def registry(self) -> Registry:
        """Current registry, loading it on first access."""
        if not self.live_registry.is_loaded:
            self.live_registry.reload()
        return self.live_registry.current
