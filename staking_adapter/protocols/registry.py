"""
Provider registry

Maps a chain identifier to a zero-argument provider factory. Resolution
builds and initializes a fresh provider on every call; the registry keeps
no provider instances.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..errors import UnknownChainError
from .base import StakingProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], StakingProvider]


class ProviderRegistry:
    """
    Registry of chain id -> provider factory

    Constructed once at process start and passed to the orchestrator.

    Usage:
        registry = ProviderRegistry()
        registry.register("stacks", StacksProvider)

        provider = registry.resolve("stacks", configs)
        info = provider.query_delegation("SP...")
        provider.close()
    """

    def __init__(self, factories: Optional[Mapping[str, ProviderFactory]] = None):
        self._factories: Dict[str, ProviderFactory] = {}
        self._lock = threading.Lock()
        for chain_id, factory in (factories or {}).items():
            self.register(chain_id, factory)

    def register(self, chain_id: str, factory: ProviderFactory):
        """
        Register a provider factory

        Args:
            chain_id: Chain identifier (e.g., "mantra-dukong-1", "stacks")
            factory: Zero-argument callable returning a new provider (a class works)
        """
        with self._lock:
            self._factories[chain_id] = factory
        logger.debug(f"Registered staking provider: {chain_id}")

    def unregister(self, chain_id: str):
        """Remove a chain; unknown ids are ignored"""
        with self._lock:
            self._factories.pop(chain_id, None)

    def is_registered(self, chain_id: str) -> bool:
        return chain_id in self._factories

    def list(self) -> List[str]:
        """List registered chain ids"""
        return sorted(self._factories)

    def resolve(self, chain_id: str, configs: Mapping[str, Any]) -> StakingProvider:
        """
        Build and initialize a fresh provider for chain_id

        Args:
            chain_id: Chain identifier
            configs: Full config mapping; configs[chain_id] is passed to initialize()

        Returns:
            Initialized provider owned by the caller (close() when done)

        Raises:
            UnknownChainError: If no factory is registered for chain_id
            ConfigurationError: If the chain config is missing or invalid
        """
        factory = self._factories.get(chain_id)
        if factory is None:
            raise UnknownChainError(chain_id, self._factories.keys())

        provider = factory()
        try:
            provider.initialize(configs.get(chain_id))
        except Exception:
            provider.close()
            raise

        logger.debug(f"Resolved {provider.name} provider for {chain_id}")
        return provider


def default_registry() -> ProviderRegistry:
    """
    Registry with the built-in chains

    Returns:
        ProviderRegistry with Cosmos (MANTRA Dukong) and Stacks entries
    """
    from .cosmos import CosmosProvider
    from .stacks import StacksProvider

    return ProviderRegistry({
        "mantra-dukong-1": CosmosProvider,
        # mainnet vs testnet is selected from nodeUrl
        "stacks": StacksProvider,
        "stacks-testnet": StacksProvider,
    })
