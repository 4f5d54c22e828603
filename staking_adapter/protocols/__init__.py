"""
Chain staking providers

Provides:
- StakingProvider: Interface every chain implementation satisfies
- ProviderRegistry: chain id -> provider factory mapping
- CosmosProvider: Cosmos SDK chains (delegation-authority model)
- StacksProvider: Stacks PoX (pool-delegation model)
"""

from .base import StakingProvider
from .registry import ProviderRegistry, ProviderFactory, default_registry
from .cosmos import CosmosProvider
from .stacks import StacksProvider

__all__ = [
    "StakingProvider",
    "ProviderRegistry",
    "ProviderFactory",
    "default_registry",
    "CosmosProvider",
    "StacksProvider",
]
