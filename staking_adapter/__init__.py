"""
Staking Adapter - Uniform staking operations across structurally different chains

Providers build unsigned transactions and broadcast client-signed ones;
private keys never reach the adapter.

Supported networks:
- Cosmos SDK chains (MANTRA): delegate, undelegate, withdraw rewards
- Stacks PoX: pool delegation, revoke, pending claim / undelegate actions
"""

from .modules import StakingService
from .protocols import (
    StakingProvider,
    ProviderRegistry,
    default_registry,
    CosmosProvider,
    StacksProvider,
)
from .types import (
    StakingOptions,
    Validator,
    UnsignedTransaction,
    PendingTransaction,
    TxReceipt,
    TxStatus,
    Delegation,
    PendingReward,
    DelegationInfo,
    ActionType,
    ClaimRewardsAction,
    UndelegateAction,
)
from .errors import (
    StakingAdapterError,
    ConfigurationError,
    MissingParameterError,
    InvalidParameterError,
    UnknownChainError,
    UpstreamQueryError,
    UnsupportedOperationError,
    ErrorCode,
)
from .config import load_provider_configs

__all__ = [
    # Service
    "StakingService",
    # Providers
    "StakingProvider",
    "ProviderRegistry",
    "default_registry",
    "CosmosProvider",
    "StacksProvider",
    # Types
    "StakingOptions",
    "Validator",
    "UnsignedTransaction",
    "PendingTransaction",
    "TxReceipt",
    "TxStatus",
    "Delegation",
    "PendingReward",
    "DelegationInfo",
    "ActionType",
    "ClaimRewardsAction",
    "UndelegateAction",
    # Errors
    "StakingAdapterError",
    "ConfigurationError",
    "MissingParameterError",
    "InvalidParameterError",
    "UnknownChainError",
    "UpstreamQueryError",
    "UnsupportedOperationError",
    "ErrorCode",
    # Config
    "load_provider_configs",
]

__version__ = "0.1.0"
