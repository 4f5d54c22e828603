"""
Base staking provider interface

All chain providers must implement this interface to provide uniform
staking operations across structurally different networks.

Providers only build unsigned transactions and broadcast signed ones;
signing always happens on the client.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..errors import NotInitializedError, UnsupportedOperationError
from ..types import (
    AmountLike,
    DelegationInfo,
    PendingTransaction,
    StakingOptions,
    TxReceipt,
    UnsignedTransaction,
    Validator,
)


class StakingProvider(ABC):
    """
    Abstract base class for chain staking providers

    Each provider:
    - binds to one network endpoint in initialize()
    - builds unsigned delegate / undelegate / claim transactions
    - aggregates chain queries into a DelegationInfo
    - broadcasts client-signed payloads

    A provider instance serves one request; the registry builds a fresh
    one per resolution, so instances never share mutable state.
    """

    # Chain family identifier (e.g., "cosmos", "stacks")
    name: str = "base"

    def __init__(self):
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def _require_initialized(self):
        if not self._initialized:
            raise NotInitializedError(self.name)

    # ========== Lifecycle ==========

    @abstractmethod
    def initialize(self, config: Optional[Dict[str, Any]]) -> None:
        """
        Bind the provider to a network

        Args:
            config: Chain-specific configuration (endpoint URL, contract info)

        Raises:
            ConfigurationError: If required fields are missing or invalid
        """
        ...

    def close(self) -> None:
        """Release network clients owned by this provider"""
        self._initialized = False

    def __enter__(self) -> "StakingProvider":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    # ========== Transaction Building ==========

    @abstractmethod
    def delegate(
        self,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        """
        Build an unsigned delegation transaction

        Args:
            delegator: Delegator address
            amount: Non-negative amount in the network's human-readable unit
            validator: Validator address (ignored by pool-delegation chains)
            options: Chain-required options (denom / public key)

        Raises:
            MissingParameterError: If a chain-required option is absent
            InvalidParameterError: If amount is negative or too precise
        """
        ...

    @abstractmethod
    def undelegate(
        self,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        """
        Build an unsigned undelegation transaction

        Some chains ignore amount and always fully revoke.
        """
        ...

    @abstractmethod
    def claim_rewards(
        self,
        delegator: str,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        """
        Build an unsigned reward-withdrawal transaction

        Chains without a native claim instruction synthesize an equivalent.
        """
        ...

    # ========== Queries ==========

    @abstractmethod
    def query_delegation(self, delegator: str) -> DelegationInfo:
        """
        Aggregate the delegator's staking position

        An address with no on-chain activity yields zero totals and empty
        lists, never an error.
        """
        ...

    def list_validators(self) -> List[Validator]:
        """
        List delegation targets

        Returns:
            Validators (optional override)
        """
        raise UnsupportedOperationError.not_supported("list_validators", self.name)

    # ========== Broadcast ==========

    @abstractmethod
    def execute_transaction(self, envelope: PendingTransaction) -> TxReceipt:
        """
        Submit a client-signed payload and normalize the result

        The signed bytes are submitted exactly as received.
        """
        ...
