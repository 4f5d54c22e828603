"""
Staking Module

Request orchestrator: resolves a fresh provider per call through the
registry, forwards one operation and closes the provider afterwards.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from ..errors import MissingParameterError
from ..infra import CorrelationContext, log_with_correlation
from ..protocols import ProviderRegistry, StakingProvider
from ..types import (
    AmountLike,
    DelegationInfo,
    PendingTransaction,
    StakingOptions,
    TxReceipt,
    UnsignedTransaction,
    Validator,
)

logger = logging.getLogger(__name__)


class StakingService:
    """
    Uniform staking operations across chains

    Usage:
        service = StakingService(default_registry(), load_provider_configs())

        info = service.get_balances("stacks", "SP...")
        tx = service.get_delegate_transaction(
            "mantra-dukong-1", "mantra1...", "10", "mantravaloper1...",
            StakingOptions(denom="uom"),
        )
        receipt = service.execute(PendingTransaction("mantra-dukong-1", tx.transaction_kind, signed_hex))
    """

    def __init__(self, registry: ProviderRegistry, configs: Mapping[str, Dict[str, Any]]):
        """
        Args:
            registry: Provider registry built at process start
            configs: chain id -> provider config
        """
        self._registry = registry
        self._configs = configs

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    def chains(self) -> List[str]:
        """Chain ids that are both registered and configured"""
        return [chain_id for chain_id in self._registry.list() if chain_id in self._configs]

    @contextmanager
    def _provider(self, chain_id: str, operation: str) -> Iterator[StakingProvider]:
        with CorrelationContext(operation):
            log_with_correlation(logging.DEBUG, f"resolving {chain_id}", operation, log=logger, chain=chain_id)
            provider = self._registry.resolve(chain_id, self._configs)
            try:
                yield provider
            except Exception as e:
                log_with_correlation(logging.WARNING, f"failed: {e}", operation, log=logger, chain=chain_id)
                raise
            finally:
                provider.close()

    # ========== Queries ==========

    def get_balances(self, chain_id: str, address: str) -> DelegationInfo:
        """Delegation position of address on chain_id"""
        with self._provider(chain_id, "balances") as provider:
            return provider.query_delegation(address)

    def get_validators(self, chain_id: str) -> List[Validator]:
        with self._provider(chain_id, "validators") as provider:
            return provider.list_validators()

    # ========== Transaction Building ==========

    def get_claim_rewards_transaction(
        self,
        chain_id: str,
        delegator: str,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        with self._provider(chain_id, "claim") as provider:
            return provider.claim_rewards(delegator, validator, options)

    def get_delegate_transaction(
        self,
        chain_id: str,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        with self._provider(chain_id, "delegate") as provider:
            return provider.delegate(delegator, amount, validator, options)

    def get_undelegate_transaction(
        self,
        chain_id: str,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        with self._provider(chain_id, "undelegate") as provider:
            return provider.undelegate(delegator, amount, validator, options)

    # ========== Broadcast ==========

    def execute(self, envelope: PendingTransaction) -> TxReceipt:
        """
        Broadcast a client-signed transaction

        The target chain is envelope.provider_id.
        """
        if not envelope.provider_id:
            raise MissingParameterError("providerId is required to broadcast", parameter="providerId")

        with self._provider(envelope.provider_id, "broadcast") as provider:
            receipt = provider.execute_transaction(envelope)
            log_with_correlation(
                logging.INFO,
                f"broadcast {receipt.id} -> {receipt.status.value}",
                "broadcast",
                log=logger,
                chain=envelope.provider_id,
            )
            return receipt
