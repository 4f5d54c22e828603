"""
Stacks staking provider (pool-delegation model)
"""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from ...errors import ConfigurationError, InvalidParameterError, MissingParameterError
from ...infra import HttpClient
from ...types import (
    AmountLike,
    ClaimRewardsAction,
    Delegation,
    DelegationInfo,
    PendingAction,
    PendingReward,
    PendingTransaction,
    RewardCoin,
    StakingOptions,
    TxReceipt,
    TxStatus,
    UndelegateAction,
    UnsignedTransaction,
    Validator,
    from_base_units,
    to_base_units,
)
from ..base import StakingProvider
from .adapter import PoolContract, StacksAdapter
from .c32 import decode_address
from .constants import BTC_DECIMALS, DELEGATE_FUNCTION, REWARD_DENOM, STX_DECIMALS, network_for_url
from .transaction import ContractCall

logger = logging.getLogger(__name__)


def _parse_pool(config: Dict[str, Any]) -> PoolContract:
    pool = config.get("pool") or config.get("pox")
    if not pool:
        raise ConfigurationError.missing("pool")
    if not isinstance(pool, dict):
        raise ConfigurationError.invalid("pool", "must be an object with address and name")

    address = pool.get("address")
    name = pool.get("name")
    if not address:
        raise ConfigurationError.missing("pool.address")
    if not name:
        raise ConfigurationError.missing("pool.name")

    try:
        decode_address(address)
    except InvalidParameterError as e:
        raise ConfigurationError.invalid("pool.address", e.message)

    return PoolContract(address=address, name=name)


class StacksProvider(StakingProvider):
    """
    Staking provider for Stacks PoX pool delegation

    Config:
        {"nodeUrl": "https://api.mainnet.hiro.so", "pool": {"address": "SP...", "name": "pox-4"}}

    Mainnet is selected when nodeUrl contains "mainnet", testnet otherwise.
    Amounts are in STX; rewards are reported in BTC.

    Chain limitations:
    - undelegate always revokes the full delegation (amount is ignored)
    - there is no claim instruction; claims are delegate calls with amount 0

    Public keys:
    - delegate and claim_rewards require options.public_key and raise
      MissingParameterError without it, even though claim is a
      zero-amount delegate
    - undelegate uses options.public_key when given and the placeholder
      signer otherwise, so a revoke can be built from an address alone
    """

    name = "stacks"

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        """
        Args:
            transport: Optional httpx transport for the node client (used by tests)
        """
        super().__init__()
        self._transport = transport
        self._adapter: Optional[StacksAdapter] = None

    @property
    def adapter(self) -> StacksAdapter:
        self._require_initialized()
        return self._adapter

    def initialize(self, config: Optional[Dict[str, Any]]) -> None:
        if not config:
            raise ConfigurationError.missing("stacks provider config")

        node_url = config.get("nodeUrl") or config.get("node_url")
        if not node_url:
            raise ConfigurationError.missing("nodeUrl")
        if not isinstance(node_url, str):
            raise ConfigurationError.invalid("nodeUrl", "must be a string")

        pool = _parse_pool(config)
        network = network_for_url(node_url)

        if self._adapter is not None:
            self._adapter.http.close()

        http = HttpClient(node_url, timeout=config.get("timeout"), transport=self._transport)
        self._adapter = StacksAdapter(network, pool, http)
        self._initialized = True
        logger.debug(f"Stacks provider bound to {node_url} ({network.name}), pool {pool.principal}")

    def close(self) -> None:
        if self._adapter is not None:
            self._adapter.http.close()
            self._adapter = None
        super().close()

    # ========== Transaction Building ==========

    @staticmethod
    def _unsigned(tx: ContractCall) -> UnsignedTransaction:
        return UnsignedTransaction(transaction_kind=tx.function_name, payload_hex=tx.serialize().hex())

    def _require_public_key(self, options: Optional[StakingOptions]) -> str:
        if options is None or not options.public_key:
            raise MissingParameterError.option("publicKey", self.name)
        return options.public_key

    def delegate(
        self,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        """Delegate to the configured pool; validator is not used"""
        public_key = self._require_public_key(options)
        amount_ustx = to_base_units(amount, STX_DECIMALS)
        tx = self.adapter.build_delegate_tx(delegator, amount_ustx, public_key)
        return self._unsigned(tx)

    def undelegate(
        self,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        """Revoke the whole delegation; partial amounts are ignored"""
        public_key = options.public_key if options else None
        tx = self.adapter.build_revoke_tx(delegator, public_key)
        return self._unsigned(tx)

    def claim_rewards(
        self,
        delegator: str,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        """Zero-amount delegate signed by the caller; options.public_key is required"""
        public_key = self._require_public_key(options)
        tx = self.adapter.build_delegate_tx(delegator, 0, public_key)
        return self._unsigned(tx)

    # ========== Queries ==========

    def query_delegation(self, delegator: str) -> DelegationInfo:
        """
        Read stacking state and derive pending actions

        Missing fields count as zero. A CLAIM_REWARDS action is added when
        rewards are pending and an UNDELEGATE action when STX is delegated;
        their unsigned transactions use a placeholder signer and only the
        txid is surfaced.

        Both actions are delegate-stack-stx(delegator, u0) with the same
        placeholder signer, so they carry the same unsignedTx id. Clients
        must tell them apart by type, not by txid.
        """
        adapter = self.adapter
        data = adapter.query_address_info(delegator)

        total_staked = from_base_units(data.get("total_stx_delegated_u") or "0", STX_DECIMALS)
        pending_rewards = from_base_units(data.get("pending_btc_rewards_microbtc") or "0", BTC_DECIMALS)

        timestamp = int(time.time() * 1000)
        actions: List[PendingAction] = []

        if pending_rewards > 0:
            claim_tx = adapter.build_delegate_tx(delegator, 0)
            actions.append(ClaimRewardsAction(
                id=f"claim-{delegator}-{timestamp}",
                unsigned_tx_id=claim_tx.txid(),
            ))

        if total_staked > 0:
            revoke_tx = adapter.build_revoke_tx(delegator)
            actions.append(UndelegateAction(
                id=f"undelegate-{delegator}-{timestamp}",
                unsigned_tx_id=revoke_tx.txid(),
                max_amount=total_staked,
            ))

        pool = adapter.pool.principal
        delegations = []
        if total_staked > 0:
            delegations.append(Delegation(
                delegator_address=delegator,
                validator_address=pool,
                balance=total_staked,
            ))

        rewards_by_validator = []
        if pending_rewards > 0:
            rewards_by_validator.append(PendingReward(
                validator_address=pool,
                reward_amounts=(RewardCoin(denom=REWARD_DENOM, amount=pending_rewards),),
            ))

        return DelegationInfo(
            delegations=delegations,
            total_staked=total_staked,
            pending_rewards_total=pending_rewards,
            pending_rewards_by_validator=rewards_by_validator,
            pending_actions=actions,
        )

    def list_validators(self) -> List[Validator]:
        pool = self.adapter.pool
        return [Validator(address=pool.principal, name=pool.name)]

    # ========== Broadcast ==========

    def execute_transaction(self, envelope: PendingTransaction) -> TxReceipt:
        """Broadcast; the node only acknowledges receipt, so status is pending"""
        txid = self.adapter.broadcast(envelope.signed_bytes)
        logger.info(f"Transaction {txid} submitted ({envelope.transaction_kind or DELEGATE_FUNCTION})")
        return TxReceipt(id=txid, status=TxStatus.PENDING)
