"""
Cosmos SDK staking provider (delegation-authority model)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ...errors import ConfigurationError, MissingParameterError
from ...infra import TendermintRpcClient
from ...types import (
    AmountLike,
    Delegation,
    DelegationInfo,
    PendingTransaction,
    StakingOptions,
    TxReceipt,
    TxStatus,
    UnsignedTransaction,
    Validator,
    sum_decimals,
    to_base_units,
    to_decimal,
)
from ..base import StakingProvider
from .adapter import CosmosAdapter
from .constants import DENOM_AMOUNT_DECIMALS, SUCCESS_CODE
from .messages import EncodeObject

logger = logging.getLogger(__name__)


class CosmosProvider(StakingProvider):
    """
    Staking provider for Cosmos SDK chains

    Config:
        {"rpcUrl": "https://rpc.example.com", "timeout": 15}

    Delegate / undelegate amounts are expressed in the requested denom, which
    is mandatory (StakingOptions.denom).
    """

    name = "cosmos"

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        """
        Args:
            transport: Optional httpx transport for the RPC client (used by tests)
        """
        super().__init__()
        self._transport = transport
        self._adapter: Optional[CosmosAdapter] = None

    @property
    def adapter(self) -> CosmosAdapter:
        self._require_initialized()
        return self._adapter

    def initialize(self, config: Optional[Dict[str, Any]]) -> None:
        if not config:
            raise ConfigurationError.missing("cosmos provider config")

        rpc_url = config.get("rpcUrl") or config.get("rpc_url")
        if not rpc_url:
            raise ConfigurationError.missing("rpcUrl")
        if not isinstance(rpc_url, str):
            raise ConfigurationError.invalid("rpcUrl", "must be a string")

        if self._adapter is not None:
            self._adapter.rpc.close()

        rpc = TendermintRpcClient(rpc_url, timeout=config.get("timeout"), transport=self._transport)
        self._adapter = CosmosAdapter(rpc)
        self._initialized = True
        logger.debug(f"Cosmos provider bound to {rpc_url}")

    def close(self) -> None:
        if self._adapter is not None:
            self._adapter.rpc.close()
            self._adapter = None
        super().close()

    # ========== Transaction Building ==========

    def _unsigned(self, message: EncodeObject) -> UnsignedTransaction:
        payload = self.adapter.encode(message)
        return UnsignedTransaction(transaction_kind=message.type_url, payload_hex=payload.hex())

    def _require_denom(self, options: Optional[StakingOptions]) -> str:
        if options is None or not options.denom:
            raise MissingParameterError.option("denom", self.name)
        return options.denom

    def delegate(
        self,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        denom = self._require_denom(options)
        base_amount = to_base_units(amount, DENOM_AMOUNT_DECIMALS)
        message = self.adapter.build_delegate_message(delegator, validator, base_amount, denom)
        return self._unsigned(message)

    def undelegate(
        self,
        delegator: str,
        amount: AmountLike,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        denom = self._require_denom(options)
        base_amount = to_base_units(amount, DENOM_AMOUNT_DECIMALS)
        message = self.adapter.build_undelegate_message(delegator, validator, base_amount, denom)
        return self._unsigned(message)

    def claim_rewards(
        self,
        delegator: str,
        validator: str,
        options: Optional[StakingOptions] = None,
    ) -> UnsignedTransaction:
        message = self.adapter.build_withdraw_reward_message(delegator, validator)
        return self._unsigned(message)

    # ========== Queries ==========

    def query_delegation(self, delegator: str) -> DelegationInfo:
        """
        Aggregate delegations, staked total and pending rewards

        Balances and rewards stay in base units of their denoms.
        """
        adapter = self.adapter

        responses = adapter.query_all_delegations(delegator)
        delegations = [
            Delegation(
                delegator_address=response.delegation.delegator_address,
                validator_address=response.delegation.validator_address,
                balance=to_decimal(response.balance.amount or "0", "balance"),
            )
            for response in responses
        ]

        total_staked = adapter.query_total_staked(delegator)
        pending_rewards = adapter.query_pending_rewards(
            delegator,
            [d.validator_address for d in delegations],
        )

        return DelegationInfo(
            delegations=delegations,
            total_staked=total_staked,
            pending_rewards_total=sum_decimals(reward.total for reward in pending_rewards),
            pending_rewards_by_validator=pending_rewards,
        )

    def list_validators(self) -> List[Validator]:
        return [
            Validator(
                address=v.operator_address,
                name=v.description.moniker,
                tokens=to_decimal(v.tokens or "0", "tokens"),
                jailed=v.jailed,
            )
            for v in self.adapter.query_validators()
        ]

    # ========== Broadcast ==========

    def execute_transaction(self, envelope: PendingTransaction) -> TxReceipt:
        signed = envelope.signed_bytes
        result = self.adapter.broadcast(signed)

        code = int(result.get("code") or 0)
        status = TxStatus.SUCCESS if code == SUCCESS_CODE else TxStatus.FAILED
        receipt = TxReceipt(id=result["hash"], status=status, code=code, log=result.get("log") or None)
        if status == TxStatus.FAILED:
            logger.warning(f"Transaction {receipt.id} failed with code {code}: {receipt.log}")
        else:
            logger.info(f"Transaction {receipt.id} accepted")
        return receipt
