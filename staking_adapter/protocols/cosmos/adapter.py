"""
Cosmos SDK staking adapter

Translates staking intents into cosmos-sdk messages and chain query results
into domain models. Talks to a Tendermint RPC endpoint: queries go through
abci_query with protobuf-encoded requests, broadcasts through
broadcast_tx_sync.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Type, TypeVar

from google.protobuf.message import DecodeError, Message

from ...errors import UpstreamQueryError
from ...infra import TendermintRpcClient
from ...types import PendingReward, RewardCoin, from_base_units, sum_decimals, to_decimal
from .constants import (
    BOND_STATUS_BONDED,
    DEFAULT_PAGE_LIMIT,
    LEGACY_DEC_PRECISION,
    MSG_DELEGATE_TYPE_URL,
    MSG_UNDELEGATE_TYPE_URL,
    MSG_WITHDRAW_DELEGATOR_REWARD_TYPE_URL,
    QUERY_DELEGATION_REWARDS,
    QUERY_DELEGATOR_DELEGATIONS,
    QUERY_VALIDATORS,
)
from .messages import (
    Coin,
    DecCoin,
    DelegationResponse,
    EncodeObject,
    MessageRegistry,
    MsgDelegate,
    MsgUndelegate,
    MsgWithdrawDelegatorReward,
    PageRequest,
    QueryDelegationRewardsRequest,
    QueryDelegationRewardsResponse,
    QueryDelegatorDelegationsRequest,
    QueryDelegatorDelegationsResponse,
    QueryValidatorsRequest,
    QueryValidatorsResponse,
    StakingValidator,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Message)


def dec_to_decimal(raw: str) -> Decimal:
    """Convert an sdk.Dec wire string (integer scaled by 10^18) to Decimal"""
    if not raw:
        return Decimal(0)
    return from_base_units(raw, LEGACY_DEC_PRECISION)


class CosmosAdapter:
    """
    Cosmos SDK message builder and query client

    Usage:
        adapter = CosmosAdapter(TendermintRpcClient(rpc_url))
        msg = adapter.build_delegate_message("mantra1...", "mantravaloper1...", 10, "uom")
        payload = adapter.encode(msg)
        delegations = adapter.query_all_delegations("mantra1...")
    """

    def __init__(
        self,
        rpc: TendermintRpcClient,
        registry: Optional[MessageRegistry] = None,
        page_limit: int = DEFAULT_PAGE_LIMIT,
    ):
        """
        Args:
            rpc: Tendermint RPC client owned by the provider
            registry: Message registry (defaults to the staking/distribution set)
            page_limit: Page size for paginated queries
        """
        self._rpc = rpc
        self._registry = registry or MessageRegistry.default()
        self._page_limit = page_limit

    @property
    def rpc(self) -> TendermintRpcClient:
        return self._rpc

    @property
    def registry(self) -> MessageRegistry:
        return self._registry

    # ========== Message Building ==========

    def build_delegate_message(
        self,
        delegator_address: str,
        validator_address: str,
        amount: int,
        denom: str,
    ) -> EncodeObject:
        """Build MsgDelegate for an amount already in base units of denom"""
        return EncodeObject(
            type_url=MSG_DELEGATE_TYPE_URL,
            value=MsgDelegate(
                delegator_address=delegator_address,
                validator_address=validator_address,
                amount=Coin(denom=denom, amount=str(amount)),
            ),
        )

    def build_undelegate_message(
        self,
        delegator_address: str,
        validator_address: str,
        amount: int,
        denom: str,
    ) -> EncodeObject:
        """Build MsgUndelegate for an amount already in base units of denom"""
        return EncodeObject(
            type_url=MSG_UNDELEGATE_TYPE_URL,
            value=MsgUndelegate(
                delegator_address=delegator_address,
                validator_address=validator_address,
                amount=Coin(denom=denom, amount=str(amount)),
            ),
        )

    def build_withdraw_reward_message(
        self,
        delegator_address: str,
        validator_address: str,
    ) -> EncodeObject:
        """Build MsgWithdrawDelegatorReward"""
        return EncodeObject(
            type_url=MSG_WITHDRAW_DELEGATOR_REWARD_TYPE_URL,
            value=MsgWithdrawDelegatorReward(
                delegator_address=delegator_address,
                validator_address=validator_address,
            ),
        )

    def encode(self, message: EncodeObject) -> bytes:
        return self._registry.encode(message)

    def decode(self, type_url: str, data: bytes) -> Message:
        return self._registry.decode(type_url, data)

    # ========== Queries ==========

    def _query(self, path: str, request: Message, response_type: Type[T]) -> T:
        raw = self._rpc.abci_query(path, request.SerializeToString())
        try:
            return response_type.FromString(raw)
        except DecodeError as e:
            raise UpstreamQueryError.invalid_response(self._rpc.endpoint, f"{path}: {e}")

    def query_all_delegations(self, delegator_address: str) -> List[DelegationResponse]:
        """
        List every delegation of a delegator, following pagination

        Returns:
            Delegation responses (empty for an address without delegations)
        """
        results: List[DelegationResponse] = []
        next_key = b""
        while True:
            request = QueryDelegatorDelegationsRequest(
                delegator_addr=delegator_address,
                pagination=PageRequest(key=next_key, limit=self._page_limit),
            )
            response = self._query(QUERY_DELEGATOR_DELEGATIONS, request, QueryDelegatorDelegationsResponse)
            results.extend(response.delegation_responses)

            # An unset pagination field reads as an empty next_key
            next_key = response.pagination.next_key
            if not next_key:
                break

        logger.debug(f"{delegator_address} has {len(results)} delegations")
        return results

    def query_total_staked(self, delegator_address: str) -> Decimal:
        """
        Total bonded balance of a delegator, in base units

        Pages through DelegatorDelegations again and sums the balances, the
        same way the cosmjs staking extension computes the staked balance.
        The listing already fetched for the per-validator rows is not reused,
        so a query_delegation call lists every delegation twice.
        """
        balances = [
            to_decimal(response.balance.amount or "0", "balance")
            for response in self.query_all_delegations(delegator_address)
        ]
        return sum_decimals(balances)

    def query_delegation_rewards(self, delegator_address: str, validator_address: str) -> List[DecCoin]:
        """Outstanding rewards of one delegation (DecCoin amounts as wire strings)"""
        request = QueryDelegationRewardsRequest(
            delegator_address=delegator_address,
            validator_address=validator_address,
        )
        response = self._query(QUERY_DELEGATION_REWARDS, request, QueryDelegationRewardsResponse)
        return list(response.rewards)

    def query_pending_rewards(
        self,
        delegator_address: str,
        validator_addresses: Optional[List[str]] = None,
    ) -> List[PendingReward]:
        """
        Aggregate pending rewards per validator

        Queries validators one at a time and keeps only those with at least
        one strictly positive reward coin.

        Args:
            delegator_address: Delegator
            validator_addresses: Validators to check (defaults to every
                validator the delegator has delegated to)

        Returns:
            One PendingReward per validator with non-zero rewards
        """
        if validator_addresses is None:
            validator_addresses = [
                response.delegation.validator_address
                for response in self.query_all_delegations(delegator_address)
            ]

        pending: List[PendingReward] = []
        seen = set()
        for validator_address in validator_addresses:
            if validator_address in seen:
                continue
            seen.add(validator_address)

            coins = [
                RewardCoin(denom=coin.denom, amount=dec_to_decimal(coin.amount))
                for coin in self.query_delegation_rewards(delegator_address, validator_address)
            ]
            if any(coin.amount > 0 for coin in coins):
                pending.append(PendingReward(
                    validator_address=validator_address,
                    reward_amounts=tuple(coins),
                ))

        return pending

    def query_validators(self, status: str = BOND_STATUS_BONDED) -> List[StakingValidator]:
        """List validators with the given bond status, following pagination"""
        validators: List[StakingValidator] = []
        next_key = b""
        while True:
            request = QueryValidatorsRequest(
                status=status,
                pagination=PageRequest(key=next_key, limit=self._page_limit),
            )
            response = self._query(QUERY_VALIDATORS, request, QueryValidatorsResponse)
            validators.extend(response.validators)

            next_key = response.pagination.next_key
            if not next_key:
                break
        return validators

    # ========== Broadcast ==========

    def broadcast(self, signed_tx: bytes) -> Dict:
        """
        Submit signed TxRaw bytes verbatim

        Returns:
            broadcast_tx_sync result ({"code", "hash", "log", ...})
        """
        logger.info(f"Broadcasting {len(signed_tx)} byte transaction to {self._rpc.endpoint}")
        return self._rpc.broadcast_tx_sync(signed_tx)
