"""
Delegation position views
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from .actions import PendingAction
from .common import format_decimal, sum_decimals


@dataclass(frozen=True)
class Delegation:
    """
    One active delegator -> validator relationship

    Attributes:
        delegator_address: Delegating account
        validator_address: Validator (or pool) receiving the delegation
        balance: Delegated balance
    """
    delegator_address: str
    validator_address: str
    balance: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            "delegatorAddress": self.delegator_address,
            "validatorAddress": self.validator_address,
            "balance": format_decimal(self.balance),
        }


@dataclass(frozen=True)
class RewardCoin:
    """Single reward component"""
    denom: str
    amount: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {"denom": self.denom, "amount": format_decimal(self.amount)}


@dataclass(frozen=True)
class PendingReward:
    """
    Unclaimed rewards for one validator

    Only built when at least one component is strictly positive.
    """
    validator_address: str
    reward_amounts: Tuple[RewardCoin, ...]

    @property
    def total(self) -> Decimal:
        return sum_decimals(coin.amount for coin in self.reward_amounts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "validatorAddress": self.validator_address,
            "rewards": [coin.to_dict() for coin in self.reward_amounts],
        }


@dataclass
class DelegationInfo:
    """
    Aggregate staking position of a delegator, computed fresh per query

    Attributes:
        delegations: Active delegations
        total_staked: Staked total as reported by the chain
        pending_rewards_total: Sum of all pending reward components
        pending_rewards_by_validator: Validators with non-zero pending rewards
        pending_actions: Server-discovered actions awaiting client signature
            (pool-delegation chains only)
    """
    delegations: List[Delegation] = field(default_factory=list)
    total_staked: Decimal = Decimal(0)
    pending_rewards_total: Decimal = Decimal(0)
    pending_rewards_by_validator: List[PendingReward] = field(default_factory=list)
    pending_actions: List[PendingAction] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "DelegationInfo":
        return cls()

    @property
    def is_empty(self) -> bool:
        return (
            not self.delegations
            and self.total_staked == 0
            and self.pending_rewards_total == 0
            and not self.pending_actions
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "delegations": [d.to_dict() for d in self.delegations],
            "totalStaked": format_decimal(self.total_staked),
            "pendingRewards": format_decimal(self.pending_rewards_total),
            "pendingStakingRewards": [r.to_dict() for r in self.pending_rewards_by_validator],
            "pendingActions": [a.to_dict() for a in self.pending_actions],
        }
