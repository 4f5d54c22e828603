"""
Type definitions for Staking Adapter
"""

from .common import (
    AmountLike,
    StakingOptions,
    Validator,
    to_decimal,
    format_decimal,
    to_base_units,
    from_base_units,
    sum_decimals,
)
from .result import (
    TxStatus,
    UnsignedTransaction,
    PendingTransaction,
    TxReceipt,
    normalize_hex,
)
from .actions import (
    ActionType,
    ClaimRewardsAction,
    UndelegateAction,
    PendingAction,
)
from .position import (
    Delegation,
    RewardCoin,
    PendingReward,
    DelegationInfo,
)

__all__ = [
    # Common types
    "AmountLike",
    "StakingOptions",
    "Validator",
    "to_decimal",
    "format_decimal",
    "to_base_units",
    "from_base_units",
    "sum_decimals",
    # Transactions
    "TxStatus",
    "UnsignedTransaction",
    "PendingTransaction",
    "TxReceipt",
    "normalize_hex",
    # Pending actions
    "ActionType",
    "ClaimRewardsAction",
    "UndelegateAction",
    "PendingAction",
    # Positions
    "Delegation",
    "RewardCoin",
    "PendingReward",
    "DelegationInfo",
]
