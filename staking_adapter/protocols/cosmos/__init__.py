"""
Cosmos SDK staking support (delegation-authority model)
"""

from .adapter import CosmosAdapter
from .provider import CosmosProvider
from .messages import (
    Coin,
    DecCoin,
    EncodeObject,
    MessageRegistry,
    MsgBeginRedelegate,
    MsgDelegate,
    MsgUndelegate,
    MsgWithdrawDelegatorReward,
)
from .constants import (
    MSG_DELEGATE_TYPE_URL,
    MSG_UNDELEGATE_TYPE_URL,
    MSG_BEGIN_REDELEGATE_TYPE_URL,
    MSG_WITHDRAW_DELEGATOR_REWARD_TYPE_URL,
)

__all__ = [
    "CosmosAdapter",
    "CosmosProvider",
    "Coin",
    "DecCoin",
    "EncodeObject",
    "MessageRegistry",
    "MsgBeginRedelegate",
    "MsgDelegate",
    "MsgUndelegate",
    "MsgWithdrawDelegatorReward",
    "MSG_DELEGATE_TYPE_URL",
    "MSG_UNDELEGATE_TYPE_URL",
    "MSG_BEGIN_REDELEGATE_TYPE_URL",
    "MSG_WITHDRAW_DELEGATOR_REWARD_TYPE_URL",
]
