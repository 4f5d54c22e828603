"""
Pending actions discovered while querying a delegation

A pending action is an operation the client still has to sign. Each action
type is its own dataclass so callers can dispatch on the class; to_dict()
keeps the {"id", "type", "passthrough", "args"} wire shape.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Union

from .common import format_decimal


class ActionType(Enum):
    """Pending action kinds"""
    CLAIM_REWARDS = "CLAIM_REWARDS"
    UNDELEGATE = "UNDELEGATE"


@dataclass(frozen=True)
class ClaimRewardsAction:
    """
    Claim accumulated rewards

    Attributes:
        id: Action identifier
        unsigned_tx_id: Identifier of the pre-built unsigned transaction
    """
    id: str
    unsigned_tx_id: str

    action_type = ActionType.CLAIM_REWARDS

    @property
    def passthrough(self) -> Dict[str, str]:
        return {"unsignedTx": self.unsigned_tx_id}

    @property
    def args(self) -> Optional[Dict[str, str]]:
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.action_type.value,
            "passthrough": self.passthrough,
        }


@dataclass(frozen=True)
class UndelegateAction:
    """
    Revoke the current delegation

    Attributes:
        id: Action identifier
        unsigned_tx_id: Identifier of the pre-built unsigned transaction
        max_amount: Currently staked total (display units)
    """
    id: str
    unsigned_tx_id: str
    max_amount: Decimal

    action_type = ActionType.UNDELEGATE

    @property
    def passthrough(self) -> Dict[str, str]:
        return {"unsignedTx": self.unsigned_tx_id}

    @property
    def args(self) -> Dict[str, str]:
        return {"maxAmount": format_decimal(self.max_amount)}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.action_type.value,
            "passthrough": self.passthrough,
            "args": self.args,
        }


PendingAction = Union[ClaimRewardsAction, UndelegateAction]
