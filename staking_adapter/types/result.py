"""
Transaction payload and receipt definitions
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import InvalidParameterError


class TxStatus(Enum):
    """Broadcast status"""
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


def normalize_hex(value: str, parameter: str = "payload") -> str:
    """
    Validate a hex string and return it lowercase without 0x prefix

    Raises:
        InvalidParameterError: If value is empty or not valid hex
    """
    if not isinstance(value, str):
        raise InvalidParameterError.invalid(parameter, value, "expected hex string")
    text = value.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    if not text or len(text) % 2:
        raise InvalidParameterError.invalid(parameter, value, "empty or odd-length hex")
    try:
        bytes.fromhex(text)
    except ValueError:
        raise InvalidParameterError.invalid(parameter, value, "not valid hex")
    return text.lower()


@dataclass(frozen=True)
class UnsignedTransaction:
    """
    Constructed but unsigned transaction payload

    Ownership passes to the caller, who signs it off-system.

    Attributes:
        transaction_kind: Chain-specific kind (Cosmos type URL, Stacks function name)
        payload_hex: Hex encoded payload bytes
    """
    transaction_kind: str
    payload_hex: str

    @property
    def payload_bytes(self) -> bytes:
        return bytes.fromhex(self.payload_hex)

    def to_dict(self) -> Dict[str, str]:
        return {
            "transactionKind": self.transaction_kind,
            "txBytes": self.payload_hex,
        }


@dataclass(frozen=True)
class PendingTransaction:
    """
    Signed transaction envelope returned by the client

    The payload is opaque to the adapters: it is decoded from hex and
    submitted verbatim.

    Attributes:
        provider_id: Chain identifier the transaction targets
        transaction_kind: Kind echoed from the UnsignedTransaction
        signed_payload: Hex encoded signed transaction bytes
    """
    provider_id: str
    transaction_kind: str
    signed_payload: str

    @property
    def signed_bytes(self) -> bytes:
        return bytes.fromhex(normalize_hex(self.signed_payload, "signedTransaction"))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PendingTransaction":
        """Build from wire form, accepting both legacy and current field names"""
        signed = data.get("signedTransaction") or data.get("signedPayload") or ""
        return cls(
            provider_id=data.get("providerId", ""),
            transaction_kind=data.get("transactionKind") or data.get("transactionDefinition") or "",
            signed_payload=signed,
        )


@dataclass(frozen=True)
class TxReceipt:
    """
    Normalized broadcast result

    Attributes:
        id: Transaction hash / txid reported by the chain
        status: pending, success or failed
        code: Chain result code, when the chain reports one
        log: Chain log / rejection reason
    """
    id: str
    status: TxStatus
    code: Optional[int] = None
    log: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == TxStatus.SUCCESS

    @property
    def is_pending(self) -> bool:
        return self.status == TxStatus.PENDING

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "status": self.status.value}
        if self.code is not None:
            data["code"] = self.code
        if self.log:
            data["log"] = self.log
        return data

    def __str__(self) -> str:
        return f"TxReceipt({self.status.value}, {self.id})"
