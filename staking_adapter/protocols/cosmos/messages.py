"""
Cosmos SDK staking / distribution message and query types

Message classes are the generated protobuf bindings shipped with cosmpy
(cosmos/staking/v1beta1, cosmos/distribution/v1beta1, cosmos/base).
This module re-exports the ones the adapter uses and adds the type URL
registry that turns (typeUrl, message) pairs into wire bytes and back.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, Type

from cosmpy.protos.cosmos.base.query.v1beta1.pagination_pb2 import PageRequest, PageResponse
from cosmpy.protos.cosmos.base.v1beta1.coin_pb2 import Coin, DecCoin
from cosmpy.protos.cosmos.distribution.v1beta1.query_pb2 import (
    QueryDelegationRewardsRequest,
    QueryDelegationRewardsResponse,
)
from cosmpy.protos.cosmos.distribution.v1beta1.tx_pb2 import MsgWithdrawDelegatorReward
from cosmpy.protos.cosmos.staking.v1beta1.query_pb2 import (
    QueryDelegatorDelegationsRequest,
    QueryDelegatorDelegationsResponse,
    QueryValidatorsRequest,
    QueryValidatorsResponse,
)
from cosmpy.protos.cosmos.staking.v1beta1.staking_pb2 import Delegation as StakingDelegation
from cosmpy.protos.cosmos.staking.v1beta1.staking_pb2 import DelegationResponse, Description
from cosmpy.protos.cosmos.staking.v1beta1.staking_pb2 import Validator as StakingValidator
from cosmpy.protos.cosmos.staking.v1beta1.tx_pb2 import MsgBeginRedelegate, MsgDelegate, MsgUndelegate
from google.protobuf.any_pb2 import Any as ProtoAny
from google.protobuf.message import DecodeError, Message

# Transaction messages a payload may carry
TX_MESSAGE_TYPES = (MsgDelegate, MsgUndelegate, MsgBeginRedelegate, MsgWithdrawDelegatorReward)


def type_url_of(msg_type: Type[Message]) -> str:
    """Type URL ("/" + proto full name) used in Any and TxBody.messages"""
    return "/" + msg_type.DESCRIPTOR.full_name


@dataclass(frozen=True)
class EncodeObject:
    """(type URL, message) pair, the unit callers co-sign in a transaction body"""
    type_url: str
    value: Message


class MessageRegistry:
    """
    Type URL -> message class registry

    Encodes and decodes transaction messages so a client can re-decode an
    unsigned payload and combine it with other messages before signing.

    Usage:
        registry = MessageRegistry.default()
        data = registry.encode(EncodeObject(MSG_DELEGATE_TYPE_URL, msg))
        msg = registry.decode(MSG_DELEGATE_TYPE_URL, data)
    """

    def __init__(self, types: Optional[Dict[str, Type[Message]]] = None):
        self._types: Dict[str, Type[Message]] = dict(types or {})

    @classmethod
    def default(cls) -> "MessageRegistry":
        return cls.of(TX_MESSAGE_TYPES)

    @classmethod
    def of(cls, msg_types: Iterable[Type[Message]]) -> "MessageRegistry":
        return cls({type_url_of(msg_type): msg_type for msg_type in msg_types})

    def register(self, type_url: str, msg_type: Type[Message]):
        self._types[type_url] = msg_type

    def lookup(self, type_url: str) -> Type[Message]:
        msg_type = self._types.get(type_url)
        if msg_type is None:
            raise KeyError(f"Unregistered type URL: {type_url}")
        return msg_type

    def type_urls(self) -> Tuple[str, ...]:
        return tuple(sorted(self._types))

    def encode(self, obj: EncodeObject) -> bytes:
        """Encode the message value (not wrapped in Any)"""
        msg_type = self.lookup(obj.type_url)
        if type(obj.value) is not msg_type:
            raise TypeError(f"{obj.type_url} expects {msg_type.__name__}, got {type(obj.value).__name__}")
        return obj.value.SerializeToString()

    def decode(self, type_url: str, data: bytes) -> Message:
        """
        Decode message bytes for type_url

        Raises:
            KeyError: If the type URL is not registered
            DecodeError: If data is not a valid message
        """
        return self.lookup(type_url).FromString(data)

    def encode_any(self, obj: EncodeObject) -> bytes:
        """Encode as google.protobuf.Any (the form used inside TxBody.messages)"""
        return ProtoAny(type_url=obj.type_url, value=self.encode(obj)).SerializeToString()

    def decode_any(self, data: bytes) -> EncodeObject:
        wrapped = ProtoAny.FromString(data)
        if not wrapped.type_url:
            raise DecodeError("Any without type_url")
        return EncodeObject(type_url=wrapped.type_url, value=self.decode(wrapped.type_url, wrapped.value))

