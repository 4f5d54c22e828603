"""
Stacks contract-call transaction serialization

Builds the unsigned wire form of a single-sig (P2PKH) contract call with
nonce 0, fee 0, deny post-condition mode and no post conditions. The
signature field is left zeroed for the client to fill in when signing.

Layout:
    version(1) chain_id(4) auth_type(1)
    hash_mode(1) signer(20) nonce(8) fee(8) key_encoding(1) signature(65)
    anchor_mode(1) post_condition_mode(1) post_conditions(u32 len)
    payload_type(1) contract_address(21) contract_name(lp) function_name(lp) args(u32 len + values)
"""

import struct
from dataclasses import dataclass
from typing import List, Tuple

from Crypto.Hash import SHA512

from ...errors import InvalidParameterError, TransactionError
from .c32 import decode_address, hash160
from .constants import (
    ANCHOR_MODE_ANY,
    AUTH_TYPE_STANDARD,
    CLARITY_PRINCIPAL_STANDARD,
    CLARITY_UINT,
    COMPRESSED_PUBLIC_KEY_LENGTH,
    HASH160_LENGTH,
    HASH_MODE_P2PKH,
    KEY_ENCODING_COMPRESSED,
    KEY_ENCODING_UNCOMPRESSED,
    MAX_CLARITY_UINT,
    PAYLOAD_CONTRACT_CALL,
    POST_CONDITION_MODE_DENY,
    RECOVERABLE_SIGNATURE_LENGTH,
    UNCOMPRESSED_PUBLIC_KEY_LENGTH,
    StacksNetwork,
)

# version + chain id
HEADER_LENGTH = 5

MAX_NAME_LENGTH = 128


# ========== Clarity values ==========

@dataclass(frozen=True)
class UIntCV:
    value: int

    def serialize(self) -> bytes:
        if not 0 <= self.value <= MAX_CLARITY_UINT:
            raise InvalidParameterError.invalid("amount", self.value, "out of uint128 range")
        return bytes([CLARITY_UINT]) + self.value.to_bytes(16, "big")


@dataclass(frozen=True)
class StandardPrincipalCV:
    version: int
    hash_bytes: bytes

    @classmethod
    def from_address(cls, address: str) -> "StandardPrincipalCV":
        version, hash_bytes = decode_address(address)
        return cls(version=version, hash_bytes=hash_bytes)

    def serialize(self) -> bytes:
        return bytes([CLARITY_PRINCIPAL_STANDARD, self.version]) + self.hash_bytes


def _length_prefixed(name: str, parameter: str) -> bytes:
    try:
        data = name.encode("ascii")
    except UnicodeEncodeError:
        raise InvalidParameterError.invalid(parameter, name, "must be ASCII")
    if not data or len(data) > MAX_NAME_LENGTH:
        raise InvalidParameterError.invalid(parameter, name, f"must be 1-{MAX_NAME_LENGTH} characters")
    return bytes([len(data)]) + data


# ========== Signer ==========

def parse_public_key(public_key: str) -> Tuple[bytes, int]:
    """
    Decode a hex public key into (hash160, key encoding)

    Raises:
        InvalidParameterError: If the key is not 33 or 65 bytes of hex
    """
    text = public_key.strip()
    if text[:2].lower() == "0x":
        text = text[2:]
    try:
        key = bytes.fromhex(text)
    except ValueError:
        raise InvalidParameterError.invalid("publicKey", public_key, "not valid hex")

    if len(key) == COMPRESSED_PUBLIC_KEY_LENGTH:
        return hash160(key), KEY_ENCODING_COMPRESSED
    if len(key) == UNCOMPRESSED_PUBLIC_KEY_LENGTH:
        return hash160(key), KEY_ENCODING_UNCOMPRESSED
    raise InvalidParameterError.invalid(
        "publicKey", public_key,
        f"expected {COMPRESSED_PUBLIC_KEY_LENGTH} or {UNCOMPRESSED_PUBLIC_KEY_LENGTH} bytes",
    )


# ========== Transaction ==========

@dataclass(frozen=True)
class ContractCall:
    """
    Unsigned contract-call transaction

    Attributes:
        network: Target network (header version and chain id)
        signer: hash160 of the signer public key
        key_encoding: Compressed / uncompressed public key flag
        contract_address: Contract deployer address
        contract_name: Contract name
        function_name: Public function to call
        args: Clarity values
    """
    network: StacksNetwork
    signer: bytes
    key_encoding: int
    contract_address: str
    contract_name: str
    function_name: str
    args: Tuple = ()
    nonce: int = 0
    fee: int = 0

    def _spending_condition(self) -> bytes:
        if len(self.signer) != HASH160_LENGTH:
            raise ValueError(f"signer hash must be {HASH160_LENGTH} bytes")
        return (
            bytes([HASH_MODE_P2PKH])
            + self.signer
            + struct.pack(">QQ", self.nonce, self.fee)
            + bytes([self.key_encoding])
            + bytes(RECOVERABLE_SIGNATURE_LENGTH)
        )

    def _payload(self) -> bytes:
        version, hash_bytes = decode_address(self.contract_address)
        parts: List[bytes] = [
            bytes([PAYLOAD_CONTRACT_CALL, version]),
            hash_bytes,
            _length_prefixed(self.contract_name, "contract name"),
            _length_prefixed(self.function_name, "function name"),
            struct.pack(">I", len(self.args)),
        ]
        parts.extend(arg.serialize() for arg in self.args)
        return b"".join(parts)

    def serialize(self) -> bytes:
        header = struct.pack(">BIB", self.network.tx_version, self.network.chain_id, AUTH_TYPE_STANDARD)
        modes = struct.pack(">BBI", ANCHOR_MODE_ANY, POST_CONDITION_MODE_DENY, 0)
        return header + self._spending_condition() + modes + self._payload()

    def txid(self) -> str:
        return txid(self.serialize())


def txid(tx_bytes: bytes) -> str:
    """Transaction id: SHA-512/256 of the serialized transaction"""
    return SHA512.new(tx_bytes, truncate="256").hexdigest()


def parse_header(tx_bytes: bytes) -> Tuple[int, int]:
    """
    Read (version, chain_id) from serialized transaction bytes

    Raises:
        TransactionError: If the payload is too short
    """
    if len(tx_bytes) < HEADER_LENGTH:
        raise TransactionError.malformed(f"{len(tx_bytes)} bytes is shorter than the header")
    return struct.unpack_from(">BI", tx_bytes)


def check_network(tx_bytes: bytes, network: StacksNetwork):
    """
    Ensure serialized transaction bytes target network

    Raises:
        TransactionError: If the version or chain id belongs to another network
    """
    version, chain_id = parse_header(tx_bytes)
    if version != network.tx_version or chain_id != network.chain_id:
        raise TransactionError.malformed(
            f"transaction targets version 0x{version:02x} chain 0x{chain_id:08x}, "
            f"expected {network.name} (0x{network.tx_version:02x}, 0x{network.chain_id:08x})"
        )
