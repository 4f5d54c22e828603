"""
c32check address encoding

A Stacks address is 'S' + version character + c32(hash160 + checksum),
where checksum = sha256(sha256(version_byte + hash160))[:4].
"""

import hashlib
from typing import Tuple

from Crypto.Hash import RIPEMD160

from ...errors import InvalidParameterError
from .constants import C32_ALPHABET, HASH160_LENGTH

CHECKSUM_LENGTH = 4

# Crockford substitutions accepted on decode
_NORMALIZE = str.maketrans({"O": "0", "L": "1", "I": "1"})


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))"""
    return RIPEMD160.new(sha256(data)).digest()


def c32_checksum(version: int, data: bytes) -> bytes:
    return sha256(sha256(bytes([version]) + data))[:CHECKSUM_LENGTH]


def c32_encode(data: bytes) -> str:
    """Encode bytes as c32; each leading zero byte becomes one leading '0'"""
    value = int.from_bytes(data, "big")
    chars = []
    while value:
        value, digit = divmod(value, 32)
        chars.append(C32_ALPHABET[digit])

    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    return "0" * leading_zeros + "".join(reversed(chars))


def c32_decode(text: str, length: int) -> bytes:
    """
    Decode a c32 string into exactly length bytes

    Raises:
        ValueError: On characters outside the alphabet or overflow
    """
    value = 0
    for char in text.upper().translate(_NORMALIZE):
        digit = C32_ALPHABET.find(char)
        if digit < 0:
            raise ValueError(f"invalid c32 character {char!r}")
        value = value * 32 + digit
    return value.to_bytes(length, "big")


def encode_address(version: int, hash_bytes: bytes) -> str:
    if len(hash_bytes) != HASH160_LENGTH:
        raise ValueError(f"hash160 must be {HASH160_LENGTH} bytes")
    if not 0 <= version < 32:
        raise ValueError(f"address version out of range: {version}")
    body = c32_encode(hash_bytes + c32_checksum(version, hash_bytes))
    return "S" + C32_ALPHABET[version] + body


def decode_address(address: str) -> Tuple[int, bytes]:
    """
    Parse a Stacks address

    Contract principals ("SP....pool") are accepted; only the address part
    is decoded.

    Returns:
        (version, hash160)

    Raises:
        InvalidParameterError: If the address is malformed or the checksum fails
    """
    if not isinstance(address, str):
        raise InvalidParameterError.invalid("address", address, "expected string")

    text = address.split(".", 1)[0].strip().upper()
    if len(text) < 3 or text[0] != "S":
        raise InvalidParameterError.invalid("address", address, "must start with 'S'")

    version = C32_ALPHABET.find(text[1].translate(_NORMALIZE))
    if version < 0:
        raise InvalidParameterError.invalid("address", address, "invalid version character")

    try:
        decoded = c32_decode(text[2:], HASH160_LENGTH + CHECKSUM_LENGTH)
    except (ValueError, OverflowError):
        raise InvalidParameterError.invalid("address", address, "invalid c32 payload")

    hash_bytes, checksum = decoded[:HASH160_LENGTH], decoded[HASH160_LENGTH:]
    if c32_checksum(version, hash_bytes) != checksum:
        raise InvalidParameterError.invalid("address", address, "checksum mismatch")

    return version, hash_bytes
