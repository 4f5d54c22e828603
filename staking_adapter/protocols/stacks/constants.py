"""
Stacks PoX Constants
"""

from dataclasses import dataclass

# Unit conversion (base unit -> display unit)
STX_DECIMALS = 6
BTC_DECIMALS = 6

# Reward denomination reported by the PoX endpoint
REWARD_DENOM = "BTC"

# c32 alphabet (Crockford base32 without I, L, O, U)
C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

# Transaction header
TX_VERSION_MAINNET = 0x00
TX_VERSION_TESTNET = 0x80
CHAIN_ID_MAINNET = 0x00000001
CHAIN_ID_TESTNET = 0x80000000

AUTH_TYPE_STANDARD = 0x04
HASH_MODE_P2PKH = 0x00
KEY_ENCODING_COMPRESSED = 0x00
KEY_ENCODING_UNCOMPRESSED = 0x01
RECOVERABLE_SIGNATURE_LENGTH = 65

ANCHOR_MODE_ANY = 0x03
POST_CONDITION_MODE_DENY = 0x02

PAYLOAD_CONTRACT_CALL = 0x02

# Clarity value type ids
CLARITY_UINT = 0x01
CLARITY_PRINCIPAL_STANDARD = 0x05

MAX_CLARITY_UINT = 2 ** 128 - 1
HASH160_LENGTH = 20
COMPRESSED_PUBLIC_KEY_LENGTH = 33
UNCOMPRESSED_PUBLIC_KEY_LENGTH = 65

# PoX delegation call; also used with amount 0 to revoke and to claim
DELEGATE_FUNCTION = "delegate-stack-stx"

# Discovery builds have no public key; the signer hash is zeroed
PLACEHOLDER_SIGNER = bytes(HASH160_LENGTH)

# Endpoints
ADDRESS_INFO_PATH = "/v2/pox/stacks_address_info"
BROADCAST_PATH = "/v2/transactions"

# nodeUrl containing this marker selects mainnet
MAINNET_MARKER = "mainnet"


@dataclass(frozen=True)
class StacksNetwork:
    """Network parameters used when serializing transactions"""
    name: str
    tx_version: int
    chain_id: int


MAINNET = StacksNetwork(
    name="mainnet",
    tx_version=TX_VERSION_MAINNET,
    chain_id=CHAIN_ID_MAINNET,
)

TESTNET = StacksNetwork(
    name="testnet",
    tx_version=TX_VERSION_TESTNET,
    chain_id=CHAIN_ID_TESTNET,
)


def network_for_url(node_url: str) -> StacksNetwork:
    """Select mainnet when the node URL mentions it, otherwise testnet"""
    return MAINNET if MAINNET_MARKER in node_url else TESTNET
