"""
Stacks PoX staking support (pool-delegation model)
"""

from .adapter import PoolContract, StacksAdapter
from .provider import StacksProvider
from .constants import MAINNET, TESTNET, StacksNetwork, network_for_url
from .c32 import decode_address, encode_address
from .transaction import ContractCall, StandardPrincipalCV, UIntCV, txid

__all__ = [
    "PoolContract",
    "StacksAdapter",
    "StacksProvider",
    "MAINNET",
    "TESTNET",
    "StacksNetwork",
    "network_for_url",
    "decode_address",
    "encode_address",
    "ContractCall",
    "StandardPrincipalCV",
    "UIntCV",
    "txid",
]
