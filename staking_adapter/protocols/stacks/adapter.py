"""
Stacks PoX adapter

Builds unsigned "delegate-stack-stx" contract calls against the configured
pool contract and talks to a Stacks node over HTTP+JSON:
- GET  /v2/pox/stacks_address_info  (stacking state of an address)
- POST /v2/transactions             (signed transaction bytes)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ...errors import UpstreamQueryError
from ...infra import HttpClient
from .constants import (
    ADDRESS_INFO_PATH,
    BROADCAST_PATH,
    DELEGATE_FUNCTION,
    KEY_ENCODING_COMPRESSED,
    PLACEHOLDER_SIGNER,
    StacksNetwork,
)
from .transaction import ContractCall, StandardPrincipalCV, UIntCV, check_network, parse_public_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolContract:
    """Pool / PoX contract the delegation calls target"""
    address: str
    name: str

    @property
    def principal(self) -> str:
        return f"{self.address}.{self.name}"


class StacksAdapter:
    """
    Stacks PoX transaction builder and node client

    Usage:
        adapter = StacksAdapter(TESTNET, PoolContract("ST...", "pox-4"), HttpClient(node_url))
        tx = adapter.build_delegate_tx("ST...", 1_000_000, public_key_hex)
        tx.serialize().hex()
    """

    def __init__(self, network: StacksNetwork, pool: PoolContract, http: HttpClient):
        """
        Args:
            network: Mainnet / testnet parameters
            pool: Pool contract address and name
            http: HTTP client bound to the node URL (owned by the provider)
        """
        self._network = network
        self._pool = pool
        self._http = http

    @property
    def network(self) -> StacksNetwork:
        return self._network

    @property
    def pool(self) -> PoolContract:
        return self._pool

    @property
    def http(self) -> HttpClient:
        return self._http

    # ========== Transaction Building ==========

    def build_delegate_tx(
        self,
        delegator: str,
        amount_ustx: int,
        public_key: Optional[str] = None,
    ) -> ContractCall:
        """
        Build an unsigned delegate-stack-stx call

        Args:
            delegator: Delegating Stacks address
            amount_ustx: Amount in micro-STX (0 revokes / claims)
            public_key: Hex signer public key. None builds with a placeholder
                signer; such payloads are only used for their txid.
        """
        if public_key is None:
            signer, key_encoding = PLACEHOLDER_SIGNER, KEY_ENCODING_COMPRESSED
        else:
            signer, key_encoding = parse_public_key(public_key)

        return ContractCall(
            network=self._network,
            signer=signer,
            key_encoding=key_encoding,
            contract_address=self._pool.address,
            contract_name=self._pool.name,
            function_name=DELEGATE_FUNCTION,
            args=(StandardPrincipalCV.from_address(delegator), UIntCV(amount_ustx)),
        )

    def build_revoke_tx(self, delegator: str, public_key: Optional[str] = None) -> ContractCall:
        """Build the full revocation: delegate-stack-stx with amount 0"""
        return self.build_delegate_tx(delegator, 0, public_key)

    # ========== Node API ==========

    def query_address_info(self, address: str) -> Dict[str, Any]:
        """
        Fetch the stacking state of an address

        Returns:
            Raw JSON object (total_stx_delegated_u, pending_btc_rewards_microbtc, ...)
        """
        data = self._http.get_json(ADDRESS_INFO_PATH, params={"address": address})
        if not isinstance(data, dict):
            raise UpstreamQueryError.invalid_response(
                self._http.url(ADDRESS_INFO_PATH), "expected a JSON object"
            )
        return data

    def broadcast(self, signed_tx: bytes) -> str:
        """
        Submit signed transaction bytes verbatim

        Returns:
            txid reported by the node

        Raises:
            TransactionError: If the header targets another network
            UpstreamQueryError: If the node rejects the transaction
        """
        check_network(signed_tx, self._network)

        logger.info(f"Broadcasting {len(signed_tx)} byte transaction to {self._http.base_url}")
        result = self._http.post_bytes(BROADCAST_PATH, signed_tx)

        if isinstance(result, str):
            return result
        if isinstance(result, dict) and result.get("txid"):
            return str(result["txid"])
        raise UpstreamQueryError.invalid_response(self._http.url(BROADCAST_PATH), "missing txid")
