"""
Stacks Provider Unit Tests

Exercises StacksProvider against an in-process Stacks node
(httpx.MockTransport) for the PoX address-info and broadcast endpoints.
"""

import hashlib
import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from staking_adapter.errors import (
    ConfigurationError,
    InvalidParameterError,
    MissingParameterError,
    TransactionError,
    UpstreamQueryError,
)
from staking_adapter.protocols.stacks import MAINNET, TESTNET, StacksProvider
from staking_adapter.protocols.stacks.constants import DELEGATE_FUNCTION
from staking_adapter.types import ActionType, PendingTransaction, StakingOptions, TxStatus

NODE_URL = "https://api.testnet.hiro.so"
POOL = {"address": "ST000000000000000000002AMW42H", "name": "pox-4"}
DELEGATOR = "ST000000000000000000002AMW42H"
PUBLIC_KEY = "02" + "11" * 32


class FakeNode:
    """Stacks node stand-in"""

    def __init__(self, address_info=None, status_code=200, broadcast_result="0xabc123"):
        self.address_info = address_info if address_info is not None else {}
        self.status_code = status_code
        self.broadcast_result = broadcast_result
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/v2/pox/stacks_address_info":
            if self.status_code != 200:
                return httpx.Response(self.status_code, json={"error": "address not found"})
            return httpx.Response(200, json=self.address_info)
        if request.url.path == "/v2/transactions" and request.method == "POST":
            return httpx.Response(200, json=self.broadcast_result)
        return httpx.Response(404)


def make_provider(node: FakeNode, node_url: str = NODE_URL, pool=None) -> StacksProvider:
    provider = StacksProvider(transport=httpx.MockTransport(node.handler))
    provider.initialize({"nodeUrl": node_url, "pool": pool or POOL})
    return provider


# ========== Initialization ==========

class TestInitialize:

    def test_testnet_by_default(self):
        provider = make_provider(FakeNode())
        assert provider.adapter.network is TESTNET
        assert provider.adapter.pool.principal == "ST000000000000000000002AMW42H.pox-4"

    def test_mainnet_from_url(self):
        provider = make_provider(
            FakeNode(),
            node_url="https://api.mainnet.hiro.so",
            pool={"address": "SP000000000000000000002Q6VF78", "name": "pox-4"},
        )
        assert provider.adapter.network is MAINNET

    def test_pox_alias_and_snake_case(self):
        provider = StacksProvider()
        provider.initialize({"node_url": NODE_URL, "pox": POOL})
        assert provider.adapter.pool.name == "pox-4"
        provider.close()

    @pytest.mark.parametrize("config", [
        None,
        {"pool": POOL},
        {"nodeUrl": NODE_URL},
        {"nodeUrl": NODE_URL, "pool": {"address": POOL["address"]}},
        {"nodeUrl": NODE_URL, "pool": {"name": "pox-4"}},
        {"nodeUrl": NODE_URL, "pool": {"address": "SP123", "name": "pox-4"}},
        {"nodeUrl": NODE_URL, "pool": "ST000000000000000000002AMW42H.pox-4"},
    ])
    def test_invalid_config(self, config):
        provider = StacksProvider()
        with pytest.raises(ConfigurationError):
            provider.initialize(config)
        assert not provider.is_initialized


# ========== Queries ==========

class TestQueryDelegation:

    def test_scenario_claim_then_undelegate(self):
        node = FakeNode({"total_stx_delegated_u": "2000000", "pending_btc_rewards_microbtc": "5000"})
        provider = make_provider(node)

        info = provider.query_delegation(DELEGATOR)

        assert info.total_staked == Decimal(2)
        assert info.pending_rewards_total == Decimal("0.005")
        assert [a.action_type for a in info.pending_actions] == [ActionType.CLAIM_REWARDS, ActionType.UNDELEGATE]

        claim, undelegate = info.pending_actions
        assert claim.id.startswith(f"claim-{DELEGATOR}-")
        assert undelegate.id.startswith(f"undelegate-{DELEGATOR}-")
        assert undelegate.args == {"maxAmount": "2"}

        # Discovery builds use the placeholder signer; only the txid is surfaced
        expected_txid = provider.adapter.build_delegate_tx(DELEGATOR, 0).txid()
        assert claim.passthrough == {"unsignedTx": expected_txid}
        assert undelegate.passthrough == {"unsignedTx": expected_txid}

        data = info.to_dict()
        assert data["totalStaked"] == "2"
        assert data["pendingRewards"] == "0.005"
        assert data["pendingActions"][1]["args"] == {"maxAmount": "2"}

    def test_discovered_actions_share_txid(self):
        node = FakeNode({"total_stx_delegated_u": "1000000", "pending_btc_rewards_microbtc": "1"})
        claim, undelegate = make_provider(node).query_delegation(DELEGATOR).pending_actions

        assert claim.passthrough["unsignedTx"] == undelegate.passthrough["unsignedTx"]
        assert claim.to_dict()["type"] != undelegate.to_dict()["type"]

    def test_delegation_and_reward_rows(self):
        node = FakeNode({"total_stx_delegated_u": "2000000", "pending_btc_rewards_microbtc": "5000"})
        info = make_provider(node).query_delegation(DELEGATOR)

        assert len(info.delegations) == 1
        assert info.delegations[0].validator_address == "ST000000000000000000002AMW42H.pox-4"
        assert info.delegations[0].balance == Decimal(2)

        reward = info.pending_rewards_by_validator[0]
        assert reward.reward_amounts[0].denom == "BTC"
        assert reward.total == Decimal("0.005")

    def test_request_carries_address(self):
        node = FakeNode()
        make_provider(node).query_delegation(DELEGATOR)

        assert node.requests[0].method == "GET"
        assert node.requests[0].url.params["address"] == DELEGATOR

    def test_empty_position(self):
        info = make_provider(FakeNode({})).query_delegation(DELEGATOR)

        assert info.total_staked == 0
        assert info.pending_rewards_total == 0
        assert info.delegations == []
        assert info.pending_rewards_by_validator == []
        assert info.pending_actions == []

    def test_staked_without_rewards(self):
        info = make_provider(FakeNode({"total_stx_delegated_u": "1500000"})).query_delegation(DELEGATOR)

        assert [a.action_type for a in info.pending_actions] == [ActionType.UNDELEGATE]
        assert info.pending_actions[0].args == {"maxAmount": "1.5"}

    def test_upstream_status_is_surfaced(self):
        with pytest.raises(UpstreamQueryError) as exc_info:
            make_provider(FakeNode(status_code=404)).query_delegation(DELEGATOR)
        assert exc_info.value.status_code == 404
        assert "address not found" in str(exc_info.value)

    def test_non_object_response(self):
        with pytest.raises(UpstreamQueryError):
            make_provider(FakeNode(address_info=["unexpected"])).query_delegation(DELEGATOR)


class TestListValidators:

    def test_pool_is_single_target(self):
        validators = make_provider(FakeNode()).list_validators()
        assert len(validators) == 1
        assert validators[0].address == "ST000000000000000000002AMW42H.pox-4"
        assert validators[0].name == "pox-4"


# ========== Transaction Building ==========

class TestBuildTransactions:

    def test_delegate_requires_public_key(self):
        provider = make_provider(FakeNode())
        with pytest.raises(MissingParameterError) as exc_info:
            provider.delegate(DELEGATOR, 1, "")
        assert exc_info.value.parameter == "publicKey"

    def test_claim_requires_public_key(self):
        provider = make_provider(FakeNode())
        with pytest.raises(MissingParameterError):
            provider.claim_rewards(DELEGATOR, "", StakingOptions(denom="ustx"))

    def test_claim_without_options_differs_from_undelegate(self):
        provider = make_provider(FakeNode())

        with pytest.raises(MissingParameterError) as exc_info:
            provider.claim_rewards(DELEGATOR, "")
        assert exc_info.value.parameter == "publicKey"

        revoke = provider.undelegate(DELEGATOR, 0, "")
        assert revoke.payload_hex == provider.adapter.build_revoke_tx(DELEGATOR).serialize().hex()

    def test_delegate_rejects_sub_micro_amount(self):
        provider = make_provider(FakeNode())
        with pytest.raises(InvalidParameterError):
            provider.delegate(DELEGATOR, "0.0000001", "", StakingOptions(public_key=PUBLIC_KEY))

    def test_delegate_rejects_bad_public_key(self):
        provider = make_provider(FakeNode())
        with pytest.raises(InvalidParameterError):
            provider.delegate(DELEGATOR, 1, "", StakingOptions(public_key="02abcd"))

    def test_delegate_rejects_bad_delegator(self):
        provider = make_provider(FakeNode())
        with pytest.raises(InvalidParameterError):
            provider.undelegate("ST1", 0, "")

    def test_delegate_amount_in_micro_stx(self):
        provider = make_provider(FakeNode())
        tx = provider.delegate(DELEGATOR, "1.5", "", StakingOptions(public_key=PUBLIC_KEY))

        assert tx.transaction_kind == DELEGATE_FUNCTION
        payload = tx.payload_bytes
        assert payload[0] == 0x80
        assert payload[-17] == 0x01
        assert int.from_bytes(payload[-16:], "big") == 1_500_000

    def test_claim_is_zero_amount_delegate(self):
        provider = make_provider(FakeNode())
        options = StakingOptions(public_key=PUBLIC_KEY)

        claim = provider.claim_rewards(DELEGATOR, "", options)
        zero_delegate = provider.delegate(DELEGATOR, 0, "", options)
        assert claim == zero_delegate

    def test_delegate_without_openssl_ripemd160(self):
        provider = make_provider(FakeNode())
        real_new = hashlib.new

        def new_without_ripemd160(name, *args, **kwargs):
            if name.lower() == "ripemd160":
                raise ValueError("unsupported hash type ripemd160")
            return real_new(name, *args, **kwargs)

        with patch("hashlib.new", side_effect=new_without_ripemd160):
            tx = provider.delegate(DELEGATOR, "1", "pool", StakingOptions(public_key=PUBLIC_KEY))

        assert tx.transaction_kind == DELEGATE_FUNCTION
        assert int.from_bytes(tx.payload_bytes[-16:], "big") == 1_000_000

    def test_undelegate_ignores_amount(self):
        provider = make_provider(FakeNode())

        full = provider.undelegate(DELEGATOR, 0, "")
        partial = provider.undelegate(DELEGATOR, "5", "")
        assert partial.payload_hex == full.payload_hex
        assert int.from_bytes(full.payload_bytes[-16:], "big") == 0

    def test_building_makes_no_network_calls(self):
        node = FakeNode()
        make_provider(node).undelegate(DELEGATOR, 1, "")
        assert node.requests == []


# ========== Broadcast ==========

class TestExecuteTransaction:

    def test_broadcast_is_pending(self):
        node = FakeNode(broadcast_result="0xabc123")
        provider = make_provider(node)
        signed = provider.adapter.build_revoke_tx(DELEGATOR).serialize()

        receipt = provider.execute_transaction(PendingTransaction("stacks-testnet", DELEGATE_FUNCTION, signed.hex()))

        assert receipt.status == TxStatus.PENDING
        assert receipt.id == "0xabc123"
        request = node.requests[0]
        assert request.url.path == "/v2/transactions"
        assert request.headers["content-type"] == "application/octet-stream"
        # Bytes are submitted verbatim
        assert request.content == signed

    def test_dict_broadcast_result(self):
        node = FakeNode(broadcast_result={"txid": "0xdef"})
        provider = make_provider(node)
        signed = provider.adapter.build_revoke_tx(DELEGATOR).serialize()

        receipt = provider.execute_transaction(PendingTransaction("stacks-testnet", "", signed.hex()))
        assert receipt.id == "0xdef"

    def test_wrong_network_is_rejected_before_submit(self):
        node = FakeNode()
        provider = make_provider(node)
        mainnet = make_provider(
            FakeNode(),
            node_url="https://api.mainnet.hiro.so",
            pool={"address": "SP000000000000000000002Q6VF78", "name": "pox-4"},
        )
        signed = mainnet.adapter.build_revoke_tx("SP000000000000000000002Q6VF78").serialize()

        with pytest.raises(TransactionError):
            provider.execute_transaction(PendingTransaction("stacks-testnet", "", signed.hex()))
        assert node.requests == []

    def test_rejection_is_surfaced(self):
        def handler(request):
            return httpx.Response(400, json={"error": "transaction rejected", "reason": "BadNonce"})

        provider = StacksProvider(transport=httpx.MockTransport(handler))
        provider.initialize({"nodeUrl": NODE_URL, "pool": POOL})
        signed = provider.adapter.build_revoke_tx(DELEGATOR).serialize()

        with pytest.raises(UpstreamQueryError) as exc_info:
            provider.execute_transaction(PendingTransaction("stacks-testnet", "", signed.hex()))
        assert exc_info.value.status_code == 400
        assert "BadNonce" in str(exc_info.value)


def main():
    """Run all Stacks provider unit tests"""
    print("=" * 60)
    print("Stacks Provider Unit Tests")
    print("=" * 60)

    exit_code = pytest.main([__file__, "-v", "--tb=short"])
    return exit_code == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
