"""
Staking Service Unit Tests

Tests the request orchestrator with mocked providers.
"""

import sys
from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from staking_adapter.errors import MissingParameterError, UnknownChainError, UpstreamQueryError
from staking_adapter.modules import StakingService
from staking_adapter.protocols import ProviderRegistry, StakingProvider
from staking_adapter.types import (
    DelegationInfo,
    PendingTransaction,
    StakingOptions,
    TxReceipt,
    TxStatus,
    UnsignedTransaction,
    Validator,
)

CONFIGS = {"fake-chain": {"endpoint": "https://node.example"}}


@pytest.fixture
def provider():
    """Mock provider returned by every resolve"""
    return Mock(spec=StakingProvider)


@pytest.fixture
def service(provider):
    registry = ProviderRegistry({"fake-chain": lambda: provider})
    return StakingService(registry, CONFIGS)


class TestStakingService:

    def test_get_balances(self, service, provider):
        info = DelegationInfo(total_staked=Decimal(5))
        provider.query_delegation.return_value = info

        assert service.get_balances("fake-chain", "addr1") is info
        provider.initialize.assert_called_once_with(CONFIGS["fake-chain"])
        provider.query_delegation.assert_called_once_with("addr1")
        provider.close.assert_called_once()

    def test_get_validators(self, service, provider):
        provider.list_validators.return_value = [Validator("valA", "Alpha")]
        assert service.get_validators("fake-chain")[0].address == "valA"
        provider.close.assert_called_once()

    def test_transaction_builders_forward_options(self, service, provider):
        tx = UnsignedTransaction("kind", "00")
        provider.delegate.return_value = tx
        provider.undelegate.return_value = tx
        provider.claim_rewards.return_value = tx
        options = StakingOptions(denom="uom")

        assert service.get_delegate_transaction("fake-chain", "addr1", "10", "valX", options) is tx
        provider.delegate.assert_called_once_with("addr1", "10", "valX", options)

        assert service.get_undelegate_transaction("fake-chain", "addr1", "3", "valX", options) is tx
        provider.undelegate.assert_called_once_with("addr1", "3", "valX", options)

        assert service.get_claim_rewards_transaction("fake-chain", "addr1", "valX") is tx
        provider.claim_rewards.assert_called_once_with("addr1", "valX", None)

        assert provider.close.call_count == 3

    def test_execute_routes_by_provider_id(self, service, provider):
        receipt = TxReceipt(id="ABC", status=TxStatus.SUCCESS)
        provider.execute_transaction.return_value = receipt
        envelope = PendingTransaction("fake-chain", "kind", "deadbeef")

        assert service.execute(envelope) is receipt
        provider.execute_transaction.assert_called_once_with(envelope)

    def test_execute_requires_provider_id(self, service, provider):
        with pytest.raises(MissingParameterError):
            service.execute(PendingTransaction("", "kind", "deadbeef"))
        provider.initialize.assert_not_called()

    def test_errors_propagate_and_provider_is_closed(self, service, provider):
        provider.query_delegation.side_effect = UpstreamQueryError.bad_status("https://node", 500)

        with pytest.raises(UpstreamQueryError):
            service.get_balances("fake-chain", "addr1")
        provider.close.assert_called_once()

    def test_unknown_chain(self, service):
        with pytest.raises(UnknownChainError):
            service.get_balances("other-chain", "addr1")

    def test_chains_lists_configured_only(self, provider):
        registry = ProviderRegistry({"fake-chain": lambda: provider, "unconfigured": lambda: provider})
        assert StakingService(registry, CONFIGS).chains() == ["fake-chain"]


def main():
    """Run all staking service unit tests"""
    print("=" * 60)
    print("Staking Service Unit Tests")
    print("=" * 60)

    exit_code = pytest.main([__file__, "-v", "--tb=short"])
    return exit_code == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
