"""
Test Types Module

Tests for staking_adapter.types: amount helpers, transaction envelopes,
pending actions and delegation views.
"""

import sys
from decimal import Decimal
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from staking_adapter.errors import InvalidParameterError
from staking_adapter.types import (
    ActionType,
    ClaimRewardsAction,
    Delegation,
    DelegationInfo,
    PendingReward,
    PendingTransaction,
    RewardCoin,
    StakingOptions,
    TxReceipt,
    TxStatus,
    UndelegateAction,
    UnsignedTransaction,
    Validator,
    format_decimal,
    from_base_units,
    normalize_hex,
    sum_decimals,
    to_base_units,
    to_decimal,
)


class TestAmountHelpers:
    """Decimal conversions never pass through float"""

    def test_to_decimal_accepts_int_str_decimal(self):
        assert to_decimal(10) == Decimal(10)
        assert to_decimal(" 1.25 ") == Decimal("1.25")
        assert to_decimal(Decimal("3")) == Decimal(3)

    def test_to_decimal_rejects_float(self):
        with pytest.raises(InvalidParameterError):
            to_decimal(1.5)

    def test_to_decimal_rejects_bool_and_garbage(self):
        with pytest.raises(InvalidParameterError):
            to_decimal(True)
        with pytest.raises(InvalidParameterError):
            to_decimal("ten")
        with pytest.raises(InvalidParameterError):
            to_decimal("NaN")

    def test_format_decimal(self):
        assert format_decimal(Decimal("2.000")) == "2"
        assert format_decimal(Decimal("5E-3")) == "0.005"
        assert format_decimal(Decimal("1E+3")) == "1000"
        assert format_decimal(Decimal(0)) == "0"

    def test_to_base_units(self):
        assert to_base_units("1.5", 6) == 1_500_000
        assert to_base_units(10, 0) == 10
        assert to_base_units("0", 6) == 0

    def test_to_base_units_exact_for_large_values(self):
        # 28 significant digits would round under the default context
        amount = "123456789012345678901234.567891"
        assert to_base_units(amount, 6) == 123456789012345678901234567891

    def test_to_base_units_rejects_negative(self):
        with pytest.raises(InvalidParameterError):
            to_base_units("-1", 6)

    def test_to_base_units_rejects_excess_precision(self):
        with pytest.raises(InvalidParameterError):
            to_base_units("0.0000001", 6)
        with pytest.raises(InvalidParameterError):
            to_base_units("10.5", 0)

    def test_from_base_units(self):
        assert from_base_units("2000000", 6) == Decimal(2)
        assert from_base_units("5000", 6) == Decimal("0.005")
        assert from_base_units("1500000000000000000", 18) == Decimal("1.5")

    def test_sum_decimals(self):
        values = [Decimal("0.1")] * 10
        assert sum_decimals(values) == Decimal("1.0")
        assert sum_decimals([]) == Decimal(0)


class TestTransactionTypes:
    """Unsigned payloads, envelopes and receipts"""

    def test_unsigned_transaction(self):
        tx = UnsignedTransaction(transaction_kind="/cosmos.staking.v1beta1.MsgDelegate", payload_hex="0a05")
        assert tx.payload_bytes == b"\x0a\x05"
        assert tx.to_dict() == {
            "transactionKind": "/cosmos.staking.v1beta1.MsgDelegate",
            "txBytes": "0a05",
        }

    def test_unsigned_transaction_is_frozen(self):
        tx = UnsignedTransaction(transaction_kind="k", payload_hex="00")
        with pytest.raises(Exception):
            tx.payload_hex = "01"

    def test_normalize_hex(self):
        assert normalize_hex("0xDEADbeef") == "deadbeef"
        with pytest.raises(InvalidParameterError):
            normalize_hex("abc")
        with pytest.raises(InvalidParameterError):
            normalize_hex("zz")
        with pytest.raises(InvalidParameterError):
            normalize_hex("")

    def test_pending_transaction_from_dict(self):
        envelope = PendingTransaction.from_dict({
            "providerId": "stacks",
            "transactionDefinition": "delegate-stack-stx",
            "signedTransaction": "0xCAFE",
        })
        assert envelope.provider_id == "stacks"
        assert envelope.transaction_kind == "delegate-stack-stx"
        assert envelope.signed_bytes == b"\xca\xfe"

    def test_pending_transaction_bad_hex(self):
        envelope = PendingTransaction("stacks", "delegate-stack-stx", "not-hex")
        with pytest.raises(InvalidParameterError):
            envelope.signed_bytes

    def test_tx_receipt(self):
        ok = TxReceipt(id="ABC", status=TxStatus.SUCCESS, code=0)
        assert ok.is_success
        assert not ok.is_pending
        assert ok.to_dict() == {"id": "ABC", "status": "success", "code": 0}

        pending = TxReceipt(id="0x1", status=TxStatus.PENDING)
        assert pending.is_pending
        assert pending.to_dict() == {"id": "0x1", "status": "pending"}


class TestStakingOptions:

    def test_from_dict(self):
        options = StakingOptions.from_dict({"denom": "uom", "publicKey": "02ab"})
        assert options.denom == "uom"
        assert options.public_key == "02ab"

    def test_from_empty(self):
        options = StakingOptions.from_dict(None)
        assert options.denom is None
        assert options.public_key is None


class TestPendingActions:
    """Tagged union keeps the {"id", "type", "passthrough", "args"} wire shape"""

    def test_claim_rewards_action(self):
        action = ClaimRewardsAction(id="claim-SP1-1", unsigned_tx_id="aa")
        assert action.action_type == ActionType.CLAIM_REWARDS
        assert action.args is None
        assert action.to_dict() == {
            "id": "claim-SP1-1",
            "type": "CLAIM_REWARDS",
            "passthrough": {"unsignedTx": "aa"},
        }

    def test_undelegate_action(self):
        action = UndelegateAction(id="undelegate-SP1-1", unsigned_tx_id="bb", max_amount=Decimal("2.000000"))
        assert action.action_type == ActionType.UNDELEGATE
        assert action.to_dict() == {
            "id": "undelegate-SP1-1",
            "type": "UNDELEGATE",
            "passthrough": {"unsignedTx": "bb"},
            "args": {"maxAmount": "2"},
        }


class TestDelegationViews:

    def test_empty_delegation_info(self):
        info = DelegationInfo.empty()
        assert info.is_empty
        assert info.to_dict() == {
            "delegations": [],
            "totalStaked": "0",
            "pendingRewards": "0",
            "pendingStakingRewards": [],
            "pendingActions": [],
        }

    def test_pending_reward_total(self):
        reward = PendingReward(
            validator_address="valA",
            reward_amounts=(RewardCoin("uom", Decimal("1.5")), RewardCoin("uusdc", Decimal("0.25"))),
        )
        assert reward.total == Decimal("1.75")
        assert reward.to_dict() == {
            "validatorAddress": "valA",
            "rewards": [
                {"denom": "uom", "amount": "1.5"},
                {"denom": "uusdc", "amount": "0.25"},
            ],
        }

    def test_delegation_info_serializes_decimals_as_strings(self):
        info = DelegationInfo(
            delegations=[Delegation("addr1", "valA", Decimal("100"))],
            total_staked=Decimal("100"),
            pending_rewards_total=Decimal("0.000000000000000001"),
        )
        data = info.to_dict()
        assert data["delegations"][0] == {
            "delegatorAddress": "addr1",
            "validatorAddress": "valA",
            "balance": "100",
        }
        assert data["pendingRewards"] == "0.000000000000000001"
        assert not info.is_empty

    def test_validator_to_dict(self):
        assert Validator("valA", "Alpha").to_dict() == {"address": "valA", "name": "Alpha"}
        jailed = Validator("valB", "Beta", tokens=Decimal("1000"), jailed=True)
        assert jailed.to_dict() == {"address": "valB", "name": "Beta", "tokens": "1000", "jailed": True}


def main():
    """Run all type tests"""
    print("=" * 60)
    print("Staking Adapter Types Tests")
    print("=" * 60)

    exit_code = pytest.main([__file__, "-v", "--tb=short"])
    return exit_code == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
