"""
Command line smoke tool for the staking adapter

Builds unsigned transactions, queries positions and broadcasts payloads that
were signed elsewhere. Private keys never pass through this tool.

Usage:
    staking-adapter --chain stacks balances SP...
    staking-adapter --chain mantra-dukong-1 delegate mantra1... mantravaloper1... 10 --denom uom
    staking-adapter --chain stacks broadcast <signed hex>
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import config, load_provider_configs, setup_logging
from .errors import StakingAdapterError
from .modules import StakingService
from .protocols import default_registry
from .types import PendingTransaction, StakingOptions

logger = logging.getLogger(__name__)


def _print(data):
    print(json.dumps(data, indent=2))


def _options(args) -> StakingOptions:
    return StakingOptions(denom=args.denom, public_key=args.public_key)


def cmd_balances(service: StakingService, args):
    _print(service.get_balances(args.chain, args.address).to_dict())


def cmd_validators(service: StakingService, args):
    _print([v.to_dict() for v in service.get_validators(args.chain)])


def cmd_delegate(service: StakingService, args):
    tx = service.get_delegate_transaction(args.chain, args.delegator, args.amount, args.validator, _options(args))
    _print(tx.to_dict())


def cmd_undelegate(service: StakingService, args):
    tx = service.get_undelegate_transaction(args.chain, args.delegator, args.amount, args.validator, _options(args))
    _print(tx.to_dict())


def cmd_claim(service: StakingService, args):
    tx = service.get_claim_rewards_transaction(args.chain, args.delegator, args.validator, _options(args))
    _print(tx.to_dict())


def cmd_broadcast(service: StakingService, args):
    envelope = PendingTransaction(
        provider_id=args.chain,
        transaction_kind=args.kind,
        signed_payload=args.signed_tx,
    )
    _print(service.execute(envelope).to_dict())


COMMANDS = {
    "balances": cmd_balances,
    "validators": cmd_validators,
    "delegate": cmd_delegate,
    "undelegate": cmd_undelegate,
    "claim": cmd_claim,
    "broadcast": cmd_broadcast,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="staking-adapter", description="Multi-chain staking adapter CLI")
    parser.add_argument("--chain", required=True, help="Chain id (e.g. mantra-dukong-1, stacks)")
    parser.add_argument("--config", help=f"Provider config JSON (default: {config.providers.config_file})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    p_bal = subparsers.add_parser("balances", help="Query delegation position")
    p_bal.add_argument("address", help="Delegator address")

    subparsers.add_parser("validators", help="List delegation targets")

    for name, help_text in (
        ("delegate", "Build unsigned delegate transaction"),
        ("undelegate", "Build unsigned undelegate transaction"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("delegator", help="Delegator address")
        p.add_argument("validator", help="Validator address (ignored on pool chains)")
        # Kept as a string so the amount never passes through float
        p.add_argument("amount", help="Amount in display units")
        p.add_argument("--denom", help="Coin denom (Cosmos)")
        p.add_argument("--public-key", dest="public_key", help="Hex public key (Stacks)")

    p_claim = subparsers.add_parser("claim", help="Build unsigned claim-rewards transaction")
    p_claim.add_argument("delegator", help="Delegator address")
    p_claim.add_argument("validator", help="Validator address")
    p_claim.add_argument("--denom", help="Coin denom (Cosmos)")
    p_claim.add_argument("--public-key", dest="public_key", help="Hex public key (Stacks)")

    p_bc = subparsers.add_parser("broadcast", help="Broadcast a signed transaction")
    p_bc.add_argument("signed_tx", help="Signed transaction hex")
    p_bc.add_argument("--kind", default="", help="Transaction kind echoed from the unsigned payload")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        config.logging.log_level = "DEBUG"
    setup_logging()

    try:
        service = StakingService(default_registry(), load_provider_configs(args.config))
        COMMANDS[args.command](service, args)
    except StakingAdapterError as e:
        logger.error(str(e))
        _print(e.to_dict())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
