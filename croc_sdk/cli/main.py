"""Main CLI entry point"""

import sys
import json
import logging
import argparse
from pathlib import Path

from ..core.balances import BalanceQuery
from ..core.config import Config
from ..core.connection import CrocContext
from ..core.types import WeiQty, DisplayQty
from ..operations.tokens import CrocTokenView


def get_results_dir():
    """Get results directory, create if needed"""
    results_dir = Path.cwd() / "results"
    results_dir.mkdir(exist_ok=True)
    return results_dir


def save_result(filename, data):
    """Save result to JSON file in results directory"""
    filepath = get_results_dir() / filename
    with open(filepath, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return filepath


def parse_qty(args):
    """AMOUNT argument as a wei or display quantity"""
    if args.wei:
        return WeiQty(int(args.amount))
    return DisplayQty(args.amount)


def token_view(args, require_signer=False):
    """Build a token view for the TOKEN argument"""
    context = CrocContext(
        require_signer=require_signer,
        max_fee_gwei=getattr(args, "max_fee", None),
        priority_fee_gwei=getattr(args, "priority_fee", None),
    )
    token_address = Config().get_token_address(args.token)
    return CrocTokenView(token_address, context)


def report_tx(action, view, result, extra=None):
    """Print and save the outcome of a write command"""
    if hasattr(result, "transactionHash"):
        tx_hash = result.transactionHash.hex()
        data = {"block": result.blockNumber, "gas_used": result.gasUsed}
    else:
        tx_hash = result.hex()
        data = {"status": "pending"}

    data.update({"action": action, "token": view.token_address, "tx_hash": tx_hash})
    data.update(extra or {})

    print(json.dumps(data, indent=2, default=str))
    filepath = save_result(f"{action}_{tx_hash[:10]}.json", data)
    print(f"\nSaved to {filepath}", file=sys.stderr)


def cmd_query_balances(args):
    """Query wallet and surplus balances for all configured tokens"""
    query = BalanceQuery()
    result = query.get_all_balances(args.address)

    print(f"Balances for {result['address']}")
    print("-" * 60)
    print(f"  {'TOKEN':<10} {'WALLET':>22} {'SURPLUS':>22}")
    for bal in result["balances"]:
        if "error" in bal:
            print(f"  {bal['symbol']:<10} ERROR - {bal['error']}")
        else:
            print(f"  {bal['symbol']:<10} {bal['wallet']:>22} {bal['surplus']:>22}")
    print("-" * 60)

    print("\n" + json.dumps(result, indent=2, default=str))
    filepath = save_result(f"balances_{result['address'][:10]}.json", result)
    print(f"\nSaved to {filepath}", file=sys.stderr)


def cmd_query_token(args):
    """Query balances and dex allowance of one token"""
    view = token_view(args)
    address = args.address or view.context.address
    if not address:
        raise ValueError("No address provided (pass --address or set PUBLIC_KEY)")

    result = BalanceQuery(view.context).get_token_balance(view.token_address, address)
    result["allowance_wei"] = str(view.allowance(address))

    print(json.dumps(result, indent=2, default=str))
    filepath = save_result(f"token_{view.token_address[:10]}_{address[:10]}.json", result)
    print(f"\nSaved to {filepath}", file=sys.stderr)


def cmd_approve(args):
    """Approve the dex to pull a token"""
    view = token_view(args, require_signer=True)
    result = view.approve(wait=args.wait)
    if result is None:
        print("Native ETH needs no approval.")
        return
    report_tx("approve", view, result)


def cmd_deposit(args):
    """Deposit tokens into surplus collateral"""
    qty = parse_qty(args)
    view = token_view(args, require_signer=True)
    recv = args.recv or view.context.address
    result = view.deposit(qty, recv, wait=args.wait)
    report_tx("deposit", view, result, {"amount": view.to_display(qty), "recv": recv})


def cmd_withdraw(args):
    """Withdraw tokens from surplus collateral"""
    qty = parse_qty(args)
    view = token_view(args, require_signer=True)
    recv = args.recv or view.context.address
    result = view.withdraw(qty, recv, wait=args.wait)
    report_tx("withdraw", view, result, {"amount": view.to_display(qty), "recv": recv})


def cmd_transfer(args):
    """Transfer surplus collateral to another address"""
    qty = parse_qty(args)
    view = token_view(args, require_signer=True)
    result = view.transfer(qty, args.recv, wait=args.wait)
    report_tx("transfer", view, result, {"amount": view.to_display(qty), "recv": args.recv})


def add_tx_arguments(parser):
    """Flags shared by commands that send a transaction"""
    parser.add_argument("--wait", action="store_true", help="Wait for the transaction receipt")
    parser.add_argument("--max-fee", type=float, help="Max fee per gas in Gwei")
    parser.add_argument("--priority-fee", type=float, help="Priority fee per gas in Gwei")


def add_amount_arguments(parser):
    parser.add_argument("token", help="Token symbol (ETH for native) or address")
    parser.add_argument("amount", help="Amount as a decimal (e.g. 1.5)")
    parser.add_argument("--wei", action="store_true", help="AMOUNT is in wei instead of decimal")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="croc-sdk",
        description="Croc SDK - Token balances and surplus collateral on CrocSwap",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""examples:
  croc-sdk query balances                     # Wallet and surplus balances
  croc-sdk query token USDC                   # One token, with dex allowance
  croc-sdk approve USDC                       # Let the dex pull USDC
  croc-sdk deposit ETH 0.5                    # Move 0.5 ETH into surplus
  croc-sdk withdraw USDC 100 --wait           # Move 100 USDC back to the wallet
  croc-sdk transfer USDC 1000000 0xabc... --wei

configuration:
  RPC_URL      Set in .env file
  wallet       Set PUBLIC_KEY and PRIVATE_KEY in wallet.env
  tokens       config/tokens.json
  gas          gas_config.json
""",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # ── query ──────────────────────────────────────────────────────────
    query_parser = subparsers.add_parser("query", help="Query balances")
    query_sub = query_parser.add_subparsers(dest="query_type")

    balances_parser = query_sub.add_parser("balances", help="Wallet and surplus balances of all tokens")
    balances_parser.add_argument("--address", help="Address to query")
    balances_parser.set_defaults(func=cmd_query_balances)

    token_parser = query_sub.add_parser("token", help="Balances and allowance of one token")
    token_parser.add_argument("token", help="Token symbol (ETH for native) or address")
    token_parser.add_argument("--address", help="Address to query")
    token_parser.set_defaults(func=cmd_query_token)

    # ── approve ────────────────────────────────────────────────────────
    approve_parser = subparsers.add_parser("approve", help="Approve the dex to pull a token")
    approve_parser.add_argument("token", help="Token symbol or address")
    add_tx_arguments(approve_parser)
    approve_parser.set_defaults(func=cmd_approve)

    # ── surplus collateral ─────────────────────────────────────────────
    deposit_parser = subparsers.add_parser("deposit", help="Deposit into surplus collateral")
    add_amount_arguments(deposit_parser)
    deposit_parser.add_argument("--recv", help="Surplus owner (default: your address)")
    add_tx_arguments(deposit_parser)
    deposit_parser.set_defaults(func=cmd_deposit)

    withdraw_parser = subparsers.add_parser("withdraw", help="Withdraw surplus collateral")
    add_amount_arguments(withdraw_parser)
    withdraw_parser.add_argument("--recv", help="Wallet to receive tokens (default: your address)")
    add_tx_arguments(withdraw_parser)
    withdraw_parser.set_defaults(func=cmd_withdraw)

    transfer_parser = subparsers.add_parser("transfer", help="Transfer surplus collateral")
    add_amount_arguments(transfer_parser)
    transfer_parser.add_argument("recv", help="Address receiving the surplus")
    add_tx_arguments(transfer_parser)
    transfer_parser.set_defaults(func=cmd_transfer)

    return parser, query_parser


def main(argv=None):
    parser, query_parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "query" and not args.query_type:
        query_parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
