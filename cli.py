#!/usr/bin/env python3
"""CLI for estimating preVerificationGas against a live RPC endpoint"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from preverification_gas.config import settings
from preverification_gas.core import (
    GasOverheads,
    UserOperation,
    calc_pre_verification_gas,
    estimate_pre_verification_gas,
)
from preverification_gas.errors import EncodingError, PreVerificationGasError
from preverification_gas.logging_config import setup_logging
from preverification_gas.providers import JsonRpcProvider, RpcConfig


def load_user_op(path: str) -> UserOperation:
    """Read a UserOperation JSON file ("-" for stdin)"""
    raw = sys.stdin.read() if path == "-" else Path(path).read_text()
    data = json.loads(raw)
    # accept both a bare op and an eth_estimateUserOperationGas params array
    if isinstance(data, list):
        if not data:
            raise EncodingError("params array is empty, expected a UserOperation first")
        data = data[0]
    return UserOperation.from_rpc(data)


def parse_overheads(raw: Optional[str]) -> Optional[GasOverheads]:
    if raw:
        return GasOverheads.model_validate(json.loads(raw))
    if settings.default_overheads:
        return GasOverheads.model_validate(settings.default_overheads)
    return None


def print_estimate(result: Dict[str, Any]) -> None:
    print("\n⛽ preVerificationGas")
    print("=" * 40)
    print(f"Network:      {result['network']} (chain {result['chainId']})")
    print(f"Rollup:       {result['rollupFamily']}")
    print(f"Base:         {result['basePreVerificationGas']:,}")
    print(f"L1 data fee:  {result['l1Gas']:,}")
    print(f"Total:        {result['preVerificationGas']:,}")


async def cli_estimate(
    path: str,
    rpc_url: str,
    overheads: Optional[GasOverheads],
    base_only: bool,
    as_json: bool,
) -> None:
    user_op = load_user_op(path)

    if base_only:
        gas = calc_pre_verification_gas(user_op, overheads)
        print(json.dumps({"preVerificationGas": gas}) if as_json else gas)
        return

    async with JsonRpcProvider(RpcConfig(rpc_url=rpc_url, timeout_s=settings.request_timeout_seconds)) as provider:
        result = (await estimate_pre_verification_gas(user_op, provider, overheads)).to_dict()

    if as_json:
        print(json.dumps(result))
    else:
        print_estimate(result)


async def cli_network(rpc_url: str) -> None:
    async with JsonRpcProvider(RpcConfig(rpc_url=rpc_url, timeout_s=settings.request_timeout_seconds)) as provider:
        network = await provider.get_network()
        gas_price = await provider.get_gas_price()
    print(f"Network:   {network.name} (chain {network.chain_id})")
    print(f"Gas price: {gas_price:,} wei")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="preVerificationGas estimator")
    parser.add_argument("--rpc", default=settings.rpc_url, help="RPC URL (default: $RPC_URL)")
    parser.add_argument("--log-level", default=None, help="Log level (default: settings.log_level)")
    subparsers = parser.add_subparsers(dest="command")

    estimate_parser = subparsers.add_parser("estimate", help="Estimate preVerificationGas for a UserOperation")
    estimate_parser.add_argument("user_op", help="Path to UserOperation JSON, or - for stdin")
    estimate_parser.add_argument("--overheads", help='Overhead overrides as JSON, e.g. \'{"bundleSize": 4}\'')
    estimate_parser.add_argument("--base-only", action="store_true", help="Skip the L1 data fee (no RPC needed)")
    estimate_parser.add_argument("--json", action="store_true", help="Print JSON output")

    subparsers.add_parser("network", help="Show the chain behind the RPC URL")

    return parser


async def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, stream=sys.stderr)

    if not args.command:
        parser.print_help()
        return 0

    needs_rpc = args.command == "network" or not getattr(args, "base_only", False)
    if needs_rpc and not args.rpc:
        print("❌ No RPC URL: pass --rpc or set RPC_URL", file=sys.stderr)
        return 2

    try:
        if args.command == "estimate":
            overheads = parse_overheads(args.overheads)
            await cli_estimate(args.user_op, args.rpc, overheads, args.base_only, args.json)
        elif args.command == "network":
            await cli_network(args.rpc)
    except (PreVerificationGasError, ValidationError, json.JSONDecodeError, OSError) as exc:
        print(f"❌ Error: {exc}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
