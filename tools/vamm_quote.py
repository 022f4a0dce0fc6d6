#!/usr/bin/env python3
"""
Offline vAMM quote for a market snapshot.

Reads a YAML market snapshot (see `vamm.state.snapshot`) and prints a JSON
quote: mark price, terminal price, and optionally the reserves after a swap
and the trade size that reaches a limit price.

Example:
  python3 tools/vamm_quote.py market.yaml --asset quote --direction long --amount 100000000
  python3 tools/vamm_quote.py market.yaml --limit-price 21000000000
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vamm.core import (
    calculate_amm_reserves_after_swap,
    calculate_mark_price,
    calculate_max_base_asset_amount_to_trade,
    calculate_terminal_price,
    get_swap_direction,
    load_config,
)
from vamm.core.fixed_point import DEFAULT_CONFIG, FixedPointConfig
from vamm.errors import VammError
from vamm.state import AssetType, Market, PositionDirection, load_market


def build_quote(
    market: Market,
    *,
    asset: AssetType | None = None,
    direction: PositionDirection | None = None,
    amount: int | None = None,
    limit_price: int | None = None,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> dict[str, Any]:
    amm = market.amm
    out: dict[str, Any] = {
        "oracle_source": amm.oracle_source.value,
        "mark_price": calculate_mark_price(market, config=config),
        "terminal_price": calculate_terminal_price(market, config=config),
    }
    if amount is not None:
        if asset is None or direction is None:
            raise ValueError("--amount requires --asset and --direction")
        swap_direction = get_swap_direction(asset, direction)
        new_quote, new_base = calculate_amm_reserves_after_swap(amm, asset, amount, swap_direction, config=config)
        out["swap"] = {
            "asset": asset.value,
            "direction": direction.value,
            "swap_direction": swap_direction.value,
            "amount": amount,
            "quote_asset_reserve_after": new_quote,
            "base_asset_reserve_after": new_base,
        }
    if limit_price is not None:
        size, trade_direction = calculate_max_base_asset_amount_to_trade(amm, limit_price, config=config)
        out["trade_bounds"] = {
            "limit_price": limit_price,
            "base_asset_amount": size,
            "direction": trade_direction.value,
        }
    return out


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Quote a vAMM market snapshot without executing anything.")
    p.add_argument("market", type=Path, help="Path to market snapshot YAML")
    p.add_argument("--config", type=Path, help="Path to fixed-point config YAML (default: built-in scales)")
    p.add_argument("--asset", choices=[a.value for a in AssetType], help="Asset the swap amount is denominated in")
    p.add_argument("--direction", choices=[d.value for d in PositionDirection], help="Trader direction")
    p.add_argument("--amount", type=int, help="Swap amount (quote or reserve precision)")
    p.add_argument("--limit-price", type=int, help="Limit price (mark precision) for trade bounds")
    args = p.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        market = load_market(args.market)
        quote = build_quote(
            market,
            asset=AssetType(args.asset) if args.asset else None,
            direction=PositionDirection(args.direction) if args.direction else None,
            amount=args.amount,
            limit_price=args.limit_price,
            config=config,
        )
    except (OSError, yaml.YAMLError, KeyError, TypeError, ValueError, VammError) as exc:
        print(f"vamm_quote error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(quote, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
