"""Position valuation against the vAMM.

Values a signed base position by simulating its close and measuring the
quote-reserve change on the constant-product curve, the way the on-chain
program settles positions. Used by the repeg cost computations.
"""

from __future__ import annotations

from typing import Tuple

from ..state.types import AMM, AssetType, SwapDirection
from .constant_product import calculate_swap_output
from .fixed_point import DEFAULT_CONFIG, FixedPointConfig, checked_sub_unsigned, floor_div, to_u128
from .swap import swap_direction_to_close_position


def reserve_to_quote_amount(reserve_amount: int, peg_multiplier: int, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    """Reserve units -> quote units: ``reserve * peg / ratio``."""
    return floor_div(reserve_amount * peg_multiplier, config.amm_times_peg_to_quote_precision_ratio)


def calculate_quote_asset_amount_swapped(
    quote_reserve_before: int,
    quote_reserve_after: int,
    swap_direction: SwapDirection,
    peg_multiplier: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> int:
    """Quote paid or received for a base swap in *swap_direction*.

    Taking base out of the AMM costs one extra quote unit.
    """
    if swap_direction is SwapDirection.ADD:
        reserve_change = checked_sub_unsigned(quote_reserve_before, quote_reserve_after)
    else:
        reserve_change = checked_sub_unsigned(quote_reserve_after, quote_reserve_before)
    quote_amount = reserve_to_quote_amount(reserve_change, peg_multiplier, config=config)
    if swap_direction is SwapDirection.REMOVE:
        quote_amount += 1
    return to_u128(quote_amount)


def calculate_pnl(exit_value: int, entry_value: int, swap_direction_to_close: SwapDirection) -> int:
    if swap_direction_to_close is SwapDirection.ADD:
        return exit_value - entry_value
    return entry_value - exit_value


def calculate_base_asset_value_and_pnl(
    base_asset_amount: int,
    quote_asset_amount: int,
    amm: AMM,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> Tuple[int, int]:
    """
    Value of a signed base position and its pnl against an entry notional.

    Returns:
        (base_asset_value, pnl) in quote precision; (0, 0) for a flat position
    """
    if base_asset_amount == 0:
        return 0, 0

    direction = swap_direction_to_close_position(base_asset_amount)
    _new_base, new_quote = calculate_swap_output(
        amm.base_asset_reserve, abs(base_asset_amount), direction, amm.invariant, AssetType.BASE, config=config,
    )
    value = calculate_quote_asset_amount_swapped(
        amm.quote_asset_reserve, new_quote, direction, amm.peg_multiplier, config=config,
    )
    return value, calculate_pnl(value, quote_asset_amount, direction)
