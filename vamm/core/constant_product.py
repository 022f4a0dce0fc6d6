"""
Constant-product curve (standard markets).

Invariant: new_reserve_in * new_reserve_out == sqrt_k**2, up to the floor
truncation of new_reserve_out (at most one unit of the output reserve).

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Floor Rounding
- Time Complexity: O(1)
- Agnostic to whether the input asset is quote or base.
"""

from __future__ import annotations

from typing import Tuple

from ..state.types import AssetType, SwapDirection
from .fixed_point import DEFAULT_CONFIG, FixedPointConfig, checked_sub_unsigned, floor_div, to_u128


def apply_swap_amount(reserve_in: int, swap_amount: int, direction: SwapDirection) -> int:
    """Input reserve after adding or removing *swap_amount*."""
    if direction is SwapDirection.ADD:
        return reserve_in + swap_amount
    if direction is SwapDirection.REMOVE:
        return checked_sub_unsigned(reserve_in, swap_amount)
    raise ValueError(f"unsupported swap direction: {direction!r}")


def calculate_swap_output(
    reserve_in: int,
    swap_amount: int,
    direction: SwapDirection,
    invariant: int,
    asset_type: AssetType,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> Tuple[int, int]:
    """
    Reserves after a swap against the constant-product curve.

    *asset_type* is unused here; it is part of the shared curve signature.

        new_reserve_in = reserve_in +/- swap_amount
        new_reserve_out = floor(invariant / new_reserve_in)

    Returns:
        (new_reserve_in, new_reserve_out)

    Raises:
        VammUnderflowError: REMOVE larger than the reserve
        VammDivisionByZeroError: the input reserve is drained to zero
    """
    new_reserve_in = to_u128(apply_swap_amount(reserve_in, swap_amount, direction))
    new_reserve_out = to_u128(floor_div(invariant, new_reserve_in))
    return new_reserve_in, new_reserve_out


def calculate_price(
    base_asset_amount: int,
    quote_asset_amount: int,
    peg_multiplier: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> int:
    """``quote * MARK_PRICE_PRECISION * peg / PEG_PRECISION / base`` (floor at each step)."""
    scaled = quote_asset_amount * config.mark_price_precision * peg_multiplier
    return floor_div(floor_div(scaled, config.peg_precision), base_asset_amount)


def root_limit_price(limit_price: int, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    # Constant-product prices are already in the reserve-ratio domain.
    return limit_price
