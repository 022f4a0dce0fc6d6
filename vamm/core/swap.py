"""
Swap simulation against the vAMM.

Computes the reserves a trade *would* produce. Nothing here mutates the AMM
snapshot or executes a trade.
"""

from __future__ import annotations

from typing import Tuple

from ..errors import InvalidSwapAmountError
from ..state.types import AMM, AssetType, PositionDirection, SwapDirection
from .curve_dispatch import swap_output_for_amm
from .fixed_point import DEFAULT_CONFIG, FixedPointConfig, floor_div

# (input asset, trader direction) -> reserve operation on the input asset.
# Going long by base takes base out of the AMM; going short by quote takes
# quote out. Every other combination adds to the input reserve.
_SWAP_DIRECTIONS: dict[tuple[AssetType, PositionDirection], SwapDirection] = {
    (AssetType.BASE, PositionDirection.LONG): SwapDirection.REMOVE,
    (AssetType.QUOTE, PositionDirection.SHORT): SwapDirection.REMOVE,
    (AssetType.BASE, PositionDirection.SHORT): SwapDirection.ADD,
    (AssetType.QUOTE, PositionDirection.LONG): SwapDirection.ADD,
}


def get_swap_direction(input_asset_type: AssetType, position_direction: PositionDirection) -> SwapDirection:
    """Translate long/short intent on a quote/base amount into an AMM operation."""
    try:
        return _SWAP_DIRECTIONS[(input_asset_type, position_direction)]
    except KeyError:
        raise ValueError(
            f"unsupported (asset type, direction): ({input_asset_type!r}, {position_direction!r})"
        ) from None


def swap_direction_to_close_position(base_asset_amount: int) -> SwapDirection:
    """Closing a net long puts base back into the AMM; closing a net short takes it out."""
    return SwapDirection.ADD if base_asset_amount > 0 else SwapDirection.REMOVE


def quote_to_reserve_amount(quote_amount: int, peg_multiplier: int, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    """Quote units -> peg-adjusted reserve units: ``amount * ratio / peg``."""
    return floor_div(quote_amount * config.amm_times_peg_to_quote_precision_ratio, peg_multiplier)


def calculate_amm_reserves_after_swap(
    amm: AMM,
    input_asset_type: AssetType,
    swap_amount: int,
    swap_direction: SwapDirection,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> Tuple[int, int]:
    """
    Reserves after swapping a quote or base amount.

    A quote amount is first converted to reserve units through the peg; a
    base amount is applied to the base reserve directly. The invariant is
    always ``sqrt_k**2``.

    Returns:
        (new_quote_asset_reserve, new_base_asset_reserve), reserve precision

    Raises:
        InvalidSwapAmountError: swap_amount < 0
        VammMathError: zero peg, or a REMOVE that drains the reserve
    """
    if swap_amount < 0:
        raise InvalidSwapAmountError(swap_amount)

    if input_asset_type is AssetType.QUOTE:
        reserve_amount = quote_to_reserve_amount(swap_amount, amm.peg_multiplier, config=config)
        new_quote, new_base = swap_output_for_amm(
            amm,
            reserve_in=amm.quote_asset_reserve,
            swap_amount=reserve_amount,
            direction=swap_direction,
            asset_type=input_asset_type,
            config=config,
        )
    elif input_asset_type is AssetType.BASE:
        new_base, new_quote = swap_output_for_amm(
            amm,
            reserve_in=amm.base_asset_reserve,
            swap_amount=swap_amount,
            direction=swap_direction,
            asset_type=input_asset_type,
            config=config,
        )
    else:
        raise ValueError(f"unsupported input asset type: {input_asset_type!r}")

    return new_quote, new_base
