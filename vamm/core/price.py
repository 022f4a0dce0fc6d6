"""
Price derivation from reserves.

`calculate_price` returns NO_LIQUIDITY_PRICE (0) when the base amount is zero.
That value means "undefined", not a traded price of zero.
"""

from __future__ import annotations

from ..state.types import AMM, AssetType, Market, PositionDirection
from .curve_dispatch import curve_for_amm
from .fixed_point import DEFAULT_CONFIG, FixedPointConfig, to_u128
from .swap import calculate_amm_reserves_after_swap, get_swap_direction

NO_LIQUIDITY_PRICE: int = 0


def calculate_price(
    amm: AMM,
    base_asset_amount: int,
    quote_asset_amount: int,
    peg_multiplier: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> int:
    """Price (mark precision) for arbitrary base/quote amounts of equal precision."""
    if abs(base_asset_amount) <= 0:
        return NO_LIQUIDITY_PRICE
    price = curve_for_amm(amm).price(base_asset_amount, quote_asset_amount, peg_multiplier, config=config)
    return to_u128(price)


def calculate_mark_price(market: Market, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    amm = market.amm
    return calculate_price(
        amm, amm.base_asset_reserve, amm.quote_asset_reserve, amm.peg_multiplier, config=config,
    )


def calculate_terminal_price(market: Market, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    """
    Price if the market's whole net position closed against the AMM now.

    A net long closes by going short (base flows back into the AMM), a net
    short or flat market by going long.
    """
    direction_to_close = PositionDirection.SHORT if market.base_asset_amount > 0 else PositionDirection.LONG
    new_quote, new_base = calculate_amm_reserves_after_swap(
        market.amm,
        AssetType.BASE,
        abs(market.base_asset_amount),
        get_swap_direction(AssetType.BASE, direction_to_close),
        config=config,
    )
    return calculate_price(market.amm, new_base, new_quote, market.amm.peg_multiplier, config=config)
