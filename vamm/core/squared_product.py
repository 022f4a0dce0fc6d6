"""
Squared curve (markets whose oracle source is PYTH_SQUARED).

The market quotes the *square* of the reserve-ratio price:

    price_sq = price_cp * price_cp / MARK_PRICE_PRECISION

Reserves still satisfy base * quote == sqrt_k**2. What changes is how a
quote-denominated amount moves the quote reserve: the amount is notional at the
squared price, so the reserve moves along the integral of that price. With
base = k / quote the notional between two quote reserves is
(quote_1**3 - quote_0**3) / (3 * k), which gives

    new_quote = floor(cbrt(quote**3 +/- 3 * invariant * amount))

The mapping depends only on the end points, so an ADD of x followed by a
REMOVE of x lands back at the start up to the cube-root floor:

    0 <= quote_0 - quote_2 <= 1 + (3*q1**2 + 3*q1 + 1) // (3*q2**2)

(two units while the swap is small against the reserve). Base-denominated
swaps are unaffected by the squaring.
"""

from __future__ import annotations

from typing import Tuple

from ..state.types import AssetType, SwapDirection
from . import constant_product
from .fixed_point import DEFAULT_CONFIG, FixedPointConfig, checked_sub_unsigned, floor_div, integer_cbrt, integer_sqrt, to_u128


def quote_reserve_after(reserve_in: int, swap_amount: int, direction: SwapDirection, invariant: int) -> int:
    """Quote reserve after moving *swap_amount* of squared-price notional."""
    cubed = reserve_in ** 3
    notional = 3 * invariant * swap_amount
    if direction is SwapDirection.ADD:
        return integer_cbrt(cubed + notional)
    if direction is SwapDirection.REMOVE:
        return integer_cbrt(checked_sub_unsigned(cubed, notional))
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
    Reserves after a swap against the squared curve.

    Returns:
        (new_reserve_in, new_reserve_out)

    Raises:
        VammUnderflowError: REMOVE of more notional than the reserve holds
        VammDivisionByZeroError: the input reserve is drained to zero
    """
    if asset_type is AssetType.BASE:
        new_reserve_in = constant_product.apply_swap_amount(reserve_in, swap_amount, direction)
    elif asset_type is AssetType.QUOTE:
        new_reserve_in = quote_reserve_after(reserve_in, swap_amount, direction, invariant)
    else:
        raise ValueError(f"unsupported asset type: {asset_type!r}")
    new_reserve_in = to_u128(new_reserve_in)
    new_reserve_out = to_u128(floor_div(invariant, new_reserve_in))
    return new_reserve_in, new_reserve_out


def calculate_price(
    base_asset_amount: int,
    quote_asset_amount: int,
    peg_multiplier: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> int:
    price_cp = constant_product.calculate_price(
        base_asset_amount, quote_asset_amount, peg_multiplier, config=config,
    )
    return (price_cp * price_cp) // config.mark_price_precision


def root_limit_price(limit_price: int, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    """
    Map a squared-market limit price back to the reserve-ratio domain.

    The squared price is floored, so the root can sit up to about
    ``MARK_PRICE_PRECISION / (2 * root)`` units below the market's own root
    price; solving at the market's mark therefore yields a small non-zero size.
    """
    return integer_sqrt(limit_price * config.mark_price_precision)
