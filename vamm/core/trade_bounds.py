"""
Maximum tradable size before a limit price is reached.

Inverts the constant-product curve: the base reserve that realizes price P is

    base' = isqrt(k * MARK_PRICE_PRECISION * peg / P / PEG_PRECISION)

with floor division applied in exactly that order.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..state.types import AMM, PositionDirection
from .curve_dispatch import curve_for_amm
from .fixed_point import DEFAULT_CONFIG, FixedPointConfig, floor_div, integer_sqrt

logger = logging.getLogger(__name__)


def calculate_max_base_asset_amount_to_trade(
    amm: AMM,
    limit_price: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> Tuple[int, PositionDirection]:
    """
    Base amount (reserve precision) tradable before the mark price hits *limit_price*.

    Returns:
        (size, direction): SHORT when the base reserve must grow (price falls),
        LONG when it must shrink. A zero size is reported as (0, LONG).
    """
    if limit_price <= 0:
        raise ValueError(f"limit_price must be positive: {limit_price}")

    root_price = curve_for_amm(amm).root_limit_price(limit_price, config=config)
    scaled = amm.invariant * config.mark_price_precision * amm.peg_multiplier
    new_base_reserve_squared = floor_div(floor_div(scaled, root_price), config.peg_precision)
    new_base_reserve = integer_sqrt(new_base_reserve_squared)

    if new_base_reserve > amm.base_asset_reserve:
        return new_base_reserve - amm.base_asset_reserve, PositionDirection.SHORT
    if new_base_reserve < amm.base_asset_reserve:
        return amm.base_asset_reserve - new_base_reserve, PositionDirection.LONG
    # No-op trade; LONG is the conventional direction for a zero size.
    logger.debug("trade size too small: limit_price=%d already at mark", limit_price)
    return 0, PositionDirection.LONG
