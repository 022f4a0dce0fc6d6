"""
Curve dispatch for price and swap simulation.

The AMM's oracle source selects the curve. This is the single place that
inspects `oracle_source`; everything else receives a `CurveModel`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Tuple

from ..state.types import AMM, AssetType, OracleSource, SwapDirection
from . import constant_product
from . import squared_product
from .fixed_point import FixedPointConfig

logger = logging.getLogger(__name__)

SwapOutputFn = Callable[..., Tuple[int, int]]
PriceFn = Callable[..., int]
RootLimitFn = Callable[..., int]


@dataclass(frozen=True)
class CurveModel:
    """One price/reserve relationship.

    - ``swap_output(reserve_in, swap_amount, direction, invariant, asset_type, *, config)``
      returns ``(new_reserve_in, new_reserve_out)``.
    - ``price(base_amount, quote_amount, peg_multiplier, *, config)`` returns a
      mark-precision price.
    - ``root_limit_price(limit_price, *, config)`` maps a quoted price onto the
      reserve-ratio price the constant-product inversion works with.
    """

    name: str
    swap_output: SwapOutputFn
    price: PriceFn
    root_limit_price: RootLimitFn


STANDARD_CURVE = CurveModel(
    name="constant_product",
    swap_output=constant_product.calculate_swap_output,
    price=constant_product.calculate_price,
    root_limit_price=constant_product.root_limit_price,
)

SQUARED_CURVE = CurveModel(
    name="squared_product",
    swap_output=squared_product.calculate_swap_output,
    price=squared_product.calculate_price,
    root_limit_price=squared_product.root_limit_price,
)


def curve_for_oracle_source(oracle_source: OracleSource) -> CurveModel:
    if oracle_source is OracleSource.PYTH_SQUARED:
        return SQUARED_CURVE
    if oracle_source in (OracleSource.PYTH, OracleSource.SWITCHBOARD):
        return STANDARD_CURVE
    raise ValueError(f"unsupported oracle_source: {oracle_source!r}")


def curve_for_amm(amm: AMM) -> CurveModel:
    curve = curve_for_oracle_source(amm.oracle_source)
    logger.debug("oracle_source=%s -> curve=%s", amm.oracle_source.value, curve.name)
    return curve


def swap_output_for_amm(
    amm: AMM,
    *,
    reserve_in: int,
    swap_amount: int,
    direction: SwapDirection,
    asset_type: AssetType,
    config: FixedPointConfig,
) -> Tuple[int, int]:
    return curve_for_amm(amm).swap_output(
        reserve_in, swap_amount, direction, amm.invariant, asset_type, config=config,
    )
