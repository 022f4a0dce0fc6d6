"""
Repeg math: peg targets, budgets, costs and validity checks.

A repeg moves the peg multiplier so the vAMM's price tracks the oracle. The
clearing house pays for it out of the fee pool; these functions compute what a
repeg *would* cost and whether it would be allowed. Inputs are never mutated:
`adjust_peg_cost` returns a new Market snapshot.

Signed quantities (spreads, funding excess) divide with truncation toward zero
(`trunc_div`), matching the program's i128 arithmetic; unsigned ones floor.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from ..state.types import AssetType, Market, OraclePriceData, SwapDirection
from . import constant_product
from .fixed_point import (
    DEFAULT_CONFIG,
    FixedPointConfig,
    checked_sub_unsigned,
    floor_div,
    to_u128,
    trunc_div,
)
from .position import calculate_base_asset_value_and_pnl
from .price import calculate_mark_price, calculate_terminal_price


@dataclass(frozen=True)
class RepegValidity:
    oracle_is_valid: bool
    direction_valid: bool
    profitability_valid: bool
    price_impact_valid: bool
    oracle_terminal_divergence_pct_after: int

    @property
    def ok(self) -> bool:
        return (
            self.oracle_is_valid
            and self.direction_valid
            and self.profitability_valid
            and self.price_impact_valid
        )


def calculate_repeg_validity(
    market: Market,
    oracle_price_data: OraclePriceData,
    oracle_is_valid: bool,
    terminal_price_before: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> RepegValidity:
    """
    Check a (hypothetically) repegged market against the oracle.

    - direction: the terminal price may only move toward the oracle.
    - profitability: the terminal price may not cross into the oracle's
      confidence band.
    - price impact: the mark price may not leave the confidence band on the
      far side.

    An invalid oracle fails every check.
    """
    oracle_price = oracle_price_data.price
    oracle_conf = oracle_price_data.confidence
    oracle_price_u128 = to_u128(oracle_price)

    terminal_price_after = calculate_terminal_price(market, config=config)
    spread_after = oracle_price - terminal_price_after
    divergence_pct_after = trunc_div(spread_after * config.price_spread_precision, oracle_price)

    if not oracle_is_valid:
        return RepegValidity(False, False, False, False, divergence_pct_after)

    direction_valid = True
    profitability_valid = True
    price_impact_valid = True

    mark_price_after = calculate_mark_price(market, config=config)
    conf_band_top = oracle_price_u128 + oracle_conf
    conf_band_bottom = checked_sub_unsigned(oracle_price_u128, oracle_conf)

    if oracle_price_u128 > terminal_price_after:
        # terminal may only move up
        if terminal_price_after < terminal_price_before:
            direction_valid = False
        if conf_band_bottom < terminal_price_after:
            profitability_valid = False
        if mark_price_after > conf_band_top:
            price_impact_valid = False
    elif oracle_price_u128 < terminal_price_after:
        # terminal may only move down
        if terminal_price_after > terminal_price_before:
            direction_valid = False
        if conf_band_top > terminal_price_after:
            profitability_valid = False
        if mark_price_after < conf_band_bottom:
            price_impact_valid = False

    return RepegValidity(
        oracle_is_valid=True,
        direction_valid=direction_valid,
        profitability_valid=profitability_valid,
        price_impact_valid=price_impact_valid,
        oracle_terminal_divergence_pct_after=divergence_pct_after,
    )


def calculate_peg_from_target_price(
    quote_asset_reserve: int,
    base_asset_reserve: int,
    target_price: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> int:
    """Peg at which the current reserves price at *target_price*."""
    peg = floor_div(floor_div(target_price * base_asset_reserve, quote_asset_reserve), config.price_to_peg_precision_ratio)
    return to_u128(peg)


def adjust_peg_cost(
    market: Market,
    new_peg_candidate: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> Tuple[Market, int]:
    """
    Market with the candidate peg applied, and the cost of applying it.

    Cost is the change in value of the market's net position when the peg
    moves (positive = the clearing house pays).
    """
    amm = market.amm
    if new_peg_candidate == amm.peg_multiplier:
        return market, 0

    current_net_value, _ = calculate_base_asset_value_and_pnl(market.base_asset_amount, 0, amm, config=config)
    repegged_amm = replace(amm, peg_multiplier=new_peg_candidate)
    _, cost = calculate_base_asset_value_and_pnl(
        market.base_asset_amount, current_net_value, repegged_amm, config=config,
    )
    return replace(market, amm=repegged_amm), cost


def calculate_budgeted_peg(
    market: Market,
    budget: int,
    current_price: int,
    target_price: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> Tuple[int, int, Market]:
    """
    Peg multiplier whose repeg costs no more than *budget* (quote precision).

    Never overshoots the optimal peg for *target_price*; pegs that move
    against the net market position are free and jump straight to optimal.

    Returns:
        (candidate_peg, candidate_cost, repegged_market)
    """
    amm = market.amm
    direction = SwapDirection.ADD if market.base_asset_amount > 0 else SwapDirection.REMOVE
    _new_base, new_quote = constant_product.calculate_swap_output(
        amm.base_asset_reserve,
        abs(market.base_asset_amount),
        direction,
        amm.invariant,
        AssetType.BASE,
        config=config,
    )

    optimal_peg = calculate_peg_from_target_price(
        amm.quote_asset_reserve, amm.base_asset_reserve, target_price, config=config,
    )

    if new_quote != amm.quote_asset_reserve:
        delta_peg_sign = 1 if amm.quote_asset_reserve > new_quote else -1
        delta_quote_reserve = abs(amm.quote_asset_reserve - new_quote)

        delta_peg_multiplier = floor_div(
            budget * config.mark_price_precision,
            delta_quote_reserve // config.amm_to_quote_precision_ratio,
        )
        delta_peg_precision = delta_peg_multiplier * config.peg_precision // config.mark_price_precision

        if delta_peg_sign > 0:
            new_budget_peg = amm.peg_multiplier + delta_peg_precision
        else:
            new_budget_peg = checked_sub_unsigned(amm.peg_multiplier, delta_peg_precision)

        if (delta_peg_sign > 0 and optimal_peg < new_budget_peg) or (
            delta_peg_sign < 0 and optimal_peg > new_budget_peg
        ):
            full_budget_peg = optimal_peg
        else:
            full_budget_peg = new_budget_peg
    else:
        full_budget_peg = optimal_peg

    if (current_price > target_price and full_budget_peg < optimal_peg) or (
        current_price < target_price and full_budget_peg > optimal_peg
    ):
        candidate_peg = optimal_peg
    else:
        candidate_peg = full_budget_peg

    repegged_market, candidate_cost = adjust_peg_cost(market, candidate_peg, config=config)
    return candidate_peg, candidate_cost, repegged_market


# -- Fee pool / budget -------------------------------------------------------

def total_fee_lower_bound(market: Market, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    """Share of lifetime fees reserved for the clearing house."""
    return market.amm.total_fee * config.fee_share_numerator // config.fee_share_denominator


def calculate_fee_pool(market: Market, *, config: FixedPointConfig = DEFAULT_CONFIG) -> int:
    """Fees available for funding/repeg beyond the reserved share."""
    lower_bound = total_fee_lower_bound(market, config=config)
    if market.amm.total_fee_minus_distributions > lower_bound:
        return market.amm.total_fee_minus_distributions - lower_bound
    return 0


def calculate_expected_funding_excess(
    market: Market,
    oracle_price: int,
    precomputed_mark_price: int,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> int:
    amm = market.amm
    oracle_mark_spread = precomputed_mark_price - oracle_price
    oracle_mark_twap_spread = amm.last_mark_price_twap - amm.last_oracle_price_twap
    period_adjustment = trunc_div(24 * config.one_hour, max(config.one_hour, amm.funding_period))

    excess = trunc_div(
        market.base_asset_amount * (oracle_mark_spread - oracle_mark_twap_spread),
        period_adjustment,
    )
    return trunc_div(excess, config.mark_price_precision * config.amm_reserve_precision // config.quote_precision)


def calculate_pool_budget(
    market: Market,
    precomputed_mark_price: int,
    oracle_price_data: OraclePriceData,
    *,
    config: FixedPointConfig = DEFAULT_CONFIG,
) -> int:
    """
    Budget for a single repeg: the lesser of
    1) one quote unit,
    2) a tenth of the positive funding excess,
    3) a hundredth of the fee pool.
    """
    fee_pool = calculate_fee_pool(market, config=config)
    expected_funding_excess = calculate_expected_funding_excess(
        market, oracle_price_data.price, precomputed_mark_price, config=config,
    )
    return min(
        config.quote_precision,
        min(max(0, expected_funding_excess) // 10, fee_pool // 100),
    )
