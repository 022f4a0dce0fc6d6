"""
Core vAMM algorithms
"""

from .curve_dispatch import SQUARED_CURVE, STANDARD_CURVE, CurveModel, curve_for_amm, curve_for_oracle_source
from .fixed_point import DEFAULT_CONFIG, FixedPointConfig, config_from_dict, integer_cbrt, integer_sqrt, load_config
from .position import calculate_base_asset_value_and_pnl
from .price import NO_LIQUIDITY_PRICE, calculate_mark_price, calculate_price, calculate_terminal_price
from .repeg import (
    RepegValidity,
    adjust_peg_cost,
    calculate_budgeted_peg,
    calculate_peg_from_target_price,
    calculate_pool_budget,
    calculate_repeg_validity,
)
from .swap import calculate_amm_reserves_after_swap, get_swap_direction
from .trade_bounds import calculate_max_base_asset_amount_to_trade

__all__ = [
    "SQUARED_CURVE",
    "STANDARD_CURVE",
    "CurveModel",
    "curve_for_amm",
    "curve_for_oracle_source",
    "DEFAULT_CONFIG",
    "FixedPointConfig",
    "config_from_dict",
    "integer_cbrt",
    "integer_sqrt",
    "load_config",
    "calculate_base_asset_value_and_pnl",
    "NO_LIQUIDITY_PRICE",
    "calculate_mark_price",
    "calculate_price",
    "calculate_terminal_price",
    "RepegValidity",
    "adjust_peg_cost",
    "calculate_budgeted_peg",
    "calculate_peg_from_target_price",
    "calculate_pool_budget",
    "calculate_repeg_validity",
    "calculate_amm_reserves_after_swap",
    "get_swap_direction",
    "calculate_max_base_asset_amount_to_trade",
]
