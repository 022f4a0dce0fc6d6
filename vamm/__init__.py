"""
vAMM pricing and swap-simulation core.

Pure, integer-only functions that reproduce the on-chain clearing house's
price and reserve arithmetic for quoting and previewing perpetual trades.
"""

from .core import (
    DEFAULT_CONFIG,
    FixedPointConfig,
    calculate_amm_reserves_after_swap,
    calculate_max_base_asset_amount_to_trade,
    calculate_price,
    calculate_terminal_price,
    get_swap_direction,
)
from .errors import (
    InvalidSwapAmountError,
    VammDivisionByZeroError,
    VammError,
    VammMathError,
    VammOverflowError,
    VammUnderflowError,
)
from .state import AMM, AssetType, Market, OracleSource, PositionDirection, SwapDirection

__all__ = [
    "DEFAULT_CONFIG",
    "FixedPointConfig",
    "calculate_amm_reserves_after_swap",
    "calculate_max_base_asset_amount_to_trade",
    "calculate_price",
    "calculate_terminal_price",
    "get_swap_direction",
    "InvalidSwapAmountError",
    "VammDivisionByZeroError",
    "VammError",
    "VammMathError",
    "VammOverflowError",
    "VammUnderflowError",
    "AMM",
    "AssetType",
    "Market",
    "OracleSource",
    "PositionDirection",
    "SwapDirection",
]
