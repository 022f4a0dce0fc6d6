"""
Read-only account snapshots consumed by the vAMM core
"""

from .snapshot import (
    amm_from_dict,
    amm_to_dict,
    load_market,
    market_from_dict,
    market_to_dict,
    validate_amm,
)
from .types import AMM, AssetType, Market, OraclePriceData, OracleSource, PositionDirection, SwapDirection

__all__ = [
    "AMM",
    "AssetType",
    "Market",
    "OraclePriceData",
    "OracleSource",
    "PositionDirection",
    "SwapDirection",
    "amm_from_dict",
    "amm_to_dict",
    "load_market",
    "market_from_dict",
    "market_to_dict",
    "validate_amm",
]
