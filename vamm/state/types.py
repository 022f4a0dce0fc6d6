"""Snapshot types for the vAMM core.

All types are frozen dataclasses (immutable snapshots of on-chain accounts).
The core reads them and never writes back; "updates" produce new snapshots
via `dataclasses.replace`.

Units/conventions:
- reserves and `sqrt_k` are AMM-reserve precision (1e13).
- `peg_multiplier` is peg precision (1e3).
- prices and twaps are mark-price precision (1e10).
- fee accumulators are quote precision (1e6).
- `base_asset_amount` is signed (long > 0, short < 0).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique


@unique
class OracleSource(Enum):
    """Oracle feeding the market; also selects the pricing curve."""
    PYTH = "pyth"
    SWITCHBOARD = "switchboard"
    PYTH_SQUARED = "pyth_squared"


@unique
class SwapDirection(Enum):
    """Whether the input-asset reserve grows or shrinks."""
    ADD = "add"
    REMOVE = "remove"


@unique
class AssetType(Enum):
    """Side of the pair the caller's amount is denominated in."""
    QUOTE = "quote"
    BASE = "base"


@unique
class PositionDirection(Enum):
    LONG = "long"
    SHORT = "short"


@dataclass(frozen=True)
class AMM:
    """Virtual reserves and curve parameters of one market."""

    base_asset_reserve: int
    quote_asset_reserve: int
    sqrt_k: int
    peg_multiplier: int
    oracle_source: OracleSource = OracleSource.PYTH

    # Funding / fee accumulators (read by repeg budgeting only)
    cumulative_funding_rate_long: int = 0
    cumulative_funding_rate_short: int = 0
    last_funding_rate: int = 0
    funding_period: int = 3_600
    last_oracle_price_twap: int = 0
    last_mark_price_twap: int = 0
    total_fee: int = 0
    total_fee_minus_distributions: int = 0
    minimum_trade_size: int = 0

    @property
    def invariant(self) -> int:
        """Constant-product value ``sqrt_k**2``."""
        return self.sqrt_k * self.sqrt_k


@dataclass(frozen=True)
class Market:
    """One perpetual market: its AMM plus aggregate open interest."""

    amm: AMM
    base_asset_amount: int = 0
    base_asset_amount_long: int = 0
    base_asset_amount_short: int = 0
    open_interest: int = 0
    initialized: bool = True


@dataclass(frozen=True)
class OraclePriceData:
    """Oracle reading at mark-price precision."""

    price: int
    confidence: int = 0
    delay: int = 0
    has_sufficient_number_of_data_points: bool = True
