"""Snapshot construction, validation and serialization.

The account layer hands the core plain mappings (decoded account data or YAML
fixtures); this module turns them into frozen `AMM` / `Market` values.

Round-trip property (tested): `market_from_dict(market_to_dict(m)) == m`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from .types import AMM, Market, OracleSource

logger = logging.getLogger(__name__)

# Auto-derived from dataclass field definitions (single source of truth).
AMM_FIELD_NAMES: tuple[str, ...] = tuple(AMM.__dataclass_fields__)
MARKET_FIELD_NAMES: tuple[str, ...] = tuple(Market.__dataclass_fields__)

# Fields without dataclass defaults must be present in every snapshot.
_AMM_REQUIRED: tuple[str, ...] = ("base_asset_reserve", "quote_asset_reserve", "sqrt_k", "peg_multiplier")


def _require_int(d: Mapping[str, Any], name: str) -> int:
    val = d[name]
    if isinstance(val, bool) or not isinstance(val, int):
        raise TypeError(f"field {name!r} must be int, got {type(val).__name__}")
    return int(val)  # normalize int subclasses


def _parse_oracle_source(val: Any) -> OracleSource:
    if isinstance(val, OracleSource):
        return val
    if not isinstance(val, str):
        raise TypeError(f"oracle_source must be a string, got {type(val).__name__}")
    try:
        return OracleSource(val.lower())
    except ValueError:
        raise ValueError(f"unknown oracle_source: {val!r}") from None


def amm_from_dict(d: Mapping[str, Any]) -> AMM:
    """Deserialize an AMM. Raises KeyError on missing required fields."""
    kwargs: dict[str, Any] = {}
    for name in AMM_FIELD_NAMES:
        if name not in d:
            if name in _AMM_REQUIRED:
                raise KeyError(name)
            continue
        if name == "oracle_source":
            kwargs[name] = _parse_oracle_source(d[name])
        else:
            kwargs[name] = _require_int(d, name)
    return AMM(**kwargs)


def amm_to_dict(amm: AMM) -> dict[str, int | str]:
    out: dict[str, int | str] = {}
    for name in AMM_FIELD_NAMES:
        val = getattr(amm, name)
        out[name] = val.value if isinstance(val, OracleSource) else val
    return out


def market_from_dict(d: Mapping[str, Any]) -> Market:
    """Deserialize a Market; the nested ``amm`` mapping is required."""
    amm_raw = d["amm"]
    if not isinstance(amm_raw, Mapping):
        raise TypeError("field 'amm' must be a mapping")
    kwargs: dict[str, Any] = {"amm": amm_from_dict(amm_raw)}
    for name in MARKET_FIELD_NAMES:
        if name == "amm" or name not in d:
            continue
        if name == "initialized":
            if not isinstance(d[name], bool):
                raise TypeError("field 'initialized' must be bool")
            kwargs[name] = d[name]
        else:
            kwargs[name] = _require_int(d, name)
    return Market(**kwargs)


def market_to_dict(market: Market) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for name in MARKET_FIELD_NAMES:
        val = getattr(market, name)
        out[name] = amm_to_dict(val) if isinstance(val, AMM) else val
    return out


def load_market(path: Path) -> Market:
    """Load a market snapshot from a YAML file."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, Mapping):
        raise TypeError("market snapshot YAML must be a mapping")
    return market_from_dict(obj)


# -- Snapshot invariants -----------------------------------------------------

def inv_base_reserve_positive(amm: AMM) -> bool:
    return amm.base_asset_reserve > 0


def inv_quote_reserve_positive(amm: AMM) -> bool:
    return amm.quote_asset_reserve > 0


def inv_peg_positive(amm: AMM) -> bool:
    return amm.peg_multiplier > 0


def inv_sqrt_k_positive(amm: AMM) -> bool:
    return amm.sqrt_k > 0


def inv_constant_product(amm: AMM) -> bool:
    # sqrt_k is the floored root of base * quote
    k = amm.base_asset_reserve * amm.quote_asset_reserve
    return amm.sqrt_k ** 2 <= k < (amm.sqrt_k + 1) ** 2


_INVARIANTS: dict[str, Callable[[AMM], bool]] = {
    "base_reserve_positive": inv_base_reserve_positive,
    "quote_reserve_positive": inv_quote_reserve_positive,
    "peg_positive": inv_peg_positive,
    "sqrt_k_positive": inv_sqrt_k_positive,
    "constant_product": inv_constant_product,
}


def validate_amm(amm: AMM) -> list[str]:
    """Return the ids of violated snapshot invariants (empty = valid)."""
    violations = [name for name, check in _INVARIANTS.items() if not check(amm)]
    if violations:
        logger.warning("AMM snapshot violates invariants: %s", ", ".join(violations))
    return violations
