"""
Fixed-point integer arithmetic for the vAMM core.

Every quantity is a plain Python int carrying an implicit decimal scale. The
on-chain program truncates on every division, so this module never rounds:
division is Python's `//` (floor toward -inf), and results are checked
against the 128-bit unsigned width the program stores them in.

Scales (defaults):
- mark price:   1e10
- peg:          1e3
- AMM reserve:  1e13
- quote asset:  1e6
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import VammDivisionByZeroError, VammOverflowError, VammUnderflowError

U128_MAX: int = (1 << 128) - 1


@dataclass(frozen=True)
class FixedPointConfig:
    """Scale constants shared by every pricing and swap computation."""

    mark_price_precision: int = 10_000_000_000  # 1e10
    peg_precision: int = 1_000  # 1e3
    amm_reserve_precision: int = 10_000_000_000_000  # 1e13
    quote_precision: int = 1_000_000  # 1e6
    price_spread_precision: int = 10_000  # 1e4
    fee_share_numerator: int = 1
    fee_share_denominator: int = 2
    one_hour: int = 3_600

    @property
    def amm_to_quote_precision_ratio(self) -> int:
        return self.amm_reserve_precision // self.quote_precision

    @property
    def amm_times_peg_to_quote_precision_ratio(self) -> int:
        """Converts quote units into peg-adjusted reserve units (and back)."""
        return self.amm_reserve_precision * self.peg_precision // self.quote_precision

    @property
    def price_to_peg_precision_ratio(self) -> int:
        return self.mark_price_precision // self.peg_precision


DEFAULT_CONFIG = FixedPointConfig()

CONFIG_FIELD_NAMES: tuple[str, ...] = tuple(f.name for f in fields(FixedPointConfig))


def config_from_dict(d: Mapping[str, Any]) -> FixedPointConfig:
    """Build a config from a mapping. Missing keys keep their defaults."""
    unknown = sorted(set(d) - set(CONFIG_FIELD_NAMES))
    if unknown:
        raise ValueError(f"unknown fixed-point config keys: {', '.join(unknown)}")
    kwargs: dict[str, int] = {}
    for name, val in d.items():
        if isinstance(val, bool) or not isinstance(val, int):
            raise ValueError(f"config value {name!r} must be an int, got {type(val).__name__}")
        if val <= 0:
            raise ValueError(f"config value {name!r} must be positive: {val}")
        kwargs[name] = int(val)
    return FixedPointConfig(**kwargs)


def load_config(path: Path) -> FixedPointConfig:
    """Load a config from a YAML file whose top level is a mapping."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return DEFAULT_CONFIG
    if not isinstance(obj, Mapping):
        raise TypeError("fixed-point config YAML must be a mapping")
    return config_from_dict(obj)


# -- Integer helpers ---------------------------------------------------------

def floor_div(a: int, b: int) -> int:
    """``a // b``; a zero divisor is fatal (corrupted reserve/peg/price)."""
    if b == 0:
        raise VammDivisionByZeroError(f"division by zero: {a} // 0")
    return a // b


def trunc_div(a: int, b: int) -> int:
    """Signed division truncating toward zero (on-chain i128 semantics)."""
    if b == 0:
        raise VammDivisionByZeroError(f"division by zero: {a} / 0")
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def checked_sub_unsigned(a: int, b: int) -> int:
    if b > a:
        raise VammUnderflowError(f"unsigned subtraction underflow: {a} - {b}")
    return a - b


def to_u128(x: int) -> int:
    """Return *x* unchanged if it fits an unsigned 128-bit integer."""
    if x < 0:
        raise VammUnderflowError(f"value is negative: {x}")
    if x > U128_MAX:
        raise VammOverflowError(f"value does not fit u128: {x}")
    return x


def integer_sqrt(n: int) -> int:
    """
    Floor of the true square root of *n*.

    The result carries half the scale exponent of the input: the square root
    of a reserve-squared quantity is a reserve-precision quantity.
    """
    if n < 0:
        raise ValueError(f"n must be non-negative: {n}")
    return math.isqrt(n)


def integer_cbrt(n: int) -> int:
    """Floor of the true cube root of *n* (integer Newton from above)."""
    if n < 0:
        raise ValueError(f"n must be non-negative: {n}")
    if n < 2:
        return n
    x = 1 << ((n.bit_length() + 2) // 3)
    while True:
        y = (2 * x + n // (x * x)) // 3
        if y >= x:
            return x
        x = y
