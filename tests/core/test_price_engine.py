"""Tests for vamm/core/price.py and vamm/core/trade_bounds.py."""

from __future__ import annotations

import math

import pytest

from vamm.core.price import NO_LIQUIDITY_PRICE, calculate_mark_price, calculate_price, calculate_terminal_price
from vamm.core.trade_bounds import calculate_max_base_asset_amount_to_trade
from vamm.errors import VammDivisionByZeroError
from vamm.state import AMM, Market, OracleSource, PositionDirection


def _amm(base: int = 10**19, quote: int = 10**19, peg: int = 1_000, **kw) -> AMM:
    sqrt_k = math.isqrt(base * quote)
    return AMM(base_asset_reserve=base, quote_asset_reserve=quote, sqrt_k=sqrt_k, peg_multiplier=peg, **kw)


def _mark(amm: AMM) -> int:
    return calculate_price(amm, amm.base_asset_reserve, amm.quote_asset_reserve, amm.peg_multiplier)


# ---------------------------------------------------------------------------
# calculate_price
# ---------------------------------------------------------------------------

class TestCalculatePrice:
    def test_standard(self):
        assert _mark(_amm()) == 10**10
        assert _mark(_amm(base=2 * 10**19, quote=5 * 10**18)) == 2_500_000_000

    def test_squared(self):
        amm = _amm(base=2 * 10**19, quote=5 * 10**18, oracle_source=OracleSource.PYTH_SQUARED)
        assert _mark(amm) == 625_000_000

    @pytest.mark.parametrize("source", list(OracleSource))
    @pytest.mark.parametrize("peg", [0, 1, 1_000, 10**9])
    def test_zero_base_returns_sentinel(self, source: OracleSource, peg: int):
        amm = _amm(oracle_source=source)
        assert calculate_price(amm, 0, 10**19, peg) == NO_LIQUIDITY_PRICE
        assert calculate_price(amm, 0, 0, peg) == 0

    def test_mark_price(self):
        market = Market(amm=_amm(peg=21_500))
        assert calculate_mark_price(market) == 215_000_000_000


# ---------------------------------------------------------------------------
# calculate_terminal_price
# ---------------------------------------------------------------------------

class TestTerminalPrice:
    def test_flat_market_equals_mark(self):
        for amm in (_amm(), _amm(base=2 * 10**19, quote=5 * 10**18, peg=3_000)):
            market = Market(amm=amm, base_asset_amount=0)
            assert calculate_terminal_price(market) == _mark(amm)

    def test_net_long_closes_short(self):
        # closing 1e19 long adds base: reserves 2e19 / 5e18 -> price 0.25
        market = Market(amm=_amm(), base_asset_amount=10**19)
        assert calculate_terminal_price(market) == 2_500_000_000

    def test_net_short_closes_long(self):
        # closing 5e18 short removes base: reserves 5e18 / 2e19 -> price 4.0
        market = Market(amm=_amm(), base_asset_amount=-5 * 10**18)
        assert calculate_terminal_price(market) == 40_000_000_000

    def test_terminal_below_mark_for_net_long(self):
        market = Market(amm=_amm(peg=1_500), base_asset_amount=10**17)
        assert calculate_terminal_price(market) < calculate_mark_price(market)

    def test_squared_market(self):
        market = Market(amm=_amm(oracle_source=OracleSource.PYTH_SQUARED), base_asset_amount=10**19)
        # root price 0.25 squared
        assert calculate_terminal_price(market) == 625_000_000

    def test_net_short_larger_than_reserve_is_fatal(self):
        market = Market(amm=_amm(), base_asset_amount=-(10**19))
        with pytest.raises(VammDivisionByZeroError):
            calculate_terminal_price(market)


# ---------------------------------------------------------------------------
# calculate_max_base_asset_amount_to_trade
# ---------------------------------------------------------------------------

class TestMaxBaseAssetAmountToTrade:
    @pytest.mark.parametrize(
        "base,quote,peg",
        [
            (10**19, 10**19, 1_000),
            (2 * 10**19, 5 * 10**18, 1_000),
            (10**19, 10**19, 2_000),
        ],
    )
    def test_limit_at_mark_is_zero_size(self, base: int, quote: int, peg: int):
        amm = _amm(base=base, quote=quote, peg=peg)
        assert calculate_max_base_asset_amount_to_trade(amm, _mark(amm)) == (0, PositionDirection.LONG)

    @pytest.mark.parametrize(
        "base,quote,peg,expected_size",
        [
            (3 * 10**19, 10**19, 1_000, 1_499_999_999),
            (7 * 10**18, 11 * 10**18, 21_500, 1_479_915),
        ],
    )
    def test_limit_at_floored_mark(self, base: int, quote: int, peg: int, expected_size: int):
        # The mark is floored, so inverting it asks for a slightly lower price:
        # a small SHORT size that leaves the floored mark where it was.
        amm = _amm(base=base, quote=quote, peg=peg)
        limit = _mark(amm)
        size, direction = calculate_max_base_asset_amount_to_trade(amm, limit)
        assert (size, direction) == (expected_size, PositionDirection.SHORT)

        new_base = amm.base_asset_reserve + size
        after = _amm(base=new_base, quote=amm.invariant // new_base, peg=peg)
        assert 0 <= limit - _mark(after) <= 1

    def test_zero_size_defaults_to_long(self):
        # The no-op result carries LONG by convention, whatever side the caller is on.
        size, direction = calculate_max_base_asset_amount_to_trade(_amm(), 10**10)
        assert size == 0
        assert direction is PositionDirection.LONG

    def test_higher_limit_is_long(self):
        # price 4.0 -> base reserve sqrt(1e38 / 4) = 5e18
        assert calculate_max_base_asset_amount_to_trade(_amm(), 4 * 10**10) == (5 * 10**18, PositionDirection.LONG)

    def test_lower_limit_is_short(self):
        # price 0.25 -> base reserve sqrt(1e38 * 4) = 2e19
        assert calculate_max_base_asset_amount_to_trade(_amm(), 2_500_000_000) == (10**19, PositionDirection.SHORT)

    def test_floor_order(self):
        # 1e51 / 3e10 = 3.33e40 -> / 1e3 -> isqrt floors
        size, direction = calculate_max_base_asset_amount_to_trade(_amm(), 3 * 10**10)
        assert direction is PositionDirection.LONG
        assert size == 10**19 - math.isqrt(10**51 // (3 * 10**10) // 1_000)

    def test_squared_market_inverts_square(self):
        amm = _amm(oracle_source=OracleSource.PYTH_SQUARED)
        assert calculate_max_base_asset_amount_to_trade(amm, _mark(amm)) == (0, PositionDirection.LONG)
        # squared limit 4.0 is root price 2.0 -> base reserve sqrt(1e38 / 2)
        size, direction = calculate_max_base_asset_amount_to_trade(amm, 4 * 10**10)
        assert direction is PositionDirection.LONG
        assert size == 10**19 - math.isqrt(5 * 10**37)

    def test_squared_limit_at_floored_mark(self):
        # root 3333333333 squares to 1111111110.8 -> 1111111110, whose root is 3333333331
        amm = _amm(base=3 * 10**19, quote=10**19, oracle_source=OracleSource.PYTH_SQUARED)
        limit = _mark(amm)
        assert limit == 1_111_111_110
        size, direction = calculate_max_base_asset_amount_to_trade(amm, limit)
        assert (size, direction) == (10_500_000_005, PositionDirection.SHORT)

        new_base = amm.base_asset_reserve + size
        after = _mark(_amm(base=new_base, quote=amm.invariant // new_base, oracle_source=OracleSource.PYTH_SQUARED))
        root = math.isqrt(limit * 10**10)
        assert after == 1_111_111_108
        assert 0 <= limit - after <= 4 * root // 10**10 + 1

    def test_reaching_the_limit(self):
        amm = _amm()
        size, _ = calculate_max_base_asset_amount_to_trade(amm, 4 * 10**10)
        after = _amm(base=amm.base_asset_reserve - size, quote=amm.invariant // (amm.base_asset_reserve - size))
        assert _mark(after) == 4 * 10**10

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit_rejected(self, limit: int):
        with pytest.raises(ValueError):
            calculate_max_base_asset_amount_to_trade(_amm(), limit)
