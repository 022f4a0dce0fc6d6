"""Tests for vamm/core/position.py — valuing a position by simulating its close."""

from __future__ import annotations

import pytest

from vamm.core.position import (
    calculate_base_asset_value_and_pnl,
    calculate_pnl,
    calculate_quote_asset_amount_swapped,
    reserve_to_quote_amount,
)
from vamm.errors import VammUnderflowError
from vamm.state import AMM, SwapDirection

AMM_1 = AMM(base_asset_reserve=10**19, quote_asset_reserve=10**19, sqrt_k=10**19, peg_multiplier=1_000)


def test_reserve_to_quote_amount() -> None:
    # 1e15 reserve units at peg 1.000 -> 1e15 * 1e3 / 1e10 = 1e8 (100 quote)
    assert reserve_to_quote_amount(10**15, 1_000) == 100_000_000


class TestQuoteAssetAmountSwapped:
    def test_add_is_reserve_decrease(self):
        assert calculate_quote_asset_amount_swapped(10**19, 10**19 - 10**15, SwapDirection.ADD, 1_000) == 100_000_000

    def test_remove_costs_one_extra_unit(self):
        assert calculate_quote_asset_amount_swapped(10**19, 10**19 + 10**15, SwapDirection.REMOVE, 1_000) == 100_000_001

    def test_wrong_way_move_underflows(self):
        with pytest.raises(VammUnderflowError):
            calculate_quote_asset_amount_swapped(10**19, 10**19 + 1, SwapDirection.ADD, 1_000)


class TestPnl:
    def test_long(self):
        assert calculate_pnl(110, 100, SwapDirection.ADD) == 10

    def test_short(self):
        assert calculate_pnl(110, 100, SwapDirection.REMOVE) == -10


class TestBaseAssetValueAndPnl:
    def test_flat(self):
        assert calculate_base_asset_value_and_pnl(0, 123, AMM_1) == (0, 0)

    def test_long(self):
        # close by adding 1e18 base: quote 1e38 / 1.1e19 = 9090909090909090909
        # change 909090909090909091 -> * 1e3 / 1e10 = 90909090909
        value, pnl = calculate_base_asset_value_and_pnl(10**18, 100_000_000_000, AMM_1)
        assert value == 90_909_090_909
        assert pnl == 90_909_090_909 - 100_000_000_000

    def test_short(self):
        # close by removing 1e18 base: quote 1e38 / 9e18 = 11111111111111111111
        # change 1111111111111111111 -> 111111111111, +1 for taking base out
        value, pnl = calculate_base_asset_value_and_pnl(-(10**18), 100_000_000_000, AMM_1)
        assert value == 111_111_111_112
        assert pnl == 100_000_000_000 - 111_111_111_112
