"""Tests for moving-average and MACD crossover detection."""

from __future__ import annotations

import numpy as np
import pytest

from analysis.turning_points.crossovers import (
    detect_ma_crossover,
    detect_macd_crossovers,
    find_crosses,
    select_regime_start,
)
from factories import day_ts, make_macd, make_points


def _ma_pair(fast_values: list[float], slow_value: float = 100.0):
    return make_points(fast_values), make_points([slow_value] * len(fast_values))


# ---------------------------------------------------------------------------
# find_crosses
# ---------------------------------------------------------------------------

class TestFindCrosses:

    def test_upward_cross_from_equal(self):
        up, down = find_crosses([1.0, 2.0, 3.0], [2.0, 2.0, 2.0])
        assert list(up) == [2]
        assert list(down) == []

    def test_zero_line(self):
        up, down = find_crosses([-1.0, 1.0, -1.0], 0.0)
        assert list(up) == [1]
        assert list(down) == [2]

    def test_no_sign_change(self):
        up, down = find_crosses([5.0, 6.0, 7.0], [1.0, 1.0, 1.0])
        assert up.size == 0
        assert down.size == 0

    def test_single_sample(self):
        up, down = find_crosses([1.0], [0.0])
        assert up.size == 0
        assert down.size == 0


# ---------------------------------------------------------------------------
# select_regime_start
# ---------------------------------------------------------------------------

class TestSelectRegimeStart:

    def test_no_death_cross_uses_first_golden(self):
        assert select_regime_start([10, 20, 30], []) == 10

    def test_oldest_golden_after_latest_death(self):
        assert select_regime_start([10, 30, 50], [20, 40]) == 50

    def test_falls_back_to_latest_golden(self):
        assert select_regime_start([1, 2], [5]) == 2

    def test_no_golden(self):
        assert select_regime_start([], [5]) is None


# ---------------------------------------------------------------------------
# detect_ma_crossover
# ---------------------------------------------------------------------------

class TestDetectMACrossover:

    def test_single_golden_cross(self):
        # SMA-50 crosses above SMA-200 once, on day 220, and stays above
        fast, slow = _ma_pair([99.0 if i < 220 else 101.0 for i in range(300)])
        result = detect_ma_crossover(fast, slow)
        assert result.state == "bullish"
        assert result.golden_cross == day_ts(220)
        assert result.death_cross is None

    def test_regime_start_after_latest_death(self):
        values = []
        for i in range(100):
            if i < 10 or 20 <= i < 30 or 40 <= i < 50:
                values.append(99.0)
            else:
                values.append(101.0)
        fast, slow = _ma_pair(values)
        result = detect_ma_crossover(fast, slow)
        assert result.golden_crosses == [day_ts(10), day_ts(30), day_ts(50)]
        assert result.death_crosses == [day_ts(20), day_ts(40)]
        assert result.golden_cross == day_ts(50)
        assert result.death_cross == day_ts(40)

    def test_touch_without_break_keeps_original_regime(self):
        # Fast dips to equal the slow MA on day 20 but never goes below it
        values = [101.0] * 5 + [99.0] * 5 + [101.0] * 10 + [100.0] + [101.0] * 20
        fast, slow = _ma_pair(values)
        result = detect_ma_crossover(fast, slow)
        assert result.golden_crosses == [day_ts(10), day_ts(21)]
        assert result.death_crosses == [day_ts(5)]
        assert result.golden_cross == day_ts(10)

    def test_bearish_reports_latest_death_only(self):
        values = [99.0] * 10 + [101.0] * 10 + [99.0] * 10 + [101.0] * 10 + [99.0] * 10
        fast, slow = _ma_pair(values)
        result = detect_ma_crossover(fast, slow)
        assert result.state == "bearish"
        assert result.golden_cross is None
        assert result.death_cross == day_ts(40)

    def test_neutral_when_equal_at_latest_sample(self):
        fast, slow = _ma_pair([99.0] * 5 + [101.0] * 5 + [100.0])
        result = detect_ma_crossover(fast, slow)
        assert result.state == "neutral"
        assert result.golden_cross is None

    def test_no_overlap(self):
        fast = make_points([101.0] * 10)
        slow = make_points([None] * 20 + [100.0] * 10)
        result = detect_ma_crossover(fast, slow)
        assert result.state == "neutral"
        assert result.golden_crosses == []
        assert result.golden_cross is None
        assert result.death_cross is None

    def test_lookback_bounds_search(self):
        fast, slow = _ma_pair([99.0] * 10 + [101.0] * 390)
        bounded = detect_ma_crossover(fast, slow, max_lookback=100)
        assert bounded.state == "bullish"
        assert bounded.golden_cross is None

        unbounded = detect_ma_crossover(fast, slow, max_lookback=0)
        assert unbounded.golden_cross == day_ts(10)

    def test_unsorted_input_matches_sorted(self):
        fast, slow = _ma_pair([99.0] * 20 + [101.0] * 20)
        expected = detect_ma_crossover(fast, slow)
        result = detect_ma_crossover(list(reversed(fast)), list(reversed(slow)))
        assert result == expected

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_regime_property_on_random_walks(self, seed: int):
        rng = np.random.default_rng(seed)
        slow_values = 100.0 + np.cumsum(rng.normal(0, 0.2, 300))
        fast_values = slow_values + np.cumsum(rng.normal(0, 0.5, 300))
        fast = make_points([float(v) for v in fast_values])
        slow = make_points([float(v) for v in slow_values])

        result = detect_ma_crossover(fast, slow, max_lookback=0)

        if result.state != "bullish" or not result.golden_crosses:
            assert result.golden_cross is None
            return
        assert result.golden_cross <= day_ts(299)
        if result.death_crosses:
            after = [g for g in result.golden_crosses if g > result.death_crosses[-1]]
            assert result.golden_cross == after[0]
        else:
            assert result.golden_cross == result.golden_crosses[0]


# ---------------------------------------------------------------------------
# detect_macd_crossovers
# ---------------------------------------------------------------------------

class TestDetectMACDCrossovers:

    def test_first_occurrence_of_each_event(self):
        points = make_macd([-1.0, 1.0, 2.0, -1.0, 1.0, -2.0], [0.0] * 6)
        result = detect_macd_crossovers(points)
        assert result.bullish_cross == day_ts(1)
        assert result.bearish_cross == day_ts(3)
        assert result.zero_cross_above == day_ts(1)
        assert result.zero_cross_below == day_ts(3)

    def test_signal_cross_without_zero_cross(self):
        points = make_macd([1.0, 2.0, 3.0, 2.0, 1.0, 2.0], [2.0, 2.0, 2.0, 2.0, 2.0, 1.0])
        result = detect_macd_crossovers(points)
        assert result.bullish_cross == day_ts(2)
        assert result.bearish_cross == day_ts(4)
        assert result.zero_cross_above is None
        assert result.zero_cross_below is None

    def test_unsorted_input(self):
        points = make_macd([-1.0, 1.0, -1.0], [0.0] * 3)
        result = detect_macd_crossovers(list(reversed(points)))
        assert result.zero_cross_above == day_ts(1)
        assert result.zero_cross_below == day_ts(2)

    def test_fewer_than_two_points(self):
        result = detect_macd_crossovers(make_macd([1.0], [0.0]))
        assert result.bullish_cross is None
        assert result.zero_cross_above is None

    def test_empty(self):
        result = detect_macd_crossovers([])
        assert result.bearish_cross is None
        assert result.zero_cross_below is None
