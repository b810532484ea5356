"""Tests for swing point detection."""

from __future__ import annotations

from analysis.turning_points import SwingKind
from analysis.turning_points.swings import find_swing_points, recent_swing_extremes
from factories import day_ts, make_bars


def _bars_with_extremes(n: int, peaks: dict[int, float], troughs: dict[int, float]):
    highs = [peaks.get(i, 101.0) for i in range(n)]
    lows = [troughs.get(i, 99.0) for i in range(n)]
    return make_bars([100.0] * n, highs=highs, lows=lows)


class TestFindSwingPoints:

    def test_single_swing_high(self):
        bars = make_bars(
            [10.0, 12.0, 15.0, 13.0, 11.0],
            highs=[10.0, 12.0, 15.0, 13.0, 11.0],
            lows=[9.0, 11.0, 14.0, 12.0, 10.0],
        )
        swings = find_swing_points(bars, window=2)
        assert len(swings) == 1
        assert swings[0].kind is SwingKind.HIGH
        assert swings[0].price == 15.0
        assert swings[0].timestamp == day_ts(2)

    def test_equal_neighbor_is_not_a_swing(self):
        bars = make_bars(
            [10.0] * 5,
            highs=[10.0, 15.0, 15.0, 12.0, 11.0],
            lows=[9.0] * 5,
        )
        assert find_swing_points(bars, window=1) == []

    def test_swing_low(self):
        bars = _bars_with_extremes(11, peaks={}, troughs={5: 95.0})
        swings = find_swing_points(bars, window=5)
        assert [(s.kind, s.price) for s in swings] == [(SwingKind.LOW, 95.0)]

    def test_edge_bars_are_not_eligible(self):
        bars = _bars_with_extremes(10, peaks={0: 120.0, 9: 120.0}, troughs={})
        assert find_swing_points(bars, window=2) == []

    def test_too_few_bars(self):
        bars = make_bars([10.0, 12.0, 15.0, 13.0])
        assert find_swing_points(bars, window=2) == []

    def test_ordered_by_timestamp(self):
        bars = _bars_with_extremes(30, peaks={20: 110.0}, troughs={8: 90.0})
        swings = find_swing_points(list(reversed(bars)), window=3)
        assert [s.timestamp for s in swings] == [day_ts(8), day_ts(20)]
        assert [s.kind for s in swings] == [SwingKind.LOW, SwingKind.HIGH]


class TestRecentSwingExtremes:

    def test_highest_high_and_lowest_low(self):
        bars = _bars_with_extremes(
            60,
            peaks={10: 105.0, 30: 108.0, 50: 103.0},
            troughs={20: 90.0, 40: 88.0},
        )
        swing_high, swing_low = recent_swing_extremes(bars)
        assert swing_high is not None and swing_low is not None
        assert swing_high.timestamp == day_ts(30)
        assert swing_high.price == 108.0
        assert swing_low.timestamp == day_ts(40)
        assert swing_low.price == 88.0

    def test_only_trailing_bars_considered(self):
        bars = _bars_with_extremes(100, peaks={5: 150.0, 70: 105.0}, troughs={})
        swing_high, swing_low = recent_swing_extremes(bars, tail=60)
        assert swing_high is not None
        assert swing_high.timestamp == day_ts(70)
        assert swing_low is None

    def test_tie_keeps_earlier_swing(self):
        bars = _bars_with_extremes(60, peaks={10: 108.0, 30: 108.0}, troughs={})
        swing_high, _ = recent_swing_extremes(bars)
        assert swing_high is not None
        assert swing_high.timestamp == day_ts(10)

    def test_non_positive_tail_finds_nothing(self):
        bars = _bars_with_extremes(60, peaks={30: 108.0}, troughs={40: 88.0})
        assert recent_swing_extremes(bars, tail=0) == (None, None)

    def test_flat_series_has_no_swings(self):
        assert recent_swing_extremes(make_bars([100.0] * 60)) == (None, None)

    def test_empty(self):
        assert recent_swing_extremes([]) == (None, None)
