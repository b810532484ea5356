"""Technical analysis indicators over plain price lists."""
from typing import List, Optional, Tuple


class TechnicalIndicators:
    """Calculate indicator values over a list of closes.

    Every method returns a list the same length as its input, with ``None``
    for samples still inside the warm-up window.
    """

    @staticmethod
    def sma(prices: List[float], period: int) -> List[Optional[float]]:
        """Simple Moving Average."""
        if period < 1 or len(prices) < period:
            return [None] * len(prices)

        result: List[Optional[float]] = [None] * (period - 1)
        window_sum = sum(prices[:period])
        result.append(window_sum / period)
        for i in range(period, len(prices)):
            window_sum += prices[i] - prices[i - period]
            result.append(window_sum / period)
        return result

    @staticmethod
    def ema(prices: List[float], period: int) -> List[Optional[float]]:
        """Exponential Moving Average seeded with the SMA of the first window."""
        if period < 1 or len(prices) < period:
            return [None] * len(prices)

        multiplier = 2 / (period + 1)
        current = sum(prices[:period]) / period
        result: List[Optional[float]] = [None] * (period - 1) + [current]
        for price in prices[period:]:
            current = (price - current) * multiplier + current
            result.append(current)
        return result

    @staticmethod
    def rsi(prices: List[float], period: int = 14) -> List[Optional[float]]:
        """Relative Strength Index (0-100) with Wilder smoothing."""
        if len(prices) < period + 1:
            return [None] * len(prices)

        changes = [prices[i] - prices[i - 1] for i in range(1, len(prices))]
        gains = [max(0.0, c) for c in changes]
        losses = [max(0.0, -c) for c in changes]

        def _value(avg_gain: float, avg_loss: float) -> float:
            if avg_loss == 0:
                return 100.0
            return 100 - (100 / (1 + avg_gain / avg_loss))

        avg_gain = sum(gains[:period]) / period
        avg_loss = sum(losses[:period]) / period
        result: List[Optional[float]] = [None] * period
        result.append(_value(avg_gain, avg_loss))

        for i in range(period, len(changes)):
            avg_gain = (avg_gain * (period - 1) + gains[i]) / period
            avg_loss = (avg_loss * (period - 1) + losses[i]) / period
            result.append(_value(avg_gain, avg_loss))
        return result

    @staticmethod
    def macd(
        prices: List[float],
        fast: int = 12,
        slow: int = 26,
        signal: int = 9
    ) -> Tuple[List[Optional[float]], List[Optional[float]], List[Optional[float]]]:
        """MACD: returns (macd_line, signal_line, histogram)."""
        n = len(prices)
        fast_ema = TechnicalIndicators.ema(prices, fast)
        slow_ema = TechnicalIndicators.ema(prices, slow)

        macd_line: List[Optional[float]] = [
            f - s if f is not None and s is not None else None
            for f, s in zip(fast_ema, slow_ema)
        ]

        # Signal line is an EMA over the defined part of the MACD line
        first = next((i for i, v in enumerate(macd_line) if v is not None), n)
        defined = [v for v in macd_line[first:] if v is not None]
        signal_tail = TechnicalIndicators.ema(defined, signal)
        signal_line: List[Optional[float]] = [None] * first + signal_tail
        if len(signal_line) < n:
            signal_line.extend([None] * (n - len(signal_line)))

        histogram: List[Optional[float]] = [
            m - s if m is not None and s is not None else None
            for m, s in zip(macd_line, signal_line)
        ]
        return macd_line, signal_line, histogram
