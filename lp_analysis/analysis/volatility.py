"""
Historical volatility and growth from OHLC bars

Bars arrive newest-first (subgraph poolDayData order). The estimator
consumes the first N bars, N = days in the lookback period.

Parkinson estimator:
    σ²_daily = Σ ln(H/L)² / (4 n ln 2)
    σ_annual = σ_daily × √365 × 100   (percent)
"""

import logging
import math
from typing import Sequence, Tuple, Union, Optional

import numpy as np

from ..constants import DAYS_PER_YEAR, DEFAULT_FEE_RATE, LOOKBACK_DAYS
from ..data.types import (
    DriftVolParams,
    LookbackPeriod,
    OHLCBar,
    PoolFeeGrowthSnapshot,
    PoolStats,
)
from ..errors import InvalidInput

logger = logging.getLogger(__name__)


def days_for_period(period: Union[LookbackPeriod, str]) -> int:
    """Number of daily bars in a lookback period."""
    key = period.value if isinstance(period, LookbackPeriod) else period
    if key not in LOOKBACK_DAYS:
        raise InvalidInput(
            f"Unknown lookback period: {period!r}. "
            f"Supported: {', '.join(LOOKBACK_DAYS.keys())}"
        )
    return LOOKBACK_DAYS[key]


def select_window(
    bars: Sequence[OHLCBar],
    period: Union[LookbackPeriod, str]
) -> Tuple[OHLCBar, ...]:
    """First N bars of a newest-first sequence."""
    return tuple(bars[:days_for_period(period)])


def parkinson_volatility(bars: Sequence[OHLCBar]) -> float:
    """
    Annualized Parkinson volatility in percent.

    Only bars with finite high > low > 0 contribute. Flat bars
    (high == low) carry no range information and are dropped.

    Args:
        bars: OHLC bars (any order)

    Returns:
        Annualized volatility (percent), 0.0 if no valid bars remain
    """
    if len(bars) == 0:
        return 0.0

    highs = np.array([bar.high for bar in bars], dtype=float)
    lows = np.array([bar.low for bar in bars], dtype=float)

    valid_mask = np.isfinite(highs) & np.isfinite(lows) & (lows > 0) & (highs > lows)
    n = int(valid_mask.sum())
    if n == 0:
        return 0.0

    log_hl = np.log(highs[valid_mask] / lows[valid_mask])
    variance = np.sum(log_hl ** 2) / (4 * n * math.log(2))
    daily_vol = math.sqrt(variance)

    return daily_vol * math.sqrt(DAYS_PER_YEAR) * 100


def growth(bars: Sequence[OHLCBar]) -> float:
    """
    Price change over the window in percent.

    (newest close - oldest close) / oldest close × 100

    Returns 0.0 for an empty window or a non-positive oldest close.
    """
    if len(bars) == 0:
        return 0.0

    newest_close = bars[0].close
    oldest_close = bars[-1].close
    if not (math.isfinite(oldest_close) and oldest_close > 0 and math.isfinite(newest_close)):
        return 0.0

    return (newest_close - oldest_close) / oldest_close * 100


def aggregate(bars: Sequence[OHLCBar]) -> Tuple[float, float]:
    """Total (volume_usd, fees_usd) over the bars."""
    volume = sum(bar.volume_usd for bar in bars)
    fees = sum(bar.fees_usd for bar in bars)
    return volume, fees


def price_extremes(bars: Sequence[OHLCBar]) -> Tuple[float, float]:
    """(high, low) over every positive finite OHLC price; (0, 0) if none."""
    prices = np.array(
        [p for bar in bars for p in (bar.high, bar.low, bar.open, bar.close)],
        dtype=float
    )
    prices = prices[np.isfinite(prices) & (prices > 0)]
    if prices.size == 0:
        return 0.0, 0.0
    return float(prices.max()), float(prices.min())


def estimate_pool_stats(
    bars: Sequence[OHLCBar],
    period: Union[LookbackPeriod, str] = LookbackPeriod.THREE_MONTHS,
    fee_tier: Optional[int] = None,
    snapshots: Sequence[PoolFeeGrowthSnapshot] = ()
) -> PoolStats:
    """
    Build PoolStats for a lookback window.

    Args:
        bars: Daily OHLC bars, newest-first
        period: Lookback period
        fee_tier: Pool fee tier in hundredths of a bip (3000 = 0.30%)
        snapshots: Fee growth snapshots, newest-first. Windowed to N + 1
                   entries so N daily deltas are available.

    Returns:
        PoolStats (volatility and growth in percent)
    """
    days = days_for_period(period)
    window = select_window(bars, period)
    fee_rate = fee_tier / 1_000_000 if fee_tier is not None else DEFAULT_FEE_RATE

    if not window:
        logger.debug("No bars in %s window", period)
        return PoolStats(
            fee_rate=fee_rate,
            fee_growth_snapshots=tuple(snapshots[:days + 1]),
        )

    volume, fees = aggregate(window)
    high, low = price_extremes(window)

    return PoolStats(
        volume=volume,
        fees=fees,
        fee_rate=fee_rate,
        high=high,
        low=low,
        growth=growth(window),
        volatility=parkinson_volatility(window),
        fee_growth_snapshots=tuple(snapshots[:days + 1]),
        lookback_days=len(window),
        start_date=window[-1].date,
        end_date=window[0].date,
    )


def baseline_params(stats: PoolStats, time_horizon_days: float) -> DriftVolParams:
    """
    Historical drift/volatility as decimals, used to seed user inputs.

    growth and volatility are stored as percent in PoolStats.
    """
    return DriftVolParams(
        drift=stats.growth / 100,
        volatility=stats.volatility / 100,
        time_horizon_days=time_horizon_days,
    )
