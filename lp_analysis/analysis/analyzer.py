"""
Expected PNL analysis for a liquidity provider

Combines projected fee income with impermanent loss under a drift/vol
prediction. Two fee estimates are produced and the larger one is reported:

- legacy: historical USD fees per day scaled to the position size
- real:   fee growth deltas from the pool's feeGrowthGlobal counters

Inputs that are not populated yet (zero price or position size) yield
LPAnalysisResult.zero() instead of an error.
"""

import logging
import math
from typing import Optional, Tuple

from ..config import settings
from ..constants import (
    DAYS_PER_YEAR,
    FULL_RANGE_TICK_WIDTH,
    VOLATILITY_TICK_SCALE,
    NARROW_MIN_TICK_WIDTH,
    CONCENTRATED_MIN_TICK_WIDTH,
    NARROW_MIN_TIME_IN_RANGE,
    CONCENTRATED_MIN_TIME_IN_RANGE,
    LEGACY_FEE_REFERENCE_SIZE_USD,
)
from ..data.types import (
    ConcentrationType,
    LiquidityPosition,
    LPAnalysisResult,
    PoolStats,
)
from ..math.fee_math import (
    compute_full_range_fees,
    compute_concentrated_fees,
    concentration_multiplier,
    estimate_daily_fee_income,
    fee_growth_delta_snapshot,
)
from ..math.il_math import compute_il
from ..math.tick_math import tick_range_around

logger = logging.getLogger(__name__)

# Quote token (token1) is assumed to be a USD stablecoin
QUOTE_TOKEN_PRICE_USD = 1.0


def classify_concentration(volatility: float) -> ConcentrationType:
    """Position style suited to a volatility level (decimal)."""
    if volatility > settings.FULL_RANGE_VOL_THRESHOLD:
        return ConcentrationType.FULL_RANGE
    if volatility > settings.CONCENTRATED_VOL_THRESHOLD:
        return ConcentrationType.CONCENTRATED
    return ConcentrationType.NARROW


def estimate_time_in_range(concentration_type: ConcentrationType, volatility: float) -> float:
    """Fraction of the horizon the price is expected to stay in range."""
    if concentration_type == ConcentrationType.FULL_RANGE:
        return 1.0
    if concentration_type == ConcentrationType.NARROW:
        return min(1.0, max(NARROW_MIN_TIME_IN_RANGE, 1 - 2 * volatility))
    return min(1.0, max(CONCENTRATED_MIN_TIME_IN_RANGE, 1 - volatility))


def tick_width_for(concentration_type: ConcentrationType, volatility: float) -> int:
    """Tick width of the modelled position."""
    if concentration_type == ConcentrationType.FULL_RANGE:
        return FULL_RANGE_TICK_WIDTH

    base_range = volatility * VOLATILITY_TICK_SCALE
    if concentration_type == ConcentrationType.NARROW:
        return int(max(NARROW_MIN_TICK_WIDTH, base_range * 0.5))
    return int(max(CONCENTRATED_MIN_TICK_WIDTH, base_range * 2))


def position_liquidity_proxy(position_size_usd: float, current_price: float) -> int:
    """floor(√(size × price) × 1e18)"""
    return math.floor(math.sqrt(position_size_usd * current_price) * 1e18)


def _real_fee_estimate(
    pool_stats: PoolStats,
    concentration_type: ConcentrationType,
    volatility: float,
    time_in_range: float,
    liquidity: int,
    current_price: float,
    time_horizon_days: float
) -> Tuple[float, float, float]:
    """
    Fee income from fee growth snapshots.

    Returns:
        (real_fee_income over the horizon, real_fee_apr, daily_fee_income)
    """
    snapshots = pool_stats.fee_growth_snapshots
    if len(snapshots) < 2:
        logger.debug("Fewer than two fee growth snapshots, real fee estimate skipped")
        return 0.0, 0.0, 0.0

    latest, earliest = snapshots[0], snapshots[-1]
    window_days = len(snapshots) - 1
    window_delta = fee_growth_delta_snapshot(latest, earliest)

    if concentration_type == ConcentrationType.FULL_RANGE:
        result = compute_full_range_fees(
            window_delta, liquidity, current_price, QUOTE_TOKEN_PRICE_USD, window_days
        )
        factor = 1.0
    else:
        width = tick_width_for(concentration_type, volatility)
        tick_lower, tick_upper = tick_range_around(latest.current_tick, width)
        position = LiquidityPosition(tick_lower, tick_upper, liquidity)
        result = compute_concentrated_fees(
            window_delta, position, current_price, QUOTE_TOKEN_PRICE_USD,
            window_days, time_in_range
        )
        factor = concentration_multiplier(tick_lower, tick_upper) * time_in_range

    daily_fee_income = float(estimate_daily_fee_income(
        snapshots, liquidity, current_price, QUOTE_TOKEN_PRICE_USD
    )) * factor

    real_fee_income = result.daily_fee_rate_number * time_horizon_days
    return real_fee_income, result.fee_apr_number, daily_fee_income


def analyze(
    drift: float,
    volatility: float,
    time_horizon_days: float,
    current_price: float,
    pool_stats: PoolStats,
    position_size_usd: Optional[float] = None
) -> LPAnalysisResult:
    """
    Expected PNL of providing liquidity under a drift/vol prediction.

    Args:
        drift: Annualized drift (decimal, 0.05 = 5%)
        volatility: Annualized volatility (decimal, 0.25 = 25%)
        time_horizon_days: Projection horizon in days
        current_price: Spot price of token0 in USD
        pool_stats: Historical pool statistics with fee growth snapshots
        position_size_usd: Position size, defaults to settings.DEFAULT_POSITION_SIZE_USD

    Returns:
        LPAnalysisResult (all-zero when inputs are not populated yet)

    Raises:
        ParseError: a fee growth snapshot holds a malformed counter
    """
    if position_size_usd is None:
        position_size_usd = settings.DEFAULT_POSITION_SIZE_USD

    inputs = (current_price, position_size_usd, time_horizon_days)
    if not all(math.isfinite(v) and v > 0 for v in inputs):
        logger.debug(
            "Placeholder result: price=%s size=%s horizon=%s",
            current_price, position_size_usd, time_horizon_days
        )
        return LPAnalysisResult.zero()

    t = time_horizon_days / DAYS_PER_YEAR

    # Expected price under GBM
    try:
        expected_price = current_price * math.exp(drift * t)
    except OverflowError:
        expected_price = math.inf
    if not (math.isfinite(expected_price) and expected_price > 0):
        logger.debug("Placeholder result: expected price %s for drift=%s", expected_price, drift)
        return LPAnalysisResult.zero()

    price_deviation = abs(1 - expected_price / current_price) * 100
    impermanent_loss = compute_il(current_price, expected_price, position_size_usd)

    concentration_type = classify_concentration(volatility)
    time_in_range = estimate_time_in_range(concentration_type, volatility)
    liquidity = position_liquidity_proxy(position_size_usd, current_price)

    real_fee_income, real_fee_apr, daily_fee_income = _real_fee_estimate(
        pool_stats, concentration_type, volatility, time_in_range,
        liquidity, current_price, time_horizon_days
    )

    # Historical fee estimate
    lookback_days = pool_stats.lookback_days or min(90, time_horizon_days)
    historical_daily_fees = pool_stats.fees / lookback_days
    legacy_fee_income = (
        historical_daily_fees * time_horizon_days
        * (position_size_usd / LEGACY_FEE_REFERENCE_SIZE_USD)
    )
    legacy_fee_apr = pool_stats.fees / (pool_stats.volume or 1) * DAYS_PER_YEAR * 100

    fee_income = max(legacy_fee_income, real_fee_income)
    fee_apr = max(legacy_fee_apr, real_fee_apr)

    net_position = fee_income - impermanent_loss

    logger.debug(
        "%s position: legacy=%.2f real=%.2f il=%.2f",
        concentration_type.value, legacy_fee_income, real_fee_income, impermanent_loss
    )

    return LPAnalysisResult(
        expected_pnl=net_position / position_size_usd * 100,
        impermanent_loss=impermanent_loss,
        fee_income=fee_income,
        net_position=net_position,
        price_deviation=price_deviation,
        fee_apr=fee_apr,
        worst_case_il=position_size_usd * 0.5 * volatility * math.sqrt(t),
        best_case_scenario=fee_income * 1.5,
        real_fee_income=real_fee_income,
        real_fee_apr=real_fee_apr,
        daily_fee_income=daily_fee_income,
        time_in_range_estimate=time_in_range,
        concentration_type=concentration_type,
        legacy_fee_income=legacy_fee_income,
        legacy_fee_apr=legacy_fee_apr,
    )
