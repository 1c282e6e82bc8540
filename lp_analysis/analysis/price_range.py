"""
Drift/volatility <-> price range conversion

Price follows geometric Brownian motion, so log-price after t years is
normal with mean ln(P) + drift × t and standard deviation vol × √t.
A prediction range is the ±1σ band around the expected price.

    t        = days / 365
    expected = P × exp(drift × t)
    σ_t      = vol × √t
    [min, max] = [expected × exp(-σ_t), expected × exp(σ_t)]
"""

import math
from typing import Dict

from ..constants import DAYS_PER_YEAR
from ..data.types import DriftVolParams, PredictionRange
from ..errors import InvalidInput

# One-sided z-scores used by the risk metrics
Z_95 = 1.65
Z_99 = 2.33


def _positive(name: str, value: float) -> None:
    if not (math.isfinite(value) and value > 0):
        raise InvalidInput(f"{name} must be positive, got {value}")


def from_drift_vol(
    current_price: float,
    drift: float,
    volatility: float,
    time_horizon_days: float
) -> PredictionRange:
    """
    Map (drift, volatility, horizon) to the ±1σ price band.

    Args:
        current_price: Spot price
        drift: Annualized expected log return (0.05 = 5%)
        volatility: Annualized log-return standard deviation, non-negative (0.25 = 25%)
        time_horizon_days: Projection horizon in days

    Returns:
        PredictionRange

    Raises:
        InvalidInput: current_price <= 0, time_horizon_days <= 0 or volatility < 0
    """
    _positive("current_price", current_price)
    _positive("time_horizon_days", time_horizon_days)
    if not (math.isfinite(volatility) and volatility >= 0):
        raise InvalidInput(f"volatility must be non-negative, got {volatility}")

    t = time_horizon_days / DAYS_PER_YEAR
    stddev = volatility * math.sqrt(t)
    try:
        expected = current_price * math.exp(drift * t)
        min_price = expected * math.exp(-stddev)
        max_price = expected * math.exp(stddev)
    except OverflowError as e:
        raise InvalidInput(
            f"Price band overflows for drift={drift}, volatility={volatility}"
        ) from e

    return PredictionRange(
        min_price=min_price,
        max_price=max_price,
        time_horizon_days=time_horizon_days,
    )


def to_drift_vol(
    current_price: float,
    min_price: float,
    max_price: float,
    time_horizon_days: float
) -> DriftVolParams:
    """
    Inverse of from_drift_vol: treat [min, max] as the ±1σ band.

    expected   = √(min × max)
    σ_t        = ln(max / min) / 2
    drift      = ln(expected / P) / t
    volatility = σ_t / √t

    Raises:
        InvalidInput: any non-positive price or horizon, or max < min
    """
    _positive("current_price", current_price)
    _positive("min_price", min_price)
    _positive("max_price", max_price)
    _positive("time_horizon_days", time_horizon_days)
    if max_price < min_price:
        raise InvalidInput(f"max_price ({max_price}) must not be below min_price ({min_price})")

    t = time_horizon_days / DAYS_PER_YEAR
    expected = math.sqrt(min_price * max_price)
    stddev = math.log(max_price / min_price) / 2

    return DriftVolParams(
        drift=math.log(expected / current_price) / t,
        volatility=stddev / math.sqrt(t),
        time_horizon_days=time_horizon_days,
    )


def range_to_drift_vol(current_price: float, prediction: PredictionRange) -> DriftVolParams:
    """to_drift_vol for a PredictionRange value."""
    return to_drift_vol(
        current_price,
        prediction.min_price,
        prediction.max_price,
        prediction.time_horizon_days,
    )


def range_risk_metrics(current_price: float, params: DriftVolParams) -> Dict[str, float]:
    """
    Risk figures for a drift/vol prediction.

    Returns:
        Dict with daily_volatility (decimal), value_at_risk (95%, price units),
        max_expected_loss (99%, price units) and probability_of_loss
        (P(price at horizon < current price) under the lognormal model)
    """
    _positive("current_price", current_price)
    _positive("time_horizon_days", params.time_horizon_days)

    daily_vol = params.volatility / math.sqrt(DAYS_PER_YEAR)
    stddev = params.volatility * math.sqrt(params.time_horizon_days / DAYS_PER_YEAR)
    log_mean = params.drift * params.time_horizon_days / DAYS_PER_YEAR

    if stddev > 0:
        z = -log_mean / stddev
        probability_of_loss = 0.5 * (1 + math.erf(z / math.sqrt(2)))
    else:
        probability_of_loss = 1.0 if log_mean < 0 else 0.0

    return {
        "daily_volatility": daily_vol,
        "value_at_risk": current_price * daily_vol * Z_95,
        "max_expected_loss": current_price * daily_vol * Z_99,
        "probability_of_loss": probability_of_loss,
    }
