"""
Analysis layer for LP analysis

- volatility: OHLC 기반 변동성/성장률 추정
- price_range: drift/volatility ↔ 가격 범위 변환
- analyzer: 수수료 수입과 IL을 결합한 예상 손익 분석
"""

from .volatility import (
    days_for_period,
    select_window,
    parkinson_volatility,
    growth,
    aggregate,
    price_extremes,
    estimate_pool_stats,
    baseline_params,
)
from .price_range import (
    from_drift_vol,
    to_drift_vol,
    range_to_drift_vol,
    range_risk_metrics,
)
from .analyzer import (
    analyze,
    classify_concentration,
    estimate_time_in_range,
    tick_width_for,
    position_liquidity_proxy,
)
