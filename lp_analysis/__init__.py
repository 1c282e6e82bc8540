"""
Concentrated Liquidity LP Analysis

집중 유동성 LP 포지션의 수수료/IL 분석 코어.
가격 예측(drift/volatility) ↔ 가격 범위 변환, OHLC 기반 변동성 추정,
fee growth 기반 수수료 계산, 예상 손익 분석을 제공한다.
"""

__version__ = "0.1.0"

from .constants import Q128, Q256, LOOKBACK_DAYS
from .errors import (
    LPAnalysisError,
    InvalidDecimals,
    ParseError,
    InvalidInput,
    InsufficientData,
)
from .data.types import (
    LookbackPeriod,
    ConcentrationType,
    OHLCBar,
    PoolFeeGrowthSnapshot,
    LiquidityPosition,
    PredictionRange,
    DriftVolParams,
    PoolStats,
    LPAnalysisResult,
)
from .analysis.analyzer import analyze
from .analysis.price_range import from_drift_vol, to_drift_vol
from .analysis.volatility import estimate_pool_stats, parkinson_volatility
