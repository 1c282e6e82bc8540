"""
Data layer for LP analysis

Subgraph 데이터 타입 및 분석 결과 정의
"""

from .types import (
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
