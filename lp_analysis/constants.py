"""
LP 분석 상수 정의

온체인 수준 정밀도를 위한 상수들:
- Q128: fee growth 인코딩에 사용 (2^128)
- Q256: uint256 랩어라운드 모듈러스 (2^256)
- LOOKBACK_DAYS: 과거 데이터 조회 기간별 일수
- CONCENTRATION_TIERS: 틱 폭별 수수료 집중 배수
"""

from typing import Dict, Tuple

# Fixed-point 인코딩 상수
Q128: int = 2 ** 128
Q256: int = 2 ** 256

# uint256 최대값
UINT256_MAX: int = Q256 - 1

# Decimal 연산 유효 자릿수 (128비트 크기의 fee growth를 정확히 표현)
DECIMAL_PRECISION: int = 50

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# tick → price 기준값
TICK_BASE: float = 1.0001

# 1년 일수 (연환산 기준)
DAYS_PER_YEAR: int = 365

# 과거 데이터 조회 기간 (일)
LOOKBACK_DAYS: Dict[str, int] = {
    "1 week": 7,
    "2 weeks": 14,
    "1 month": 30,
    "2 months": 60,
    "3 months": 90,
}

# 틱 폭 → 수수료 집중 배수
# 폭이 상한 미만인 첫 번째 티어가 적용됨. FULL_RANGE_TICK_WIDTH 초과는 1.0
FULL_RANGE_TICK_WIDTH: int = 100_000
CONCENTRATION_TIERS: Tuple[Tuple[int, float], ...] = (
    (1_000, 10.0),
    (5_000, 5.0),
    (20_000, 2.5),
)
DEFAULT_CONCENTRATION_MULTIPLIER: float = 1.5
FULL_RANGE_CONCENTRATION_MULTIPLIER: float = 1.0

# 변동성 → 틱 폭 변환 계수
VOLATILITY_TICK_SCALE: float = 20_000
NARROW_MIN_TICK_WIDTH: int = 200
CONCENTRATED_MIN_TICK_WIDTH: int = 2_000

# 예상 체류 시간 하한
NARROW_MIN_TIME_IN_RANGE: float = 0.3
CONCENTRATED_MIN_TIME_IN_RANGE: float = 0.5

# 과거 수수료 기반 추정 기준 포지션 크기 (USD)
LEGACY_FEE_REFERENCE_SIZE_USD: float = 1_000_000

# 기본 수수료율 (0.30% 티어)
DEFAULT_FEE_RATE: float = 0.003
