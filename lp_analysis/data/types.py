"""
LP 분석 데이터 타입 정의

Subgraph에서 전달되는 데이터와 분석 결과를 Python dataclass로 정의.
fee growth 카운터는 uint256 10진수 문자열 그대로 보관하고,
사용 시점에 fixed_point.parse_u256으로 파싱한다.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Tuple, Dict, Any

from ..constants import LOOKBACK_DAYS, DEFAULT_FEE_RATE
from ..errors import InvalidInput


class LookbackPeriod(str, Enum):
    """과거 데이터 조회 기간"""
    ONE_WEEK = "1 week"
    TWO_WEEKS = "2 weeks"
    ONE_MONTH = "1 month"
    TWO_MONTHS = "2 months"
    THREE_MONTHS = "3 months"

    @property
    def days(self) -> int:
        return LOOKBACK_DAYS[self.value]


class ConcentrationType(str, Enum):
    """변동성 기반 포지션 분류"""
    FULL_RANGE = "full-range"
    CONCENTRATED = "concentrated"
    NARROW = "narrow"


@dataclass(frozen=True)
class OHLCBar:
    """일별 Pool 가격/거래량 데이터 (poolDayData)

    최신 데이터가 먼저 오도록 정렬되어 전달된다.
    """
    date: int  # Unix timestamp
    open: float
    high: float
    low: float
    close: float
    volume_usd: float = 0.0
    fees_usd: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "OHLCBar":
        return cls(
            date=int(data.get("date", 0)),
            open=float(data.get("open", 0)),
            high=float(data.get("high", 0)),
            low=float(data.get("low", 0)),
            close=float(data.get("close", 0)),
            volume_usd=float(data.get("volumeUSD", 0)),
            fees_usd=float(data.get("feesUSD", 0)),
        )


@dataclass(frozen=True)
class PoolFeeGrowthSnapshot:
    """Pool Global State 스냅샷

    - feeGrowthGlobal0X128: token0 단위유동성당 누적수수료 (Q128, 10진수 문자열)
    - feeGrowthGlobal1X128: token1 단위유동성당 누적수수료 (Q128, 10진수 문자열)
    - tick: 현재 틱 인덱스
    - liquidity: 현재 활성 유동성

    카운터는 2^256 모듈러로 증가한다. 두 스냅샷 간 차이만 의미가 있다.
    """
    fee_growth_global_0_x128: str
    fee_growth_global_1_x128: str
    current_tick: int = 0
    liquidity: int = 0
    token0_decimals: int = 18
    token1_decimals: int = 18
    date: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PoolFeeGrowthSnapshot":
        pool_data = data.get("pool", {})
        token0 = data.get("token0") or pool_data.get("token0", {})
        token1 = data.get("token1") or pool_data.get("token1", {})
        date = data.get("date", data.get("periodStartUnix"))
        return cls(
            fee_growth_global_0_x128=str(data.get("feeGrowthGlobal0X128", "0")),
            fee_growth_global_1_x128=str(data.get("feeGrowthGlobal1X128", "0")),
            current_tick=int(data.get("tick") or 0),
            liquidity=int(data.get("liquidity") or 0),
            token0_decimals=int(token0.get("decimals", 18)),
            token1_decimals=int(token1.get("decimals", 18)),
            date=int(date) if date is not None else None,
        )


@dataclass(frozen=True)
class LiquidityPosition:
    """Position-Indexed State

    - tickLower: 하한 틱 (i_l)
    - tickUpper: 상한 틱 (i_u)
    - liquidity: 포지션의 유동성 (l)
    """
    tick_lower: int
    tick_upper: int
    liquidity: int

    def __post_init__(self):
        if self.tick_lower >= self.tick_upper:
            raise InvalidInput(
                f"tick_lower < tick_upper 이어야 합니다: {self.tick_lower} >= {self.tick_upper}"
            )

    @property
    def width(self) -> int:
        return self.tick_upper - self.tick_lower

    @classmethod
    def from_dict(cls, data: dict) -> "LiquidityPosition":
        return cls(
            tick_lower=int(data["tickLower"]),
            tick_upper=int(data["tickUpper"]),
            liquidity=int(data["liquidity"]),
        )


@dataclass(frozen=True)
class PredictionRange:
    """사용자 가격 예측 범위 (±1σ 밴드)"""
    min_price: float
    max_price: float
    time_horizon_days: float

    def __post_init__(self):
        if self.max_price < self.min_price:
            raise InvalidInput(
                f"max_price >= min_price 이어야 합니다: {self.max_price} < {self.min_price}"
            )

    @property
    def expected_price(self) -> float:
        """밴드의 기하평균 (로그정규 모델의 중앙값)"""
        return (self.min_price * self.max_price) ** 0.5


@dataclass(frozen=True)
class DriftVolParams:
    """로그정규 가격 모델 파라미터 (연율, 소수)"""
    drift: float
    volatility: float
    time_horizon_days: float


@dataclass(frozen=True)
class PoolStats:
    """조회 기간 동안의 Pool 통계

    volume, fees는 USD 합계. growth, volatility는 퍼센트.
    fee_growth_snapshots는 최신순.
    """
    volume: float = 0.0
    fees: float = 0.0
    fee_rate: float = DEFAULT_FEE_RATE
    high: float = 0.0
    low: float = 0.0
    growth: float = 0.0
    volatility: float = 0.0
    fee_growth_snapshots: Tuple[PoolFeeGrowthSnapshot, ...] = ()
    lookback_days: int = 0
    start_date: Optional[int] = None
    end_date: Optional[int] = None

    @classmethod
    def empty(cls) -> "PoolStats":
        return cls()


_CAMEL_KEYS = {
    "expected_pnl": "expectedPNL",
    "impermanent_loss": "impermanentLoss",
    "fee_income": "feeIncome",
    "net_position": "netPosition",
    "price_deviation": "priceDeviation",
    "fee_apr": "feeAPR",
    "worst_case_il": "worstCaseIL",
    "best_case_scenario": "bestCaseScenario",
    "real_fee_income": "realFeeIncome",
    "real_fee_apr": "realFeeAPR",
    "daily_fee_income": "dailyFeeIncome",
    "time_in_range_estimate": "timeInRangeEstimate",
    "concentration_type": "concentrationType",
    "legacy_fee_income": "legacyFeeIncome",
    "legacy_fee_apr": "legacyFeeAPR",
}


@dataclass(frozen=True)
class LPAnalysisResult:
    """LP 예상 손익 분석 결과

    모든 금액은 USD, expected_pnl/price_deviation/APR은 퍼센트.
    fee_income/fee_apr은 과거 수수료 기반 추정(legacy)과
    fee growth 기반 추정(real) 중 큰 값이다.
    """
    expected_pnl: float = 0.0
    impermanent_loss: float = 0.0
    fee_income: float = 0.0
    net_position: float = 0.0
    price_deviation: float = 0.0
    fee_apr: float = 0.0
    worst_case_il: float = 0.0
    best_case_scenario: float = 0.0
    real_fee_income: float = 0.0
    real_fee_apr: float = 0.0
    daily_fee_income: float = 0.0
    time_in_range_estimate: float = 0.0
    concentration_type: Optional[ConcentrationType] = None
    legacy_fee_income: float = 0.0
    legacy_fee_apr: float = 0.0

    @classmethod
    def zero(cls) -> "LPAnalysisResult":
        """입력이 아직 준비되지 않았을 때의 플레이스홀더 결과"""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """표시 계층용 camelCase 딕셔너리"""
        data = asdict(self)
        if self.concentration_type is not None:
            data["concentration_type"] = self.concentration_type.value
        return {_CAMEL_KEYS[key]: value for key, value in data.items()}
