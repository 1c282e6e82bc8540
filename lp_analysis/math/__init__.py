"""
Math layer for LP analysis

온체인 수준 정밀도의 수학 함수들:
- fixed_point: Q128.128 카운터 보조 연산 (uint256 랩어라운드, 단위 변환)
- fee_math: fee growth 기반 수수료 계산
- il_math: Impermanent Loss 계산
- tick_math: Tick ↔ Price 변환
"""

from .fixed_point import (
    parse_u256,
    sub_in_256,
    from_raw_units,
    to_raw_units,
    to_decimal,
)
from .fee_math import (
    FeeCalculationResult,
    concentration_multiplier,
    compute_full_range_fees,
    compute_concentrated_fees,
    estimate_daily_fee_income,
    fee_growth_delta_snapshot,
)
from .il_math import (
    compute_il,
    il_fraction,
)
from .tick_math import (
    tick_to_price,
    price_to_tick,
    tick_range_around,
)
