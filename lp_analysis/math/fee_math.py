"""
Fee Math - fee growth 기반 수수료 계산

Pool의 feeGrowthGlobal{0,1}X128 카운터로 포지션이 얻은 수수료를 계산.
카운터는 Q128.128 고정소수점이며 uint256으로 랩어라운드된다.

References:
- 백서 Section 6.2: Global State (feeGrowthGlobal)
- 백서 Section 6.4.1: Position-Indexed State (uncollected fees)

핵심 공식:
    fees_raw = l × Δf_g / 2^128                     # 토큰 최소 단위
    fees = fees_raw / 10^decimals                   # human-readable
    fee_APR = fees_USD × 365 / (V_position × days) × 100
"""

import dataclasses
import logging
from decimal import Decimal, localcontext
from typing import NamedTuple, Optional, Sequence, Union

from ..config import settings
from ..constants import (
    Q128,
    DAYS_PER_YEAR,
    FULL_RANGE_TICK_WIDTH,
    CONCENTRATION_TIERS,
    DEFAULT_CONCENTRATION_MULTIPLIER,
    FULL_RANGE_CONCENTRATION_MULTIPLIER,
)
from ..data.types import PoolFeeGrowthSnapshot, LiquidityPosition
from ..errors import InvalidInput, InsufficientData
from .fixed_point import (
    DECIMAL_CONTEXT,
    parse_u256,
    sub_in_256,
    from_raw_units,
    to_raw_units,
    to_decimal,
)

logger = logging.getLogger(__name__)

Liquidity = Union[int, str]


class FeeCalculationResult(NamedTuple):
    """수수료 계산 결과 (Decimal 정밀도)"""
    token0_fees: Decimal  # token0 수수료 (human-readable)
    token1_fees: Decimal  # token1 수수료 (human-readable)
    token0_fees_raw: Decimal  # token0 수수료 (최소 단위)
    token1_fees_raw: Decimal  # token1 수수료 (최소 단위)
    total_fees_usd: Decimal
    fee_apr: Decimal  # 퍼센트
    daily_fee_rate: Decimal  # USD / day

    # 표시용 float 값
    @property
    def token0_fees_number(self) -> float:
        return float(self.token0_fees)

    @property
    def token1_fees_number(self) -> float:
        return float(self.token1_fees)

    @property
    def total_fees_usd_number(self) -> float:
        return float(self.total_fees_usd)

    @property
    def fee_apr_number(self) -> float:
        return float(self.fee_apr)

    @property
    def daily_fee_rate_number(self) -> float:
        return float(self.daily_fee_rate)


def _check_prices(token0_price: float, token1_price: float) -> None:
    if not token0_price > 0:
        raise InvalidInput(f"token0 가격은 양수여야 합니다: {token0_price}")
    if not token1_price >= 0:
        raise InvalidInput(f"token1 가격은 0 이상이어야 합니다: {token1_price}")


def _fees_for_growth(liquidity: int, fee_growth_x128: int) -> Decimal:
    """l × f_g / 2^128 (토큰 최소 단위)"""
    with localcontext(DECIMAL_CONTEXT):
        return Decimal(liquidity) * Decimal(fee_growth_x128) / Decimal(Q128)


def concentration_multiplier(tick_lower: int, tick_upper: int) -> float:
    """틱 폭에 따른 수수료 집중 배수

    좁은 범위는 활성 상태일 때 더 많은 수수료를 얻지만
    활성 상태인 시간은 더 짧다.

    Returns:
        폭 > 100,000: 1.0 / < 1,000: 10.0 / < 5,000: 5.0 / < 20,000: 2.5 / 그 외: 1.5
    """
    tick_range = tick_upper - tick_lower

    if tick_range > FULL_RANGE_TICK_WIDTH:
        return FULL_RANGE_CONCENTRATION_MULTIPLIER

    for upper_bound, multiplier in CONCENTRATION_TIERS:
        if tick_range < upper_bound:
            return multiplier

    return DEFAULT_CONCENTRATION_MULTIPLIER


def compute_full_range_fees(
    snapshot: PoolFeeGrowthSnapshot,
    position_liquidity: Liquidity,
    token0_price: float,
    token1_price: float,
    days_held: float
) -> FeeCalculationResult:
    """전체 범위 포지션의 수수료 계산

    전체 범위 포지션은 항상 활성 상태이므로 global fee growth를 그대로 사용한다.
    snapshot의 카운터는 기간 동안의 변화량이어야 한다
    (fee_growth_delta_snapshot 참조).

    Args:
        snapshot: fee growth 스냅샷
        position_liquidity: 포지션 유동성 (l)
        token0_price: token0 USD 가격
        token1_price: token1 USD 가격
        days_held: 보유 기간 (일)

    Returns:
        FeeCalculationResult

    Raises:
        InvalidInput: days_held <= 0, 가격이 유효하지 않거나 유동성이 음수인 경우
        ParseError: fee growth 또는 유동성 값이 올바른 uint256이 아닌 경우
    """
    if not days_held > 0:
        raise InvalidInput(f"보유 기간은 양수여야 합니다: {days_held}")
    if isinstance(position_liquidity, int) and position_liquidity < 0:
        raise InvalidInput(f"유동성은 0 이상이어야 합니다: {position_liquidity}")
    _check_prices(token0_price, token1_price)

    liquidity = parse_u256(position_liquidity)
    fee_growth_0 = parse_u256(snapshot.fee_growth_global_0_x128)
    fee_growth_1 = parse_u256(snapshot.fee_growth_global_1_x128)

    # Step 1: 토큰별 수수료 (최소 단위 → human-readable)
    token0_fees_raw = _fees_for_growth(liquidity, fee_growth_0)
    token1_fees_raw = _fees_for_growth(liquidity, fee_growth_1)
    token0_fees = from_raw_units(token0_fees_raw, snapshot.token0_decimals)
    token1_fees = from_raw_units(token1_fees_raw, snapshot.token1_decimals)

    with localcontext(DECIMAL_CONTEXT):
        price0 = to_decimal(token0_price)
        price1 = to_decimal(token1_price)
        days = to_decimal(days_held)

        # Step 2: USD 합계
        total_fees_usd = token0_fees * price0 + token1_fees * price1

        # Step 3: 대칭 전체 범위 포지션 가치 (x = L / √P, y = L × √P)
        sqrt_price = price0.sqrt()
        token0_amount = Decimal(liquidity) / sqrt_price
        token1_amount = Decimal(liquidity) * sqrt_price

    token0_value = from_raw_units(token0_amount, snapshot.token0_decimals)
    token1_value = from_raw_units(token1_amount, snapshot.token1_decimals)

    with localcontext(DECIMAL_CONTEXT):
        position_value_usd = token0_value * price0 + token1_value * price1

        if position_value_usd > 0:
            fee_apr = total_fees_usd * DAYS_PER_YEAR / (position_value_usd * days) * 100
        else:
            fee_apr = Decimal(0)
        daily_fee_rate = total_fees_usd / days

    return FeeCalculationResult(
        token0_fees=token0_fees,
        token1_fees=token1_fees,
        token0_fees_raw=token0_fees_raw,
        token1_fees_raw=token1_fees_raw,
        total_fees_usd=total_fees_usd,
        fee_apr=fee_apr,
        daily_fee_rate=daily_fee_rate,
    )


def compute_concentrated_fees(
    snapshot: PoolFeeGrowthSnapshot,
    position: LiquidityPosition,
    token0_price: float,
    token1_price: float,
    days_held: float,
    time_in_range_fraction: Optional[float] = None
) -> FeeCalculationResult:
    """집중 유동성 포지션의 수수료 추정

    전체 범위 결과에 집중 배수와 범위 내 체류 비율을 곱한다.
    틱 단위 데이터 없이 계산하는 단순화된 추정이다.

    Args:
        snapshot: fee growth 스냅샷 (기간 변화량)
        position: 포지션 (틱 범위, 유동성)
        token0_price: token0 USD 가격
        token1_price: token1 USD 가격
        days_held: 보유 기간 (일)
        time_in_range_fraction: 범위 내 체류 비율 (0-1),
            None이면 settings.DEFAULT_TIME_IN_RANGE

    Returns:
        FeeCalculationResult
    """
    if time_in_range_fraction is None:
        time_in_range_fraction = settings.DEFAULT_TIME_IN_RANGE

    if not 0 <= time_in_range_fraction <= 1:
        raise InvalidInput(
            f"범위 내 체류 비율은 0과 1 사이여야 합니다: {time_in_range_fraction}"
        )

    full = compute_full_range_fees(
        snapshot, position.liquidity, token0_price, token1_price, days_held
    )

    multiplier = concentration_multiplier(position.tick_lower, position.tick_upper)

    with localcontext(DECIMAL_CONTEXT):
        factor = to_decimal(multiplier) * to_decimal(time_in_range_fraction)

        token0_fees = full.token0_fees * factor
        token1_fees = full.token1_fees * factor
        total_fees_usd = token0_fees * to_decimal(token0_price) + token1_fees * to_decimal(token1_price)
        fee_apr = full.fee_apr * factor
        daily_fee_rate = total_fees_usd / to_decimal(days_held)

    return FeeCalculationResult(
        token0_fees=token0_fees,
        token1_fees=token1_fees,
        token0_fees_raw=Decimal(to_raw_units(token0_fees, snapshot.token0_decimals)),
        token1_fees_raw=Decimal(to_raw_units(token1_fees, snapshot.token1_decimals)),
        total_fees_usd=total_fees_usd,
        fee_apr=fee_apr,
        daily_fee_rate=daily_fee_rate,
    )


def fee_growth_delta_snapshot(
    latest: PoolFeeGrowthSnapshot,
    earliest: PoolFeeGrowthSnapshot
) -> PoolFeeGrowthSnapshot:
    """두 스냅샷 간 fee growth 변화량을 담은 스냅샷

    틱, 유동성, decimals는 latest를 따른다.
    """
    return dataclasses.replace(
        latest,
        fee_growth_global_0_x128=str(sub_in_256(
            latest.fee_growth_global_0_x128, earliest.fee_growth_global_0_x128
        )),
        fee_growth_global_1_x128=str(sub_in_256(
            latest.fee_growth_global_1_x128, earliest.fee_growth_global_1_x128
        )),
    )


def estimate_daily_fee_income(
    snapshots: Sequence[PoolFeeGrowthSnapshot],
    position_liquidity: Liquidity,
    token0_price: float,
    token1_price: float,
    decimals0: Optional[int] = None,
    decimals1: Optional[int] = None
) -> Decimal:
    """최근 fee growth 변화량으로 일일 수수료 수입 추정 (USD)

    Args:
        snapshots: 최신순 스냅샷. 앞의 두 개(최신, 직전)를 사용
        position_liquidity: 포지션 유동성
        token0_price: token0 USD 가격
        token1_price: token1 USD 가격
        decimals0: token0 소수점 자릿수 (None이면 최신 스냅샷 값)
        decimals1: token1 소수점 자릿수 (None이면 최신 스냅샷 값)

    Returns:
        직전 스냅샷 이후 수수료 (USD)

    Raises:
        InsufficientData: 스냅샷이 2개 미만인 경우
    """
    if len(snapshots) < 2:
        raise InsufficientData(
            f"일일 수수료 추정에는 스냅샷 2개가 필요합니다: {len(snapshots)}개 제공됨"
        )
    _check_prices(token0_price, token1_price)

    latest, previous = snapshots[0], snapshots[1]
    if decimals0 is None:
        decimals0 = latest.token0_decimals
    if decimals1 is None:
        decimals1 = latest.token1_decimals

    liquidity = parse_u256(position_liquidity)

    # 언더플로우 처리 (uint256 랩어라운드)
    delta_0 = sub_in_256(latest.fee_growth_global_0_x128, previous.fee_growth_global_0_x128)
    delta_1 = sub_in_256(latest.fee_growth_global_1_x128, previous.fee_growth_global_1_x128)

    token0_fees = from_raw_units(_fees_for_growth(liquidity, delta_0), decimals0)
    token1_fees = from_raw_units(_fees_for_growth(liquidity, delta_1), decimals1)

    with localcontext(DECIMAL_CONTEXT):
        total = token0_fees * to_decimal(token0_price) + token1_fees * to_decimal(token1_price)

    logger.debug("daily fee estimate: delta0=%d delta1=%d usd=%s", delta_0, delta_1, total)
    return total
