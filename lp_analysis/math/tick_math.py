"""
Tick Math - Tick ↔ Price 변환

References:
- 백서 Section 6.1: Ticks and Tick Spacing

핵심 공식:
    price = 1.0001^tick × 10^(decimals1 - decimals0)
    tick = log₁.₀₀₀₁(price / 10^(decimals1 - decimals0))
"""

import math
from typing import Tuple

from ..constants import MIN_TICK, MAX_TICK, TICK_BASE
from ..errors import InvalidInput


def tick_to_price(tick: int, decimals0: int = 18, decimals1: int = 18) -> float:
    """틱을 가격으로 변환

    Args:
        tick: 틱 인덱스
        decimals0: token0 소수점 자릿수
        decimals1: token1 소수점 자릿수

    Returns:
        1.0001^tick × 10^(decimals1 - decimals0)

    Example:
        >>> tick_to_price(0, 18, 18)
        1.0
    """
    return TICK_BASE ** tick * (10 ** (decimals1 - decimals0))


def price_to_tick(price: float, decimals0: int = 18, decimals1: int = 18) -> int:
    """가격을 틱으로 변환 (내림)

    Raises:
        InvalidInput: 가격이 양수가 아닌 경우
    """
    if price <= 0:
        raise InvalidInput(f"가격은 양수여야 합니다: {price}")

    ratio = price / (10 ** (decimals1 - decimals0))
    return math.floor(math.log(ratio) / math.log(TICK_BASE))


def clamp_tick(tick: int) -> int:
    """틱을 유효 범위로 제한"""
    return max(MIN_TICK, min(MAX_TICK, tick))


def tick_range_around(current_tick: int, width: int) -> Tuple[int, int]:
    """현재 틱을 중심으로 주어진 폭의 틱 범위 계산

    Args:
        current_tick: 중심 틱
        width: 범위 폭 (틱 수, 2 이상)

    Returns:
        (tick_lower, tick_upper), tick_lower < tick_upper 보장
    """
    if width < 2:
        raise InvalidInput(f"틱 범위 폭은 2 이상이어야 합니다: {width}")

    half = width // 2
    tick_lower = clamp_tick(current_tick - half)
    tick_upper = clamp_tick(current_tick + (width - half))

    # 경계에 걸린 경우 반대쪽으로 밀어냄
    if tick_upper - tick_lower < width:
        if tick_lower == MIN_TICK:
            tick_upper = clamp_tick(tick_lower + width)
        else:
            tick_lower = clamp_tick(tick_upper - width)

    return tick_lower, tick_upper
