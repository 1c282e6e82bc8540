"""
Impermanent Loss Math - IL 계산

대칭(50/50) 전체 범위 constant-product 포지션의 IL.

핵심 공식:
    ratio = P_exit / P_entry
    IL = |2 × √ratio / (1 + ratio) - 1|

집중 유동성 범위에도 같은 공식을 적용한다. 이는 근사치이며
범위별로 다른 IL 모델을 쓰지 않는다.
"""

import logging
import math

logger = logging.getLogger(__name__)


def il_fraction(price_ratio: float) -> float:
    """가격 비율에 대한 IL 비율 (0 이상)

    Args:
        price_ratio: 종료가격 / 시작가격 (예: 2.0 = 100% 상승)

    Returns:
        IL 비율 (예: 0.0572 = 5.72%)
    """
    if price_ratio <= 0:
        return 0.0
    return abs(2 * math.sqrt(price_ratio) / (1 + price_ratio) - 1)


def compute_il(entry_price: float, exit_price: float, position_value_usd: float) -> float:
    """IL 금액 계산 (USD)

    입력이 0 이하인 경우는 대화형 입력이 아직 채워지지 않은 상태로 보고
    오류 대신 0을 반환한다.

    Args:
        entry_price: 진입 가격
        exit_price: 종료 가격
        position_value_usd: 포지션 가치 (USD)

    Returns:
        IL 금액 (USD, 0 이상)

    Example:
        >>> round(compute_il(100, 200, 10000), 1)
        571.9
    """
    values = (entry_price, exit_price, position_value_usd)
    if not all(math.isfinite(v) and v > 0 for v in values):
        logger.debug("IL inputs not populated: entry=%s exit=%s value=%s", *values)
        return 0.0

    return il_fraction(exit_price / entry_price) * position_value_usd
