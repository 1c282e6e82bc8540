"""
Fixed Point Math - Q128.128 fee growth 보조 연산

Uniswap V3의 feeGrowthGlobalX128 카운터는 2^128 근처의 크기를 가지므로
float64로는 정확히 표현할 수 없다. 정수 연산은 Python int로,
소수 변환은 50자리 정밀도의 Decimal로 처리한다.

핵심 공식:
    sub_in_256(x, y) = (x - y) mod 2^256      # 컨트랙트의 unchecked 뺄셈과 동일
    from_raw_units(a, d) = a / 10^d
    to_raw_units(a, d) = a × 10^d
"""

import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP, localcontext
from typing import Union

from ..constants import DECIMAL_PRECISION, Q256, UINT256_MAX
from ..errors import InvalidDecimals, InvalidInput, ParseError

Numeric = Union[int, float, str, Decimal]

_UINT_PATTERN = re.compile(r"^[0-9]+$")
_UDECIMAL_PATTERN = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)$")

# 모든 Decimal 연산에 사용하는 컨텍스트 (50자리, 반올림)
DECIMAL_CONTEXT = Context(prec=DECIMAL_PRECISION, rounding=ROUND_HALF_UP)


def parse_u256(value: Union[int, str]) -> int:
    """uint256 값을 정수로 파싱

    Subgraph는 fee growth를 10진수 문자열로 반환한다.

    Args:
        value: 정수 또는 10진수 문자열

    Returns:
        0 이상 2^256 - 1 이하의 정수

    Raises:
        ParseError: 음수, 소수, 빈 문자열 등 올바르지 않은 입력
    """
    if isinstance(value, bool):
        raise ParseError(f"uint256 값이 아닙니다: {value!r}")

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _UINT_PATTERN.match(value.strip()):
        parsed = int(value.strip())
    else:
        raise ParseError(f"음이 아닌 정수 문자열이 아닙니다: {value!r}")

    if parsed < 0 or parsed > UINT256_MAX:
        raise ParseError(f"uint256 범위를 벗어났습니다: {value!r}")
    return parsed


def sub_in_256(x: Union[int, str], y: Union[int, str]) -> int:
    """256비트 랩어라운드 뺄셈

    컨트랙트는 fee growth 오버플로우를 의도적으로 허용한다.
    따라서 두 스냅샷 간 차이만 의미가 있고, 절대값은 의미가 없다.

    Args:
        x: 나중 시점 카운터
        y: 이전 시점 카운터

    Returns:
        (x - y) mod 2^256
    """
    difference = parse_u256(x) - parse_u256(y)
    if difference < 0:
        difference += Q256
    return difference


def _check_decimals(decimals: int) -> int:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise InvalidDecimals(f"decimals는 정수여야 합니다: {decimals!r}")
    if decimals < 0:
        raise InvalidDecimals(f"decimals는 0 이상이어야 합니다: {decimals}")
    return decimals


def to_decimal(value: Numeric) -> Decimal:
    """숫자를 Decimal로 변환

    float는 repr 문자열을 거쳐 변환하여 이진 부동소수점 잡음을 피한다.
    문자열은 음이 아닌 10진수 표기만 허용한다 (지수, 부호 불가).

    Raises:
        InvalidInput: NaN 또는 무한대
        ParseError: 올바르지 않은 숫자 문자열
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, str):
        if not _UDECIMAL_PATTERN.match(value.strip()):
            raise ParseError(f"음이 아닌 10진수 문자열이 아닙니다: {value!r}")
        result = Decimal(value.strip())
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidInput(f"유한한 숫자가 아닙니다: {value!r}")
        result = Decimal(repr(value))
    else:
        result = Decimal(value)

    if not result.is_finite():
        raise InvalidInput(f"유한한 숫자가 아닙니다: {value!r}")
    return result


def from_raw_units(amount: Numeric, decimals: int) -> Decimal:
    """토큰 최소 단위 → human-readable 수량

    Args:
        amount: 최소 단위 수량 (예: wei)
        decimals: 토큰 소수점 자릿수

    Returns:
        amount / 10^decimals

    Raises:
        ParseError: 문자열 수량이 음이 아닌 정수가 아닌 경우
    """
    _check_decimals(decimals)
    if isinstance(amount, str):
        amount = parse_u256(amount)
    with localcontext(DECIMAL_CONTEXT):
        return to_decimal(amount) / (Decimal(10) ** decimals)


def to_raw_units(amount: Numeric, decimals: int) -> int:
    """human-readable 수량 → 토큰 최소 단위

    소수점 이하는 0 방향으로 버린다.

    Args:
        amount: human-readable 수량
        decimals: 토큰 소수점 자릿수

    Returns:
        amount × 10^decimals (정수)

    Raises:
        InvalidInput: 음수 수량
        ParseError: 올바르지 않은 숫자 문자열
    """
    _check_decimals(decimals)
    with localcontext(DECIMAL_CONTEXT):
        scaled = to_decimal(amount) * (Decimal(10) ** decimals)
    if scaled < 0:
        raise InvalidInput(f"수량은 0 이상이어야 합니다: {amount!r}")
    return int(scaled)
