"""
Fixed Point Math 테스트

uint256 랩어라운드 뺄셈과 단위 변환을 테스트합니다.
"""

from decimal import Decimal

import pytest

from ..math.fixed_point import (
    parse_u256,
    sub_in_256,
    from_raw_units,
    to_raw_units,
    to_decimal,
)
from ..constants import Q128, Q256, UINT256_MAX
from ..errors import InvalidDecimals, InvalidInput, ParseError


class TestParseU256:
    """parse_u256 테스트"""

    def test_decimal_string(self):
        """Subgraph 10진수 문자열 파싱"""
        assert parse_u256("340282366920938463463374607431768211456") == Q128

    def test_int_passthrough(self):
        assert parse_u256(42) == 42

    def test_max_value(self):
        assert parse_u256(str(UINT256_MAX)) == UINT256_MAX

    @pytest.mark.parametrize("value", ["-5", "12.5", "abc", "", "1e18", " ", "0x10"])
    def test_malformed_strings(self, value):
        """올바르지 않은 문자열은 ParseError"""
        with pytest.raises(ParseError):
            parse_u256(value)

    def test_negative_int(self):
        with pytest.raises(ParseError):
            parse_u256(-1)

    def test_overflow(self):
        """2^256 이상은 uint256 범위 밖"""
        with pytest.raises(ParseError):
            parse_u256(Q256)

    def test_rejects_float_and_bool(self):
        with pytest.raises(ParseError):
            parse_u256(1.0)
        with pytest.raises(ParseError):
            parse_u256(True)


class TestSubIn256:
    """sub_in_256 테스트"""

    def test_normal_delta(self):
        assert sub_in_256(1000, 500) == 500

    def test_underflow_wraparound(self):
        """언더플로우 래핑: 5 - 10 = 2^256 - 5"""
        assert sub_in_256(5, 10) == 2**256 - 5

    def test_counter_wrapped_past_zero(self):
        """카운터가 2^256을 넘어 0 근처로 돌아온 경우 실제 증가분 복원"""
        previous = UINT256_MAX - 9
        latest = 5
        assert sub_in_256(latest, previous) == 15

    def test_string_inputs(self):
        assert sub_in_256(str(3 * Q128), str(Q128)) == 2 * Q128

    def test_zero_delta(self):
        assert sub_in_256("777", "777") == 0

    def test_malformed_input(self):
        with pytest.raises(ParseError):
            sub_in_256("12", "-3")


class TestUnitConversion:
    """from_raw_units / to_raw_units 테스트"""

    def test_from_raw_units_usdc(self):
        assert from_raw_units(1_500_000, 6) == Decimal("1.5")

    def test_from_raw_units_exact_at_q128_magnitude(self):
        """float64로는 표현할 수 없는 크기도 정확히 보존"""
        assert from_raw_units(Q128 + 1, 0) == Decimal(Q128 + 1)

    def test_from_raw_units_zero_decimals(self):
        assert from_raw_units(123, 0) == Decimal(123)

    def test_to_raw_units_weth(self):
        assert to_raw_units(1.5, 18) == 1_500_000_000_000_000_000

    def test_to_raw_units_truncates(self):
        assert to_raw_units(Decimal("1.23456789"), 6) == 1_234_567

    def test_to_raw_units_negative_amount(self):
        with pytest.raises(InvalidInput):
            to_raw_units(-1, 6)

    @pytest.mark.parametrize("decimals", [-1, -18])
    def test_negative_decimals(self, decimals):
        with pytest.raises(InvalidDecimals):
            from_raw_units(1, decimals)
        with pytest.raises(InvalidDecimals):
            to_raw_units(1, decimals)

    def test_non_integer_decimals(self):
        with pytest.raises(InvalidDecimals):
            from_raw_units(1, 1.5)

    def test_from_raw_units_string(self):
        """Subgraph 문자열 수량"""
        assert from_raw_units("2500000", 6) == Decimal("2.5")

    @pytest.mark.parametrize("amount", ["abc", "-5", "1.5", "1e6", ""])
    def test_from_raw_units_malformed_string(self, amount):
        """최소 단위 문자열은 음이 아닌 정수만 허용"""
        with pytest.raises(ParseError):
            from_raw_units(amount, 6)

    def test_to_raw_units_string(self):
        assert to_raw_units("1.25", 6) == 1_250_000

    @pytest.mark.parametrize("amount", ["1e", "1e6", "-5", "abc", "NaN", "Infinity", " "])
    def test_to_raw_units_malformed_string(self, amount):
        with pytest.raises(ParseError):
            to_raw_units(amount, 6)


class TestToDecimal:
    """to_decimal 테스트"""

    def test_float_uses_repr(self):
        """이진 부동소수점 잡음 없이 변환"""
        assert to_decimal(0.1) == Decimal("0.1")

    def test_non_finite(self):
        with pytest.raises(InvalidInput):
            to_decimal(float("nan"))
        with pytest.raises(InvalidInput):
            to_decimal(float("inf"))

    def test_string(self):
        assert to_decimal(" 12.50 ") == Decimal("12.50")
        assert to_decimal(".5") == Decimal("0.5")

    @pytest.mark.parametrize("value", ["-1", "1e3", "0x10", "1.2.3", "inf"])
    def test_malformed_string(self, value):
        with pytest.raises(ParseError):
            to_decimal(value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
