"""
IL Math 테스트

IL = |2 × √ratio / (1 + ratio) - 1|
"""

import math

import pytest

from ..math.il_math import il_fraction, compute_il


class TestILFraction:
    """il_fraction 테스트"""

    def test_no_price_change(self):
        assert il_fraction(1.0) == 0.0

    def test_price_doubles(self):
        """가격 2배 → 약 5.72%"""
        assert il_fraction(2.0) == pytest.approx(0.0572, abs=1e-4)

    def test_reciprocal_symmetry(self):
        """ratio와 1/ratio의 IL은 동일"""
        assert il_fraction(4.0) == pytest.approx(il_fraction(0.25))

    @pytest.mark.parametrize("ratio", [0.01, 0.5, 0.999, 1.001, 3.0, 100.0])
    def test_never_negative(self, ratio):
        assert il_fraction(ratio) >= 0.0

    @pytest.mark.parametrize("ratio", [0.0, -1.0])
    def test_non_positive_ratio(self, ratio):
        assert il_fraction(ratio) == 0.0


class TestComputeIL:
    """compute_il 테스트 (USD)"""

    def test_price_doubles(self):
        """10,000 USD 포지션, 100 → 200"""
        assert compute_il(100, 200, 10_000) == pytest.approx(571.9, abs=0.1)

    def test_equal_prices(self):
        assert compute_il(2000, 2000, 10_000) == 0.0

    def test_up_and_down_symmetry(self):
        """100 → 200 과 100 → 50 은 같은 IL"""
        assert compute_il(100, 200, 10_000) == pytest.approx(compute_il(100, 50, 10_000))

    def test_scales_with_position_value(self):
        assert compute_il(100, 150, 20_000) == pytest.approx(2 * compute_il(100, 150, 10_000))

    @pytest.mark.parametrize("entry,exit_,value", [
        (0, 200, 10_000),
        (100, 0, 10_000),
        (100, 200, 0),
        (-100, 200, 10_000),
        (100, 200, -5),
        (math.nan, 200, 10_000),
    ])
    def test_unpopulated_inputs_return_zero(self, entry, exit_, value):
        """입력이 채워지지 않은 경우 오류 대신 0"""
        assert compute_il(entry, exit_, value) == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
