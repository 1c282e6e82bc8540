"""
Tests for drift/volatility <-> price range conversion
"""

import math

import pytest

from ..analysis.price_range import (
    from_drift_vol,
    to_drift_vol,
    range_to_drift_vol,
    range_risk_metrics,
    Z_95,
)
from ..data.types import DriftVolParams, PredictionRange
from ..errors import InvalidInput


class TestFromDriftVol:
    """Price band from a drift/vol prediction"""

    def test_one_month_band(self):
        """P=2000, drift 5%, vol 25%, 30 days"""
        result = from_drift_vol(2000, 0.05, 0.25, 30)

        t = 30 / 365
        expected = 2000 * math.exp(0.05 * t)
        stddev = 0.25 * math.sqrt(t)

        assert result.min_price == pytest.approx(expected * math.exp(-stddev))
        assert result.max_price == pytest.approx(expected * math.exp(stddev))
        assert result.expected_price == pytest.approx(2008.24, rel=1e-4)
        assert result.min_price == pytest.approx(1869.3, rel=1e-3)
        assert result.max_price == pytest.approx(2157.5, rel=1e-3)
        assert result.time_horizon_days == 30

    def test_zero_drift_is_symmetric_in_log_space(self):
        result = from_drift_vol(100, 0.0, 0.5, 90)
        assert math.log(result.max_price / 100) == pytest.approx(-math.log(result.min_price / 100))

    def test_zero_volatility_collapses_band(self):
        result = from_drift_vol(100, 0.1, 0.0, 365)
        assert result.min_price == pytest.approx(result.max_price)

    @pytest.mark.parametrize("price,days", [(0, 30), (-1, 30), (100, 0), (100, -5)])
    def test_invalid_inputs(self, price, days):
        with pytest.raises(InvalidInput):
            from_drift_vol(price, 0.05, 0.25, days)

    @pytest.mark.parametrize("volatility", [-0.5, -1e-9, math.nan])
    def test_negative_volatility(self, volatility):
        """A negative volatility would put max below min"""
        with pytest.raises(InvalidInput):
            from_drift_vol(100, 0.0, volatility, 30)

    def test_band_is_ordered(self):
        for volatility in (0.0, 0.01, 0.5, 2.0):
            band = from_drift_vol(100, -0.3, volatility, 30)
            assert band.max_price >= band.min_price

    def test_overflow(self):
        with pytest.raises(InvalidInput):
            from_drift_vol(100, 1e6, 0.25, 365)


class TestToDriftVol:
    """Inverse mapping"""

    @pytest.mark.parametrize("price,drift,vol,days", [
        (2000, 0.05, 0.25, 30),
        (1.0, -0.4, 0.9, 7),
        (0.05, 0.0, 0.1, 365),
        (35_000, 1.2, 0.6, 90),
    ])
    def test_roundtrip(self, price, drift, vol, days):
        band = from_drift_vol(price, drift, vol, days)
        params = to_drift_vol(price, band.min_price, band.max_price, days)
        assert params.drift == pytest.approx(drift, rel=1e-9, abs=1e-12)
        assert params.volatility == pytest.approx(vol, rel=1e-9, abs=1e-12)
        assert params.time_horizon_days == days

    def test_degenerate_range(self):
        """min == max gives zero volatility"""
        params = to_drift_vol(100, 110, 110, 365)
        assert params.volatility == 0.0
        assert params.drift == pytest.approx(math.log(1.1))

    def test_range_wrapper(self):
        prediction = PredictionRange(min_price=90, max_price=120, time_horizon_days=60)
        assert range_to_drift_vol(100, prediction) == to_drift_vol(100, 90, 120, 60)

    @pytest.mark.parametrize("price,lo,hi,days", [
        (0, 90, 110, 30),
        (100, 0, 110, 30),
        (100, 90, -1, 30),
        (100, 90, 110, 0),
        (100, 110, 90, 30),
    ])
    def test_invalid_inputs(self, price, lo, hi, days):
        with pytest.raises(InvalidInput):
            to_drift_vol(price, lo, hi, days)


class TestRiskMetrics:
    def test_zero_drift(self):
        metrics = range_risk_metrics(2000, DriftVolParams(0.0, 0.25, 30))
        daily_vol = 0.25 / math.sqrt(365)
        assert metrics["daily_volatility"] == pytest.approx(daily_vol)
        assert metrics["value_at_risk"] == pytest.approx(2000 * daily_vol * Z_95)
        assert metrics["max_expected_loss"] > metrics["value_at_risk"]
        assert metrics["probability_of_loss"] == pytest.approx(0.5)

    def test_positive_drift_lowers_loss_probability(self):
        metrics = range_risk_metrics(2000, DriftVolParams(0.5, 0.25, 90))
        assert metrics["probability_of_loss"] < 0.5

    def test_zero_volatility(self):
        assert range_risk_metrics(100, DriftVolParams(-0.1, 0.0, 30))["probability_of_loss"] == 1.0
        assert range_risk_metrics(100, DriftVolParams(0.1, 0.0, 30))["probability_of_loss"] == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
