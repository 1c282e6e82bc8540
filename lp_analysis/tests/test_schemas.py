"""
Tests for user input schemas
"""

import pytest
from pydantic import ValidationError

from ..schemas import PredictionInputs, PriceRangeInputs


class TestPredictionInputs:
    def test_defaults_and_conversion(self):
        inputs = PredictionInputs(volatility=25, drift=5)
        assert inputs.time_horizon == 30

        params = inputs.to_decimal_params()
        assert params.volatility == pytest.approx(0.25)
        assert params.drift == pytest.approx(0.05)
        assert params.time_horizon_days == 30

    @pytest.mark.parametrize("field,value", [
        ("volatility", -1),
        ("volatility", 101),
        ("drift", -101),
        ("drift", 100.5),
        ("time_horizon", 0),
        ("time_horizon", 366),
        ("time_horizon", 30.5),
    ])
    def test_out_of_range(self, field, value):
        data = {"volatility": 25, "drift": 5, "time_horizon": 30}
        data[field] = value
        with pytest.raises(ValidationError):
            PredictionInputs(**data)

    def test_bounds_inclusive(self):
        inputs = PredictionInputs(volatility=100, drift=-100, time_horizon=365)
        assert inputs.time_horizon == 365


class TestPriceRangeInputs:
    def test_conversion(self):
        prediction = PriceRangeInputs(min_price=1800, max_price=2200, time_horizon=60).to_prediction_range()
        assert prediction.min_price == 1800
        assert prediction.max_price == 2200
        assert prediction.time_horizon_days == 60

    @pytest.mark.parametrize("min_price,max_price", [(2000, 2000), (2200, 1800)])
    def test_ordering(self, min_price, max_price):
        with pytest.raises(ValidationError):
            PriceRangeInputs(min_price=min_price, max_price=max_price)

    def test_non_positive_price(self):
        with pytest.raises(ValidationError):
            PriceRangeInputs(min_price=0, max_price=100)
