"""
Input Schemas using Pydantic

Validates user-edited prediction inputs before they reach the analysis core.
Percent fields mirror what the prediction form shows; to_* helpers convert
them to the decimal parameters the core expects.
"""
from pydantic import BaseModel, Field, model_validator

from .data.types import DriftVolParams, PredictionRange


class PredictionInputs(BaseModel):
    """Drift/volatility prediction as entered by the user (percent)"""
    volatility: float = Field(..., description="Annualized volatility (%)", ge=0, le=100)
    drift: float = Field(..., description="Annualized drift (%)", ge=-100, le=100)
    time_horizon: int = Field(default=30, description="Projection horizon (days)", ge=1, le=365)

    model_config = {
        "json_schema_extra": {
            "example": {
                "volatility": 25.0,
                "drift": 5.0,
                "time_horizon": 30
            }
        }
    }

    def to_decimal_params(self) -> DriftVolParams:
        """Convert percent inputs to decimal drift/vol"""
        return DriftVolParams(
            drift=self.drift / 100,
            volatility=self.volatility / 100,
            time_horizon_days=self.time_horizon,
        )


class PriceRangeInputs(BaseModel):
    """Min/max price prediction as entered by the user"""
    min_price: float = Field(..., description="Minimum expected price", gt=0)
    max_price: float = Field(..., description="Maximum expected price", gt=0)
    time_horizon: int = Field(default=30, description="Projection horizon (days)", ge=1, le=365)

    model_config = {
        "json_schema_extra": {
            "example": {
                "min_price": 1869.3,
                "max_price": 2157.5,
                "time_horizon": 30
            }
        }
    }

    @model_validator(mode="after")
    def check_ordering(self) -> "PriceRangeInputs":
        if self.max_price <= self.min_price:
            raise ValueError("max_price must be greater than min_price")
        return self

    def to_prediction_range(self) -> PredictionRange:
        return PredictionRange(
            min_price=self.min_price,
            max_price=self.max_price,
            time_horizon_days=self.time_horizon,
        )
