from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RegressionModel(BaseModel):
    """Fitted OLS model. ``coefficients[0]`` is the bias term."""

    model_config = ConfigDict(frozen=True)

    coefficients: tuple[float, ...]
    r_squared: float
    rmse: float
    n_samples: int
    feature_names: tuple[str, ...] = ()

    @property
    def bias(self) -> float:
        return self.coefficients[0]
