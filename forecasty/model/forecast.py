from datetime import date
from typing import Any, Optional

from pydantic import BaseModel

from forecasty.constants import DEFAULT_WINDOW
from forecasty.model.chart import ChartData


class FittedLine(BaseModel):
    slope: float
    intercept: float

    def at(self, x: float) -> float:
        return self.intercept + self.slope * x


class ForecastContext(BaseModel):
    """Inputs shared by every algorithm in one forecast request."""
    labels: list[date]
    window: int = DEFAULT_WINDOW


class AlgorithmResult(BaseModel):
    predictions: list[float]
    metadata: dict[str, Any] = {}


class ForecastResult(BaseModel):
    horizon: int
    labels: list[date]
    per_algorithm: dict[str, AlgorithmResult] = {}
    skipped: dict[str, str] = {}


class ForecastRequest(BaseModel):
    # Left loose so that junk from the form falls back to the default horizon
    horizon: Any = None
    algorithms: list[str] = ["linear"]
    window: Optional[int] = None


class ForecastResponse(BaseModel):
    forecast: ForecastResult
    chart: ChartData
