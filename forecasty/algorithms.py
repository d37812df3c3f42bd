"""
Forecasting strategies.

Each strategy takes the series snapshot, the horizon and the shared
ForecastContext and returns an AlgorithmResult with one prediction per label.
They are plain functions over their arguments, so the registry below is the
only thing the orchestrator needs to know about them.
"""
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from forecasty.constants import PREDICTION_DECIMALS
from forecasty.dates import elapsed_months, months_between, same_day_of_month
from forecasty.errors import InsufficientDataError
from forecasty.model.forecast import AlgorithmResult, ForecastContext
from forecasty.model.series import Observation
from forecasty.regression import fit

Algorithm = Callable[[Sequence[Observation], int, ForecastContext], AlgorithmResult]


def round_predictions(values) -> list[float]:
    return [round(v, PREDICTION_DECIMALS) for v in values]


def linear_forecast(series: Sequence[Observation], horizon: int, context: ForecastContext) -> AlgorithmResult:
    """
    OLS trend over time since the first observation, in months.

    Observations that all fall on the same day of month are placed on whole
    calendar months; anything else is placed by real elapsed days. Labels go
    on the same axis, so gaps in the observations stretch the fit instead of
    being treated as a single step.
    """
    if len(series) < 2:
        return AlgorithmResult(predictions=[], metadata={"reason": "needs at least 2 observations"})

    origin = series[0].date
    if same_day_of_month(obs.date for obs in series):
        axis, position = "calendar_months", months_between
    else:
        axis, position = "elapsed_days", elapsed_months

    line = fit((position(origin, obs.date), obs.value) for obs in series)
    predictions = [line.at(position(origin, label)) for label in context.labels[:horizon]]

    return AlgorithmResult(
        predictions=round_predictions(predictions),
        metadata={
            "slope": line.slope,
            "intercept": line.intercept,
            "origin": origin.isoformat(),
            "unit": "month",
            "axis": axis,
        }
    )


def moving_average_trend_forecast(
        series: Sequence[Observation],
        horizon: int,
        context: ForecastContext
) -> AlgorithmResult:
    """
    Fit a line to the last `window` observations only, re-indexed from 0, and
    extrapolate it one step per label.

    With a window of 1 this is a flat projection of the last value.
    """
    window = context.window
    if window <= 0 or not series:
        return AlgorithmResult(
            predictions=[0.0] * horizon,
            metadata={"window": window, "effective_window": 0}
        )

    recent = series[-window:]
    line = fit((i, obs.value) for i, obs in enumerate(recent))
    last_x = len(recent) - 1

    return AlgorithmResult(
        predictions=round_predictions(line.at(last_x + h) for h in range(1, horizon + 1)),
        metadata={
            "window": window,
            "effective_window": len(recent),
            "slope": line.slope,
            "intercept": line.intercept,
        }
    )


def naive_forecast(series: Sequence[Observation], horizon: int, context: ForecastContext) -> AlgorithmResult:
    if not series:
        raise InsufficientDataError("Naive forecast needs at least 1 observation")

    last = round(series[-1].value, PREDICTION_DECIMALS)
    return AlgorithmResult(predictions=[last] * horizon, metadata={"last_date": series[-1].date.isoformat()})


ALGORITHMS: Mapping[str, Algorithm] = MappingProxyType({
    "linear": linear_forecast,
    "ma": moving_average_trend_forecast,
    "naive": naive_forecast,
})

ALGORITHM_LABELS: Mapping[str, str] = MappingProxyType({
    "linear": "Linear",
    "ma": "MA",
    "naive": "Naive",
})
