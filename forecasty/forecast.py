from typing import Iterable, Sequence

import structlog

from forecasty.algorithms import ALGORITHMS
from forecasty.constants import DEFAULT_HORIZON, DEFAULT_WINDOW, MAX_HORIZON, MIN_FORECAST_POINTS
from forecasty.dates import future_dates
from forecasty.errors import AlgorithmOutputMismatchError, InsufficientDataError
from forecasty.model.forecast import AlgorithmResult, ForecastContext, ForecastResult
from forecasty.model.series import Observation, merge_observations


def coerce_horizon(value, default: int = DEFAULT_HORIZON, maximum: int = MAX_HORIZON) -> int:
    """Positive integer horizon capped at maximum, or the default for anything else."""
    try:
        horizon = int(value)
    except (TypeError, ValueError, OverflowError):
        return default

    if horizon < 1:
        return default
    return min(horizon, maximum)


def validate_output(algorithm_id: str, output: AlgorithmResult, horizon: int) -> AlgorithmResult:
    if len(output.predictions) != horizon:
        raise AlgorithmOutputMismatchError(algorithm_id, horizon, len(output.predictions))
    return output


def run_forecast(
        series: Sequence[Observation],
        horizon,
        algorithms: Iterable[str],
        window: int = DEFAULT_WINDOW,
        max_horizon: int = MAX_HORIZON,
        logger=None
) -> ForecastResult:
    """
    Run every enabled algorithm against the same future labels.

    A failing algorithm, or one that returns the wrong number of predictions,
    is logged and listed in `skipped`; the others are unaffected.

    :param series: observation snapshot, left untouched
    :param horizon: requested number of steps, coerced to the default if invalid
        and capped at max_horizon
    :param algorithms: ids from ALGORITHMS; duplicates are ignored
    :param window: moving-average-trend window
    :param max_horizon: largest number of steps produced
    :param logger: structlog logger
    :return: ForecastResult with labels and per-algorithm predictions
    """
    logger = logger or structlog.get_logger()

    horizon = coerce_horizon(horizon, maximum=max_horizon)
    snapshot = merge_observations(series)
    if len(snapshot) < MIN_FORECAST_POINTS:
        raise InsufficientDataError(f"Add at least {MIN_FORECAST_POINTS} points to forecast")

    labels = future_dates(snapshot[-1].date, horizon)
    context = ForecastContext(labels=labels, window=window)
    result = ForecastResult(horizon=horizon, labels=labels)

    for algorithm_id in dict.fromkeys(algorithms):
        compute = ALGORITHMS.get(algorithm_id)
        if compute is None:
            logger.warning("Unknown forecast algorithm", algorithm=algorithm_id)
            result.skipped[algorithm_id] = "Unknown algorithm"
            continue

        try:
            output = validate_output(algorithm_id, compute(snapshot, horizon, context), horizon)
        except AlgorithmOutputMismatchError as e:
            logger.warning("Discarding forecast", algorithm=algorithm_id, expected=e.expected, actual=e.actual)
            result.skipped[algorithm_id] = str(e)
            continue
        except Exception as e:
            logger.error("Forecast algorithm failed", algorithm=algorithm_id, error=str(e))
            result.skipped[algorithm_id] = str(e)
            continue

        result.per_algorithm[algorithm_id] = output

    logger.info(
        "Forecast complete",
        horizon=horizon,
        points=len(snapshot),
        algorithms=list(result.per_algorithm),
        skipped=list(result.skipped)
    )

    return result
