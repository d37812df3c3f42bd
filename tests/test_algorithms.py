from datetime import date, timedelta

import pytest

from forecasty.algorithms import (
    ALGORITHMS, linear_forecast, moving_average_trend_forecast, naive_forecast
)
from forecasty.dates import future_dates
from forecasty.errors import InsufficientDataError
from forecasty.model.forecast import ForecastContext
from forecasty.model.series import Observation
from forecasty.regression import fit


def context_for(series, horizon, window=3):
    return ForecastContext(labels=future_dates(series[-1].date, horizon), window=window)


def test_registry_ids():
    assert set(ALGORITHMS) == {"linear", "ma", "naive"}


def test_linear_monthly(monthly_series):
    result = linear_forecast(monthly_series, 2, context_for(monthly_series, 2))

    assert result.predictions == [180.0, 200.0]
    assert result.metadata["slope"] == pytest.approx(20.0)
    assert result.metadata["intercept"] == pytest.approx(100.0)


def test_linear_matches_index_fit_for_even_spacing(monthly_series):
    result = linear_forecast(monthly_series, 1, context_for(monthly_series, 1))
    index_line = fit((i, obs.value) for i, obs in enumerate(monthly_series))

    assert result.metadata["slope"] == pytest.approx(index_line.slope)


def test_linear_irregular_spacing():
    # A missing month should not be read as a single step
    series = [
        Observation(date=date(2025, 1, 1), value=10),
        Observation(date=date(2025, 2, 1), value=20),
        Observation(date=date(2025, 5, 1), value=50),
    ]
    result = linear_forecast(series, 2, context_for(series, 2))

    assert result.predictions == [60.0, 70.0]


def test_linear_collinear_points():
    series = [
        Observation(date=future_dates(date(2024, 3, 10), m)[-1], value=7.5 - 1.25 * m)
        for m in range(1, 8)
    ]
    result = linear_forecast(series, 4, context_for(series, 4))

    # Line through the first two points, one step per month
    step = series[1].value - series[0].value
    expected = [series[-1].value + step * h for h in range(1, 5)]
    assert result.predictions == pytest.approx(expected, abs=1e-4)


def test_linear_single_observation():
    series = [Observation(date=date(2025, 1, 1), value=10)]
    result = linear_forecast(series, 3, context_for(series, 3))

    assert result.predictions == []


def test_linear_rounds_to_four_places():
    series = [
        Observation(date=date(2025, 1, 1), value=0),
        Observation(date=date(2025, 2, 1), value=1 / 3),
    ]
    result = linear_forecast(series, 1, context_for(series, 1))

    assert result.predictions == [0.6667]


def test_moving_average_trend_uses_window_only():
    series = [
        Observation(date=date(2025, m, 1), value=v)
        for m, v in zip(range(1, 7), [500, -300, 1000, 10, 20, 30])
    ]
    result = moving_average_trend_forecast(series, 3, context_for(series, 3, window=3))

    assert result.predictions == [40.0, 50.0, 60.0]
    assert result.metadata["effective_window"] == 3


def test_moving_average_trend_window_covers_series(monthly_series):
    ctx = context_for(monthly_series, 2, window=10)
    windowed = moving_average_trend_forecast(monthly_series, 2, ctx)
    full = linear_forecast(monthly_series, 2, ctx)

    assert windowed.predictions == full.predictions
    assert windowed.metadata["effective_window"] == 4


def test_moving_average_trend_window_of_one(monthly_series):
    result = moving_average_trend_forecast(monthly_series, 3, context_for(monthly_series, 3, window=1))

    assert result.predictions == [160.0, 160.0, 160.0]
    assert result.metadata["slope"] == 0


@pytest.mark.parametrize("window", [0, -2])
def test_moving_average_trend_bad_window(monthly_series, window):
    result = moving_average_trend_forecast(monthly_series, 3, context_for(monthly_series, 3, window=window))

    assert result.predictions == [0.0, 0.0, 0.0]


def test_moving_average_trend_empty_series():
    ctx = ForecastContext(labels=future_dates(date(2025, 1, 1), 2))

    assert moving_average_trend_forecast([], 2, ctx).predictions == [0.0, 0.0]


def test_naive(monthly_series):
    result = naive_forecast(monthly_series, 3, context_for(monthly_series, 3))

    assert result.predictions == [160.0, 160.0, 160.0]


@pytest.mark.parametrize("horizon", [1, 5, 12])
def test_naive_any_horizon(monthly_series, horizon):
    result = naive_forecast(monthly_series, horizon, context_for(monthly_series, horizon))

    assert result.predictions == [160.0] * horizon


def test_naive_single_observation():
    series = [Observation(date=date(2025, 1, 1), value=42.123456)]

    assert naive_forecast(series, 2, context_for(series, 2)).predictions == [42.1235, 42.1235]


def test_naive_empty():
    ctx = ForecastContext(labels=future_dates(date(2025, 1, 1), 2))

    with pytest.raises(InsufficientDataError):
        naive_forecast([], 2, ctx)


def test_linear_daily_across_month_end():
    start = date(2025, 2, 25)
    series = [Observation(date=start + timedelta(days=d), value=d) for d in range(8)]
    result = linear_forecast(series, 2, context_for(series, 2))

    # Labels are 2025-04-04 and 2025-05-04, 38 and 68 days after the start
    assert result.predictions == pytest.approx([38.0, 68.0], abs=1e-4)
    assert result.metadata["axis"] == "elapsed_days"


def test_linear_weekly_across_month_end():
    start = date(2025, 1, 20)
    series = [Observation(date=start + timedelta(weeks=w), value=5 + 2 * w) for w in range(6)]
    result = linear_forecast(series, 2, context_for(series, 2))

    expected = [5 + 2 * (label - start).days / 7 for label in context_for(series, 2).labels]
    assert result.predictions == pytest.approx(expected, abs=1e-4)


def test_linear_month_aligned_axis(monthly_series):
    result = linear_forecast(monthly_series, 1, context_for(monthly_series, 1))

    assert result.metadata["axis"] == "calendar_months"
