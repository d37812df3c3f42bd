from typing import Optional, Sequence

from forecasty.algorithms import ALGORITHM_LABELS
from forecasty.formatting import format_day_month_year, format_month_year
from forecasty.model.chart import ChartData, ChartDataset, TableRow
from forecasty.model.forecast import AlgorithmResult, ForecastResult
from forecasty.model.series import Observation


def dataset_label(algorithm_id: str, output: AlgorithmResult) -> str:
    label = ALGORITHM_LABELS.get(algorithm_id, algorithm_id)
    if algorithm_id == "ma":
        return f"{label}({output.metadata.get('window')})"
    return label


def build_chart(series: Sequence[Observation], result: Optional[ForecastResult] = None) -> ChartData:
    """
    Line chart data with the actual series followed by the forecast labels.

    Every dataset has one entry per x label; forecasts are padded with None
    over the actual span and the actual series over the forecast span.
    """
    if not series:
        return ChartData()

    forecast_labels = result.labels if result is not None else []
    labels = [format_month_year(obs.date) for obs in series]
    labels += [format_month_year(d) for d in forecast_labels]

    padding = [None] * len(series)
    datasets = [
        ChartDataset(
            id="actual",
            label="Actual",
            data=[obs.value for obs in series] + [None] * len(forecast_labels)
        )
    ]

    if result is not None:
        for algorithm_id, output in result.per_algorithm.items():
            datasets.append(
                ChartDataset(
                    id=algorithm_id,
                    label=dataset_label(algorithm_id, output),
                    data=padding + output.predictions
                )
            )

    return ChartData(labels=labels, datasets=datasets)


def build_table(series: Sequence[Observation]) -> list[TableRow]:
    """One row per observation, dated DD/MM/YY for display."""
    return [
        TableRow(date=obs.date, display_date=format_day_month_year(obs.date), value=obs.value)
        for obs in series
    ]
