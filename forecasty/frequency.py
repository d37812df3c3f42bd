from typing import Sequence

import polars as pl

from forecasty.model.series import Observation, SeriesSummary


def interval_counts(series: Sequence[Observation]) -> pl.DataFrame:
    """Counts of each gap, in days, between consecutive observations."""
    dates = pl.Series("interval", [obs.date for obs in series], dtype=pl.Date)
    return dates.sort().diff().dt.total_days().drop_nulls().value_counts()


def infer_interval(series: Sequence[Observation]) -> str:
    """Given a series of observations, name its cadence.
    """
    if len(series) < 2:
        return "unknown"

    counts = interval_counts(series)
    most_common = counts.sort("count", descending=True).head(1)["interval"][0]

    if 28 <= most_common <= 31:
        # Calendar months vary in length, so these are all one cadence
        return "monthly"
    if len(counts) == 1 and most_common == 1:
        return "daily"
    if len(counts) == 1 and most_common == 7:
        return "weekly"

    return "irregular"


def check_series(series: Sequence[Observation]) -> list[str]:
    """
    Flag spacing problems that make index-based projections misleading.

    :param series: observations, presumed to have unique dates
    :return: list of conditions
    """
    if len(series) < 2:
        return []

    counts = interval_counts(series)

    uneven = len(counts) > 4
    gaps = counts["interval"].max() > 5 * counts["interval"].min()

    conditions = []
    if uneven:
        conditions.append("Uneven")
    if gaps:
        conditions.append("Gaps")

    return conditions


def summarize_series(series: Sequence[Observation]) -> SeriesSummary:
    if not series:
        return SeriesSummary(count=0)

    dates = pl.Series("date", [obs.date for obs in series], dtype=pl.Date).sort()
    avg_interval_days = None
    if len(series) > 1:
        avg_interval_days = dates.diff().dt.total_days().drop_nulls().mean()

    return SeriesSummary(
        count=len(series),
        first=dates[0],
        last=dates[-1],
        avg_interval_days=avg_interval_days,
        interval=infer_interval(series),
        conditions=check_series(series)
    )
