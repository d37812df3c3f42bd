from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, Field, TypeAdapter


class Observation(BaseModel):
    date: date
    value: float = Field(allow_inf_nan=False)


class SeriesSummary(BaseModel):
    count: int
    first: Optional[date] = None
    last: Optional[date] = None
    avg_interval_days: Optional[float] = None
    interval: str = "unknown"
    conditions: list[str] = []


# Persisted form of a series: a JSON list of {"date": "YYYY-MM-DD", "value": n}
SeriesAdapter = TypeAdapter(list[Observation])


def merge_observations(*batches: Iterable[Observation]) -> list[Observation]:
    """
    Merge batches of observations into one series sorted by date.

    Later batches win when two observations share a date, as do later entries
    within a batch. The inputs are never modified.
    """
    by_date = {}
    for batch in batches:
        for obs in batch:
            by_date[obs.date] = obs

    return [by_date[d] for d in sorted(by_date)]
