from datetime import date
from typing import Optional

from pydantic import BaseModel


class ChartDataset(BaseModel):
    id: str
    label: str
    data: list[Optional[float]]


class ChartData(BaseModel):
    labels: list[str] = []
    datasets: list[ChartDataset] = []


class TableRow(BaseModel):
    date: date
    display_date: str
    value: float
