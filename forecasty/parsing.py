import io
import re
from datetime import date

import polars as pl

from forecasty.errors import ForecastyDataError, ForecastyNoDateError
from forecasty.model.series import Observation, merge_observations

SEPARATORS = (",", "\t", ";")


def normalize_text(text: str) -> tuple[str, str]:
    """
    Pick the separator for pasted text.

    Lines with no comma, tab or semicolon are taken to be whitespace
    separated and rewritten with commas.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    for separator in SEPARATORS:
        if any(separator in line for line in lines):
            return "\n".join(lines), separator

    return "\n".join(re.sub(r"\s+", ",", line) for line in lines), ","


def starts_with_date(text: str, separator: str) -> bool:
    first_field = text.split("\n", 1)[0].split(separator, 1)[0].strip().strip('"')
    try:
        date.fromisoformat(first_field)
    except ValueError:
        return False
    return True


def read_observations(data) -> list[Observation]:
    """
    Parse pasted text or an uploaded CSV into observations.

    The first date-like column is used for dates and the first numeric column
    for values. A header row is optional.

    :param data: str or bytes
    :return: observations sorted by date, last row winning on duplicate dates
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8-sig")

    if not data.strip():
        return []

    text, separator = normalize_text(data)
    try:
        df = pl.read_csv(
            io.BytesIO(text.encode()),
            separator=separator,
            has_header=not starts_with_date(text, separator),
            try_parse_dates=True
        )
    except pl.exceptions.PolarsError as e:
        raise ForecastyDataError(f"Unable to read series data: {e}") from e

    return observations_from_dataframe(df)


def observations_from_dataframe(df: pl.DataFrame) -> list[Observation]:
    date_cols = []
    value_cols = []

    for col, dtype in df.schema.items():
        if dtype.is_temporal():
            date_cols.append(col)
        elif dtype.is_numeric():
            value_cols.append(col)

    if len(date_cols) == 0:
        raise ForecastyNoDateError("No date column found")
    if len(value_cols) == 0:
        raise ForecastyDataError("No numeric value column found")

    frame = df.select(
        pl.col(date_cols[0]).cast(pl.Date).alias("date"),
        pl.col(value_cols[0]).cast(pl.Float64).alias("value")
    ).drop_nulls().filter(pl.col("value").is_finite())

    return merge_observations(Observation(**row) for row in frame.iter_rows(named=True))
