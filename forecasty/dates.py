import calendar
from datetime import date
from typing import Iterable

from forecasty.errors import ForecastyDataError

# Mean Gregorian month
AVERAGE_MONTH_DAYS = 365.2425 / 12


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(start: date, months: int) -> date:
    """Add calendar months to a date, clamping the day to the end of the
    target month when it is too short (Jan 31 + 1 month -> Feb 28/29).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, days_in_month(year, month))
    return date(year, month, day)


def future_dates(last_date: date, horizon: int) -> list[date]:
    """
    Dates for each forecast step after the last observation

    Step m is always computed from last_date, so a clamped day in one step
    does not shorten the following ones.

    :param last_date: date of the last observation
    :param horizon: number of steps, at least 1
    :return: list of horizon dates, one calendar month apart
    """
    if horizon < 1:
        raise ValueError(f"Horizon must be at least 1, got {horizon}")

    try:
        return [add_months(last_date, m) for m in range(1, horizon + 1)]
    except ValueError as e:
        raise ForecastyDataError(f"Forecast dates run past {date.max.year}") from e


def same_day_of_month(dates: Iterable[date]) -> bool:
    return len({d.day for d in dates}) == 1


def months_between(origin: date, day: date) -> int:
    """Calendar month steps from origin to day, ignoring the day of month.

    A label clamped to a short month (Jan 31 + 1 month -> Feb 28) is still
    exactly one step on.
    """
    return (day.year - origin.year) * 12 + (day.month - origin.month)


def elapsed_months(origin: date, day: date) -> float:
    """Real time from origin to day, in average-length months."""
    return (day - origin).days / AVERAGE_MONTH_DAYS
