"""
Best-effort date formatting for tables and chart axes.

These never raise: a value that is not a date, a datetime or an ISO date
string comes back as str(value) so that the caller can still show it.
"""
from datetime import date, datetime
from typing import Optional


def _as_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def format_month_year(value) -> str:
    """MM/YY, used for chart x labels"""
    d = _as_date(value)
    if d is None:
        return str(value)
    return d.strftime("%m/%y")


def format_day_month_year(value) -> str:
    """DD/MM/YY, used for table rows"""
    d = _as_date(value)
    if d is None:
        return str(value)
    return d.strftime("%d/%m/%y")
