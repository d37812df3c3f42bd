from typing import Iterable

from forecasty.errors import InsufficientDataError
from forecasty.model.forecast import FittedLine


def fit(points: Iterable[tuple[float, float]]) -> FittedLine:
    """
    Ordinary least squares line through (x, y) points.

    When every x is the same the slope is taken to be 0 and the line is flat
    at the mean of y.

    :param points: (x, y) pairs, at least one
    :return: fitted slope and intercept
    """
    points = list(points)
    if not points:
        raise InsufficientDataError("Cannot fit a line without any points")

    n = len(points)
    mean_x = sum(x for x, _ in points) / n
    mean_y = sum(y for _, y in points) / n

    num = 0.0
    den = 0.0
    for x, y in points:
        num += (x - mean_x) * (y - mean_y)
        den += (x - mean_x) * (x - mean_x)

    slope = 0.0 if den == 0 else num / den
    intercept = mean_y - slope * mean_x

    return FittedLine(slope=slope, intercept=intercept)
