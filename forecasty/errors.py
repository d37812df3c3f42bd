
class ForecastyError(Exception):
    """Base class for all Forecasty errors."""
    pass


class ForecastyDataError(ForecastyError):
    """Raised when the series data cannot be used as given."""
    pass


class ForecastyNoDateError(ForecastyDataError):
    """Raised when there is no date column in imported data."""
    pass


class InsufficientDataError(ForecastyDataError):
    """Raised when there are too few observations for a fit."""
    pass


class AlgorithmOutputMismatchError(ForecastyError):
    """Raised when an algorithm returns the wrong number of predictions."""

    def __init__(self, algorithm_id: str, expected: int, actual: int):
        super().__init__(
            f"Algorithm '{algorithm_id}' returned {actual} predictions, expected {expected}"
        )
        self.algorithm_id = algorithm_id
        self.expected = expected
        self.actual = actual


class ForecastyStorageError(ForecastyError):
    """Raised when the persisted series cannot be decoded."""
    pass
