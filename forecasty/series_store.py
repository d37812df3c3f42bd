from datetime import date
from typing import Iterable

from pydantic import ValidationError

from forecasty.constants import SAMPLE_SERIES, STORAGE_KEY
from forecasty.errors import ForecastyStorageError
from forecasty.model.series import Observation, SeriesAdapter, merge_observations


class SeriesStore:
    """
    The user's series, kept as one JSON list under a single redis key.

    Every method reads the key afresh; nothing is cached between calls.
    """

    def __init__(self, client, logger, key: str = STORAGE_KEY):
        self.client = client
        self.logger = logger
        self.key = key

    async def load_series(self) -> list[Observation]:
        raw = await self.client.get(self.key)
        if raw is None:
            return []

        try:
            return SeriesAdapter.validate_json(raw)
        except ValidationError as e:
            self.logger.error("Error decoding stored series", key=self.key, error=str(e))
            raise ForecastyStorageError(f"Stored series under '{self.key}' is unreadable") from e

    async def save_series(self, series: Iterable[Observation]) -> list[Observation]:
        series = merge_observations(series)
        await self.client.set(self.key, SeriesAdapter.dump_json(series))
        return series

    async def add_observation(self, observation: Observation) -> list[Observation]:
        """Insert an observation, replacing any existing one on the same date."""
        series = await self.load_series()
        return await self.save_series(merge_observations(series, [observation]))

    async def import_observations(self, observations: Iterable[Observation]) -> list[Observation]:
        observations = list(observations)
        series = await self.load_series()
        merged = await self.save_series(merge_observations(series, observations))
        self.logger.info("Imported observations", imported=len(observations), total=len(merged))
        return merged

    async def delete_observation(self, day: date) -> bool:
        series = await self.load_series()
        remaining = [obs for obs in series if obs.date != day]
        if len(remaining) == len(series):
            return False

        await self.save_series(remaining)
        return True

    async def clear(self):
        await self.client.delete(self.key)

    async def load_sample(self) -> list[Observation]:
        """Replace the stored series with the built-in sample."""
        return await self.save_series(SeriesAdapter.validate_python(SAMPLE_SERIES))
