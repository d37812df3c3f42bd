import redis.asyncio as redis

from forecasty.series_store import SeriesStore


class AppContext:
    """Everything a request handler needs, built per request."""

    def __init__(self, settings, logger, store: SeriesStore):
        self.settings = settings
        self.logger = logger
        self.store = store

    @classmethod
    def from_settings(cls, settings, logger):
        password = None
        if settings.secrets is not None and settings.secrets.redis_password:
            password = settings.secrets.redis_password.strip()

        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=password
        )
        return cls(settings, logger, SeriesStore(client, logger, key=settings.storage_key))

    async def aclose(self):
        await self.store.client.aclose()
