from datetime import date
from typing import Any

import environ
from fastapi import FastAPI, HTTPException, Depends, Request, status
from fastapi.responses import Response, PlainTextResponse, JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog


from forecasty.chart import build_chart, build_table
from forecasty.constants import DEFAULT_HORIZON, DEFAULT_WINDOW, MAX_HORIZON, STORAGE_KEY
from forecasty.context import AppContext
from forecasty.errors import ForecastyDataError, ForecastyStorageError
from forecasty.forecast import coerce_horizon, run_forecast
from forecasty.frequency import summarize_series
from forecasty.model.chart import ChartData, TableRow
from forecasty.model.forecast import ForecastRequest, ForecastResponse
from forecasty.model.series import Observation, SeriesSummary
from forecasty.parsing import read_observations


class Settings(BaseSettings):
    env: str = "local"
    app_name: str = "Forecasty"
    secrets_dir: str = "/var/secrets"
    secrets: Any = None

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    storage_key: str = STORAGE_KEY

    default_horizon: int = DEFAULT_HORIZON
    max_horizon: int = MAX_HORIZON
    default_window: int = DEFAULT_WINDOW

    cors_origins: list[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = SettingsConfigDict(env_file=".env")


def load_secrets(secrets_dir: str):
    file_secrets = environ.secrets.DirectorySecrets.from_path(secrets_dir)

    @environ.config
    class SecretConfig:
        redis_password = file_secrets.secret(default=None, name="redis_password")

    return SecretConfig.from_environ()


structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ]
)

logger = structlog.get_logger()


app = FastAPI()
app.logger = logger

app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings():
    curr_settings = Settings()
    curr_settings.secrets = load_secrets(curr_settings.secrets_dir)
    return curr_settings


async def get_context(config: Settings = Depends(get_settings)):
    ctx = AppContext.from_settings(config, logger)
    try:
        yield ctx
    finally:
        await ctx.aclose()


@app.exception_handler(ForecastyStorageError)
async def storage_error_handler(request: Request, exc: ForecastyStorageError):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/")
async def root():
    return {"message": "This is the Forecasty API"}


@app.get("/health", response_class=PlainTextResponse)
async def health():
    return "OK"


@app.get("/forecasty/v1/series")
async def get_series(ctx: AppContext = Depends(get_context)) -> list[Observation]:
    return await ctx.store.load_series()


@app.post("/forecasty/v1/series")
async def add_observation(
        observation: Observation,
        ctx: AppContext = Depends(get_context)
) -> list[Observation]:
    ctx.logger.info("Adding observation", date=observation.date.isoformat(), value=observation.value)
    return await ctx.store.add_observation(observation)


@app.delete("/forecasty/v1/series/{obs_date}")
async def delete_observation(obs_date: date, ctx: AppContext = Depends(get_context)):
    if not await ctx.store.delete_observation(obs_date):
        raise HTTPException(status_code=404, detail="Observation not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.delete("/forecasty/v1/series")
async def clear_series(ctx: AppContext = Depends(get_context)):
    await ctx.store.clear()
    ctx.logger.info("Cleared series", key=ctx.store.key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/forecasty/v1/series/sample")
async def load_sample(ctx: AppContext = Depends(get_context)) -> list[Observation]:
    return await ctx.store.load_sample()


@app.post("/forecasty/v1/import")
async def import_series(request: Request, ctx: AppContext = Depends(get_context)) -> list[Observation]:
    """
    Merge pasted text or a CSV body into the stored series. Dates already
    present are overwritten by the imported values.
    """
    data = await request.body()
    try:
        observations = read_observations(data)
    except (ForecastyDataError, ValueError) as e:
        ctx.logger.error("Unable to parse import", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return await ctx.store.import_observations(observations)


@app.get("/forecasty/v1/table")
async def get_table(ctx: AppContext = Depends(get_context)) -> list[TableRow]:
    return build_table(await ctx.store.load_series())


@app.get("/forecasty/v1/summary")
async def get_summary(ctx: AppContext = Depends(get_context)) -> SeriesSummary:
    return summarize_series(await ctx.store.load_series())


@app.get("/forecasty/v1/chart")
async def get_chart(ctx: AppContext = Depends(get_context)) -> ChartData:
    return build_chart(await ctx.store.load_series())


@app.post("/forecasty/v1/forecast")
async def create_forecast(
        forecast_req: ForecastRequest,
        ctx: AppContext = Depends(get_context)
) -> ForecastResponse:
    series = await ctx.store.load_series()

    try:
        result = run_forecast(
            series,
            coerce_horizon(forecast_req.horizon, ctx.settings.default_horizon, ctx.settings.max_horizon),
            forecast_req.algorithms,
            window=forecast_req.window if forecast_req.window is not None else ctx.settings.default_window,
            max_horizon=ctx.settings.max_horizon,
            logger=ctx.logger
        )
    except ForecastyDataError as e:
        ctx.logger.info("Forecast refused", points=len(series), error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return ForecastResponse(forecast=result, chart=build_chart(series, result))
