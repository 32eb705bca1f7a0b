"""FastAPI application for jobrunner."""

import logging

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from jobrunner.config import get_settings
from jobrunner.jobs.api import router as jobs_router
from jobrunner.schemas import HealthStatus

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="jobrunner", version=settings.VERSION)
app.include_router(jobs_router)


@app.get("/healthz", response_model=HealthStatus)
def healthz():
    return HealthStatus(version=settings.VERSION)


@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
