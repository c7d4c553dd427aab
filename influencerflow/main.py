"""FastAPI entry-point exposing the campaign supervisor."""
from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from influencerflow.api.campaigns import router as campaigns_router
from influencerflow.api.routes import router as agents_router
from influencerflow.config import config
from influencerflow.core.log import configure_logging
from influencerflow.runtime import get_supervisor


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application."""
    configure_logging(config.log_level, json=config.log_json)
    supervisor = get_supervisor()
    structlog.get_logger(__name__).info(
        "app.started",
        environment=config.environment,
        agents=[agent.name for agent in supervisor.list_agents()],
    )
    yield


app = FastAPI(title="InfluencerFlow", lifespan=lifespan)
app.include_router(campaigns_router)
app.include_router(agents_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


def serve() -> None:
    """Run the API under uvicorn using the configured host and port."""
    uvicorn.run(
        "influencerflow.main:app",
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
