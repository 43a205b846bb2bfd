"""FastAPI application entrypoint."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from remote_posts.config import Settings
from remote_posts.factory import create_post_client
from remote_posts.gateway import router as posts_router
from remote_posts.telemetry import configure_logging, init_telemetry, shutdown_telemetry

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = Settings()
    configure_logging(settings.log_level)
    init_telemetry()
    app.state.settings = settings
    app.state.post_client = create_post_client(settings)

    await log.ainfo("service started", clients=sorted(settings.client_registry.mappings))
    yield

    await app.state.post_client.aclose()
    await log.ainfo("service stopped")
    shutdown_telemetry()


app = FastAPI(title="Remote Posts Gateway", lifespan=lifespan)
app.include_router(posts_router)
FastAPIInstrumentor.instrument_app(app)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
