import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from clustermetrics import __version__
from clustermetrics.api.endpoints.health import store_unavailable
from clustermetrics.api.router import api_router
from clustermetrics.core.config import settings
from clustermetrics.core.errors import DataUnavailableError, MetricsValidationError
from clustermetrics.core.logger import configure_logging, get_logger
from clustermetrics.infrastructure.factory import build_window_store

# Configure logging once and get service logger
configure_logging()
logger = get_logger("clustermetrics.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "metrics_api_starting", extra={"backend": settings.metrics_store_backend}
    )
    app.state.store = build_window_store(settings)
    app.state.ready_event = asyncio.Event()
    reason = await store_unavailable(app.state.store)
    if reason is None:
        app.state.ready_event.set()
    else:
        # /readyz keeps probing and flips to ready once the store answers
        logger.warning("window_store_unreachable", extra={"reason": reason})
    try:
        yield
    finally:
        logger.info("metrics_api_stopping")
        await app.state.store.close()


app = FastAPI(title="Cluster Metrics API", version=__version__, lifespan=lifespan)
app.include_router(api_router)


@app.exception_handler(MetricsValidationError)
async def _validation_error(request: Request, exc: MetricsValidationError):
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(DataUnavailableError)
async def _data_unavailable(request: Request, exc: DataUnavailableError):
    return JSONResponse(status_code=404, content=exc.to_dict())


@app.get("/metrics")
async def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
