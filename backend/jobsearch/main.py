from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobsearch.api import health, runs, search, sources
from jobsearch.api.search import describe_validation_error
from jobsearch.core.config import settings
from jobsearch.core.logging_config import setup_logging
from jobsearch.crawlers.registry import SourceRegistry
from jobsearch.db.init_db import init_db
from jobsearch.errors import InvalidQuery

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    setup_logging()
    init_db()
    app.state.registry = SourceRegistry()
    logger.info("%s started (env=%s)", settings.app_name, settings.env)


@app.on_event("shutdown")
async def on_shutdown():
    registry = getattr(app.state, "registry", None)
    if registry is not None:
        await registry.close()


def _error(status_code: int, kind: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": kind, "message": message})


@app.exception_handler(InvalidQuery)
async def invalid_query_handler(_request: Request, exc: InvalidQuery):
    return _error(400, exc.kind, str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    return _error(400, InvalidQuery.kind, describe_validation_error(exc) or "Invalid request")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if settings.is_production:
        return _error(500, "InternalError", "An unexpected error occurred. Please try again later.")
    return _error(500, exc.__class__.__name__, str(exc) or "Unknown error occurred")


app.include_router(health.router)
app.include_router(search.router, prefix=settings.api_prefix)
app.include_router(sources.router, prefix=settings.api_prefix)
app.include_router(runs.router, prefix=settings.api_prefix)
