"""
Recipe Ingest - FastAPI application.

Hosts the three functions behind one app:
    GET|POST /recipe-requests          record a request
    POST     /recipe-requests/process  process a request event
    GET|POST /recipes/fetch            ad-hoc extraction
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from recipe_ingest import __version__
from recipe_ingest.config import settings
from recipe_ingest.observability import configure_logging
from recipe_ingest.recipe_import import ConfigurationError, RecipeImportError
from recipe_ingest.web.fetch_routes import router as fetch_router
from recipe_ingest.web.request_routes import router as request_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Recipe Ingest", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Configure logging and report the active fetch chain."""
    configure_logging(settings.log_level, settings.log_format)
    logger.info("Recipe Ingest starting up...")
    logger.info(f"  Environment: {settings.recipe_ingest_env}")
    logger.info(f"  Fallback strategy: {settings.fallback_strategy}")


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.exception_handler(RecipeImportError)
async def recipe_import_error_handler(request: Request, exc: RecipeImportError):
    logger.error(f"Unhandled recipe import error on {request.url.path}: {exc}")
    return JSONResponse({"error": str(exc)}, status_code=500)


app.include_router(request_router)
app.include_router(fetch_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "Pong"
