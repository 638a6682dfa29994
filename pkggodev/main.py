from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from pkggodev.api.routes import router
from pkggodev.core.config import settings
from pkggodev.core.log import configure_logging

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Serving pkg.go.dev data scraped from %s", settings.BASE_URL)
    yield

app = FastAPI(
    title="pkggodev",
    description="JSON API over package data scraped from pkg.go.dev",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "pkggodev",
        "version": "1.0.0",
        "endpoints": {
            "package": "GET /packages/{package}",
            "versions": "GET /versions/{package}",
            "imported_by": "GET /imported-by/{package}",
            "search": "GET /search?q=&limit=",
            "health": "GET /health"
        }
    }
