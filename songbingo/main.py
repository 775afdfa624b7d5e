import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from songbingo.api import cards_router, health_router, sessions_router, songs_router
from songbingo.config import settings
from songbingo.db.database import dispose_db, init_db
from songbingo.models.failure import (
    KnownError,
    RefusalError,
    create_unknown_failure,
    finalize_response,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    Path(settings.card_images_dir).mkdir(parents=True, exist_ok=True)
    await init_db()
    yield
    await dispose_db()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("songbingo"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(health_router)
app.include_router(sessions_router)
app.include_router(songs_router)

# Shared card images, as linked by `LocalImageStore.url_for`
app.mount(
    "/images",
    StaticFiles(directory=settings.card_images_dir, check_dir=False),
    name="images",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render known failures through the response envelope."""
    logger.warning("Known failure: %s (%s)", exc.kind.value, exc.detail)
    response = finalize_response(exc.to_response())
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(RefusalError)
async def refusal_error_handler(_request: Request, exc: RefusalError) -> JSONResponse:
    """Render refusals through the response envelope."""
    response = finalize_response(exc.to_response())
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Last resort: classify anything unexpected as an unknown failure."""
    logger.exception("Unhandled error", exc_info=exc)
    response = create_unknown_failure(exc)
    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
