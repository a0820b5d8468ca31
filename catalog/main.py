# catalog/main.py
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder

from catalog.api import authors, genres, books, instances, catalog, admin
from catalog.config import Settings
from catalog.dependencies import bootstrap_from_disk, snapshot
from catalog.domain.errors import (
    NotFoundError, ConflictError, BlockedError,
    ValidationFailedError, StoreUnavailableError,
)
from catalog.persistence.store import DiskStore
from catalog.repo.memory import DocumentStore
from pydantic import ValidationError as PydanticValidationError

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FILE = LOG_DIR / "catalog.log"


def _configure_logging(level: str):
    logger = logging.getLogger("catalog")
    logger.setLevel(level)
    if not logger.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(fmt)
        logger.addHandler(stream_handler)

        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=5)
            file_handler.setFormatter(fmt)
            logger.addHandler(file_handler)
        except OSError as exc:
            logger.warning("Failed to initialize file logging at %s: %s", LOG_FILE, exc)

    logger.propagate = False
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    _configure_logging(settings.log_level)
    logger = logging.getLogger("catalog")

    store = DiskStore(settings.data_dir)
    repo = DocumentStore(journal=store)
    logger.info("[persistence] data dir %s", store.root)

    app = FastAPI(title=settings.app_title)
    app.state.settings = settings
    app.state.store = store
    app.state.repo = repo

    @app.on_event("startup")
    def _load_snapshot_and_wal():
        bootstrap_from_disk(repo, store)

    @app.on_event("shutdown")
    def _write_snapshot():
        if settings.snapshot_on_shutdown:
            snapshot(repo, store)
            logger.info("[persistence] snapshot written on shutdown")

    # Routers
    app.include_router(catalog.router)
    app.include_router(authors.router)
    app.include_router(genres.router)
    app.include_router(books.router)
    app.include_router(instances.router)
    app.include_router(admin.router)

    # Exception handlers
    @app.exception_handler(NotFoundError)
    async def not_found_handler(_: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND,
                            content={"error":"NotFound","detail":exc.what})

    @app.exception_handler(ConflictError)
    async def conflict_handler(_: Request, exc: ConflictError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT,
                            content={"error":"Conflict","detail":exc.detail})

    @app.exception_handler(BlockedError)
    async def blocked_handler(_: Request, exc: BlockedError):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT,
                            content=jsonable_encoder({"error":"Blocked","detail":str(exc),
                                                      "blockers":exc.blockers}))

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(_: Request, exc: ValidationFailedError):
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                            content=jsonable_encoder({"error":"ValidationFailed","detail":exc.errors,
                                                      "data":exc.data}))

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(_: Request, exc: StoreUnavailableError):
        logger.error("[persistence] %s", exc.detail)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                            content={"error":"StoreUnavailable","detail":exc.detail})

    @app.exception_handler(PydanticValidationError)
    async def pydantic_validation_handler(_: Request, exc: PydanticValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=jsonable_encoder({"error":"ValidationError","detail":exc.errors()}),
        )

    return app
