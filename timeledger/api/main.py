from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from timeledger.api.routes import health, tasks, time_entries
from timeledger.core.config import Settings, get_settings
from timeledger.core.logging import configure_logging, get_logger
from timeledger.core.monitoring import configure_error_monitoring
from timeledger.errors import DuplicateTask, LedgerError, UnknownTask
from timeledger.storage import DataStore

logger = get_logger(__name__)


def unknown_task_handler(request: Request, exc: UnknownTask) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def duplicate_task_handler(request: Request, exc: DuplicateTask) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc)})


def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.info("entry_rejected", path=request.url.path, error=type(exc).__name__)
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": type(exc).__name__})


def create_app(settings: Settings | None = None, store: DataStore | None = None) -> FastAPI:
    """Build the API around a store.

    Nothing is created at import time; serve with
    ``uvicorn --factory timeledger.api.main:create_app`` or ``timeledger serve``.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    configure_error_monitoring(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("startup_complete", env=settings.env, data_path=str(app.state.store.path))
        yield

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store if store is not None else DataStore(settings.data_path, break_hours=settings.break_hours)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(UnknownTask, unknown_task_handler)
    app.add_exception_handler(DuplicateTask, duplicate_task_handler)
    app.add_exception_handler(LedgerError, ledger_error_handler)

    app.include_router(health.router)
    app.include_router(tasks.router)
    app.include_router(time_entries.router)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"message": "Time ledger API running", "environment": settings.env}

    return app

