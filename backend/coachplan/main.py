# backend/coachplan/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coachplan.config import FRONTEND_ORIGIN, LOG_LEVEL
from coachplan.db import healthcheck
from coachplan.errors import (
    EditorValidationError,
    OverrideNotFoundError,
    PersistenceError,
    SlotNotFoundError,
)
from coachplan.routers.calendar import router as calendar_router
from coachplan.routers.directory import router as directory_router
from coachplan.routers.slot_overrides import router as slot_overrides_router
from coachplan.routers.training_slots import router as training_slots_router

logger = logging.getLogger(__name__)


def build_app() -> FastAPI:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Coachplan API")

    # CORS: local dev servers plus the configured frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_ORIGIN],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    @app.exception_handler(EditorValidationError)
    async def validation_error_handler(request: Request, exc: EditorValidationError):
        return JSONResponse(status_code=422, content={"detail": exc.errors})

    @app.exception_handler(SlotNotFoundError)
    @app.exception_handler(OverrideNotFoundError)
    async def not_found_handler(request: Request, exc: Exception):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    # Health
    @app.get("/health")
    def health():
        return healthcheck()

    # overrides first: "/training-slots/overrides" must not be captured by "/training-slots/{slot_id}"
    app.include_router(slot_overrides_router)
    app.include_router(training_slots_router)
    app.include_router(calendar_router)
    app.include_router(directory_router)

    logger.info("Coachplan API ready")
    return app


app = build_app()
