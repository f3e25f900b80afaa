# backend/paracal/main.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from paracal.config import get_settings
from paracal.db import SessionLocal, get_db, healthcheck, init_db
from paracal.errors import AppError
from paracal.routers.employees import router as employees_router
from paracal.routers.events import router as events_router
from paracal.routers.company_holidays import router as company_holidays_router
from paracal.routers.dashboard import router as dashboard_router
from paracal.routers.cronjobs import router as cronjobs_router
from paracal.services.scheduler import CronjobService, run_scheduler

logger = logging.getLogger(__name__)


def _format_validation_messages(exc: RequestValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = [str(v) for v in err.get("loc", []) if str(v) not in {"body", "query", "path"}]
        field = ".".join(loc) if loc else ""
        message = str(err.get("msg", "Invalid value"))
        if str(err.get("type", "")) == "missing":
            messages.append(f"{field} is required")
        elif field:
            messages.append(f"{field}: {message}")
        else:
            messages.append(message)
    return list(dict.fromkeys(messages))


def build_app(cronjob_service: CronjobService | None = None) -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=f"{settings.APP_NAME} API")
    app.state.cronjob_service = cronjob_service or CronjobService(SessionLocal)
    app.state.scheduler_task = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_ORIGIN],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "code": exc.code},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        messages = _format_validation_messages(exc)
        detail = messages[0] if len(messages) == 1 else "Validation failed"
        return JSONResponse(status_code=422, content={"detail": detail, "errors": messages})

    @app.get("/")
    def root():
        return {"message": f"{settings.APP_NAME} API is running", "docs": "/docs"}

    @app.get("/health")
    def health(db: Session = Depends(get_db)):
        healthcheck(db)
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(employees_router)
    app.include_router(events_router)
    app.include_router(company_holidays_router)
    app.include_router(dashboard_router)
    app.include_router(cronjobs_router)

    @app.on_event("startup")
    async def on_startup():
        init_db()
        if settings.SCHEDULER_ENABLED:
            app.state.scheduler_task = asyncio.create_task(
                run_scheduler(app.state.cronjob_service, settings.SCHEDULER_INTERVAL_SECONDS)
            )
        logger.info("[app] %s started (scheduler=%s)", settings.APP_NAME, settings.SCHEDULER_ENABLED)

    @app.on_event("shutdown")
    async def on_shutdown():
        task = app.state.scheduler_task
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        logger.info("[app] Shut down")

    return app


app = build_app()
