"""
gradebook/main.py
FastAPI application exposing the grade and progress reports.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from gradebook.config import settings
from gradebook.errors import register_exception_handlers
from gradebook.routes import router
from gradebook.services.factory import build_report_services
from gradebook.services.grade_report_service import GradeReportService
from gradebook.services.identity import IdentityResolver, RequestStateIdentityResolver
from gradebook.services.progress_report_service import ProgressReportService

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)


def create_app(
    grade_service: Optional[GradeReportService] = None,
    progress_service: Optional[ProgressReportService] = None,
    identity_resolver: Optional[IdentityResolver] = None,
) -> FastAPI:
    """
    Build the app.

    Services default to the SQL collaborators bound to DATABASE_URL; tests
    and embedding hosts pass their own.
    """
    manage_db = grade_service is None or progress_service is None
    logger.info(f"Gradebook settings: {settings.as_dict()}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting gradebook...")
        if manage_db:
            from gradebook.database import init_db
            await init_db()
            logger.info("Database connected successfully")
        yield
        if manage_db:
            from gradebook.database import close_db
            await close_db()
        logger.info("Gradebook stopped")

    app = FastAPI(title="Gradebook", lifespan=lifespan)

    if manage_db:
        from gradebook.database import AsyncSessionLocal
        default_grades, default_progress = build_report_services(AsyncSessionLocal)
        grade_service = grade_service or default_grades
        progress_service = progress_service or default_progress

    app.state.grade_service = grade_service
    app.state.progress_service = progress_service
    app.state.identity_resolver = identity_resolver or RequestStateIdentityResolver()

    register_exception_handlers(app)
    app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
