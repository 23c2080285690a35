"""Wires the report services to the SQL collaborators."""
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import async_sessionmaker

from gradebook.config import settings
from gradebook.repositories.sql import (
    SqlAssessmentCatalog,
    SqlCourseCatalog,
    SqlEnrollmentProvider,
    SqlSubmissionStore,
)
from gradebook.services.grade_report_service import GradeReportService
from gradebook.services.progress_calculator import ProgressCalculator
from gradebook.services.progress_report_service import ProgressReportService
from gradebook.services.streak_tracker import StreakTracker


def build_report_services(
    session_factory: async_sessionmaker,
    upstream_timeout: Optional[float] = settings.UPSTREAM_TIMEOUT_SECONDS,
    report_timeout: Optional[float] = settings.REPORT_TIMEOUT_SECONDS,
    streak_tracker: Optional[StreakTracker] = None,
    default_credits: int = settings.DEFAULT_CREDITS,
) -> Tuple[GradeReportService, ProgressReportService]:
    collaborators = dict(
        enrollment_provider=SqlEnrollmentProvider(session_factory),
        course_catalog=SqlCourseCatalog(session_factory, default_credits),
        assessment_catalog=SqlAssessmentCatalog(session_factory),
        submission_store=SqlSubmissionStore(session_factory),
        upstream_timeout=upstream_timeout,
        report_timeout=report_timeout,
    )
    grades = GradeReportService(**collaborators)
    progress = ProgressReportService(
        **collaborators,
        streak_tracker=streak_tracker or StreakTracker(
            collaborators["submission_store"],
            tz=settings.TIMEZONE,
            window_days=settings.STREAK_WINDOW_DAYS,
            upstream_timeout=upstream_timeout,
        ),
        progress_calculator=ProgressCalculator(settings.MINUTES_PER_EXERCISE),
    )
    return grades, progress
