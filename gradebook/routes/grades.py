"""
gradebook/routes/grades.py
Grade and progress endpoints for the authenticated learner.

Thin wrapper: identity comes from the injected IdentityResolver, all rules
live in the report services.
"""
import logging

from fastapi import APIRouter, Depends, Request

from gradebook.exceptions import AuthRequiredError
from gradebook.schemas.progress import StandardResponse
from gradebook.services.grade_report_service import GradeReportService
from gradebook.services.progress_report_service import ProgressReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/grades", tags=["Grades"])


# ================= DEPENDENCIES =================

async def get_current_learner_id(request: Request) -> int:
    resolver = request.app.state.identity_resolver
    learner_id = await resolver.resolve(request)
    if learner_id is None:
        raise AuthRequiredError()
    return learner_id


def get_grade_service(request: Request) -> GradeReportService:
    return request.app.state.grade_service


def get_progress_service(request: Request) -> ProgressReportService:
    return request.app.state.progress_service


# ================= ENDPOINTS =================

@router.get("/me", response_model=StandardResponse)
async def get_my_grades(
    learner_id: int = Depends(get_current_learner_id),
    service: GradeReportService = Depends(get_grade_service),
):
    """Transcript, credits and GPA for the current learner."""
    summary = await service.get_user_grades(learner_id)
    return StandardResponse(
        success=True,
        message="Grades retrieved",
        data=summary.model_dump(mode="json"),
    )


@router.get("/me/progress", response_model=StandardResponse)
async def get_my_progress_report(
    learner_id: int = Depends(get_current_learner_id),
    service: ProgressReportService = Depends(get_progress_service),
):
    """Per-course progress cards and daily streak for the current learner."""
    report = await service.get_user_progress_report(learner_id)
    return StandardResponse(
        success=True,
        message="Progress report retrieved",
        data=report.model_dump(mode="json"),
    )


@router.get("/me/courses/{course_id}/progress", response_model=StandardResponse)
async def get_my_course_progress(
    course_id: str,
    learner_id: int = Depends(get_current_learner_id),
    service: ProgressReportService = Depends(get_progress_service),
):
    """Completed/passed breakdown for one course."""
    summary = await service.get_course_progress(course_id, learner_id)
    return StandardResponse(
        success=True,
        message="Course progress retrieved",
        data=summary.model_dump(mode="json"),
    )
