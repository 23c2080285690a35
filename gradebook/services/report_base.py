"""
gradebook/services/report_base.py
Shared plumbing for the grade and progress report services.

Loads a learner's approved courses and each course's assessments through the
guarded upstream calls, and bounds a whole report by a timeout. Per-course
failures are fail-fast: one failing course fails the report.
"""
import asyncio
import logging
from typing import Awaitable, Dict, List, Optional, TypeVar

from gradebook.config import settings
from gradebook.exceptions import ReportTimeoutError
from gradebook.orm.assessment import AssessmentKind
from gradebook.repositories.interfaces import (
    AssessmentCatalog,
    CourseCatalog,
    EnrollmentProvider,
    SubmissionStore,
)
from gradebook.schemas.course import CourseSummary
from gradebook.services.best_attempt_selector import BestAttemptSelector
from gradebook.services.upstream import call_upstream, gather_fail_fast

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReportServiceBase:

    def __init__(
        self,
        enrollment_provider: EnrollmentProvider,
        course_catalog: CourseCatalog,
        assessment_catalog: AssessmentCatalog,
        submission_store: SubmissionStore,
        upstream_timeout: Optional[float] = settings.UPSTREAM_TIMEOUT_SECONDS,
        report_timeout: Optional[float] = settings.REPORT_TIMEOUT_SECONDS,
    ):
        self.enrollment_provider = enrollment_provider
        self.course_catalog = course_catalog
        self.assessment_catalog = assessment_catalog
        self.submission_store = submission_store
        self.upstream_timeout = upstream_timeout
        self.report_timeout = report_timeout
        self.best_attempt_selector = BestAttemptSelector(submission_store, upstream_timeout)

    async def _with_report_timeout(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self.report_timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{operation} exceeded report timeout of {self.report_timeout}s")
            raise ReportTimeoutError(operation, self.report_timeout) from e

    async def _approved_courses(self, learner_id: int) -> List[CourseSummary]:
        course_ids = await call_upstream(
            "EnrollmentProvider",
            "approved_course_ids_for_learner",
            self.enrollment_provider.approved_course_ids_for_learner(learner_id),
            timeout=self.upstream_timeout,
        )
        # A learner can only be enrolled once per course
        unique_ids = list(dict.fromkeys(course_ids))

        courses = await gather_fail_fast(
            call_upstream(
                "CourseCatalog",
                "get_course",
                self.course_catalog.get_course(course_id),
                timeout=self.upstream_timeout,
                course_id=course_id,
            )
            for course_id in unique_ids
        )

        found = []
        for course_id, course in zip(unique_ids, courses):
            if course is None:
                logger.warning(
                    f"Approved enrollment of learner {learner_id} points at missing course {course_id} - skipping"
                )
                continue
            found.append(course)
        return found

    async def _assessment_ids(self, course_id: int) -> Dict[AssessmentKind, List[int]]:
        kinds = list(AssessmentKind)
        id_lists = await gather_fail_fast(
            call_upstream(
                "AssessmentCatalog",
                "list_assessment_ids",
                self.assessment_catalog.list_assessment_ids(course_id, kind),
                timeout=self.upstream_timeout,
                course_id=course_id,
            )
            for kind in kinds
        )
        return {kind: list(ids) for kind, ids in zip(kinds, id_lists)}

    async def _best_attempts(
        self,
        learner_id: int,
        course_id: int,
        assessment_ids: Dict[AssessmentKind, List[int]],
    ) -> Dict[AssessmentKind, Dict[int, float]]:
        kinds = list(assessment_ids)
        results = await gather_fail_fast(
            self.best_attempt_selector.select(learner_id, assessment_ids[kind], course_id=course_id)
            for kind in kinds
        )
        return dict(zip(kinds, results))
