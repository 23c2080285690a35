"""
gradebook/repositories/sql.py
SQLAlchemy implementations of the collaborator contracts.

Each call opens its own short-lived session from the factory, so the services
can fan out per-course queries concurrently without sharing an AsyncSession.
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Set

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import async_sessionmaker

from gradebook.config import settings
from gradebook.orm.assessment import Assessment, AssessmentKind
from gradebook.orm.course import Course
from gradebook.orm.enrollment import Enrollment, EnrollmentStatus
from gradebook.orm.submission import Submission
from gradebook.schemas.course import CourseSummary

logger = logging.getLogger(__name__)


def _to_naive_utc(value: datetime) -> datetime:
    """Submissions are stored as naive UTC; align aware inputs with that."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class SqlSubmissionStore:
    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def best_percentage_per_assessment(
        self, learner_id: int, assessment_ids: Sequence[int]
    ) -> Dict[int, float]:
        if not assessment_ids:
            return {}

        stmt = (
            select(Submission.assessment_id, func.max(Submission.percentage))
            .where(
                and_(
                    Submission.learner_id == learner_id,
                    Submission.assessment_id.in_(list(assessment_ids))
                )
            )
            .group_by(Submission.assessment_id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return {
                assessment_id: float(best)
                for assessment_id, best in result.all()
                if best is not None
            }

    async def distinct_submitted_assessments(
        self, learner_id: int, assessment_ids: Sequence[int]
    ) -> Set[int]:
        return await self._distinct_assessments(learner_id, assessment_ids, passed_only=False)

    async def distinct_passed_assessments(
        self, learner_id: int, assessment_ids: Sequence[int]
    ) -> Set[int]:
        return await self._distinct_assessments(learner_id, assessment_ids, passed_only=True)

    async def _distinct_assessments(
        self, learner_id: int, assessment_ids: Sequence[int], passed_only: bool
    ) -> Set[int]:
        if not assessment_ids:
            return set()

        conditions = [
            Submission.learner_id == learner_id,
            Submission.assessment_id.in_(list(assessment_ids)),
        ]
        if passed_only:
            conditions.append(Submission.passed == True)  # noqa: E712

        stmt = select(Submission.assessment_id).where(and_(*conditions)).distinct()
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return set(result.scalars().all())

    async def recent_submission_timestamps(
        self, learner_id: int, since: datetime
    ) -> List[datetime]:
        stmt = (
            select(Submission.submitted_at)
            .where(
                and_(
                    Submission.learner_id == learner_id,
                    Submission.submitted_at >= _to_naive_utc(since)
                )
            )
            .order_by(Submission.submitted_at.desc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())


class SqlEnrollmentProvider:
    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def approved_course_ids_for_learner(self, learner_id: int) -> List[int]:
        stmt = (
            select(Enrollment.course_id)
            .where(
                and_(
                    Enrollment.learner_id == learner_id,
                    Enrollment.status == EnrollmentStatus.APPROVED
                )
            )
            .order_by(Enrollment.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())


class SqlCourseCatalog:
    def __init__(
        self,
        session_factory: async_sessionmaker,
        default_credits: int = settings.DEFAULT_CREDITS,
    ):
        self._session_factory = session_factory
        self.default_credits = default_credits

    async def get_course(self, course_id: int) -> Optional[CourseSummary]:
        async with self._session_factory() as session:
            course = await session.get(Course, course_id)
            if course is None:
                return None
            return CourseSummary(
                id=course.id,
                code=course.code or "N/A",
                name=course.name or "Untitled Course",
                credits=course.credits or self.default_credits,
            )


class SqlAssessmentCatalog:
    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def list_assessment_ids(self, course_id: int, kind: AssessmentKind) -> List[int]:
        stmt = (
            select(Assessment.id)
            .where(
                and_(
                    Assessment.course_id == course_id,
                    Assessment.kind == kind
                )
            )
            .order_by(Assessment.id)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())
