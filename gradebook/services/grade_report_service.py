"""
gradebook/services/grade_report_service.py
Grade report orchestration

Flow:
1. Validate learner id (before any query)
2. Load approved enrollments -> course metadata
3. Per course, concurrently: assessment ids -> best attempts -> weighted total
4. Fold course rows into credits and GPA
"""
import logging
from typing import Any

from gradebook.schemas.course import CourseSummary
from gradebook.schemas.grades import CourseGrade, GradeSummary
from gradebook.services.grade_calculator import GpaAccumulator, GradeCalculator
from gradebook.services.report_base import ReportServiceBase
from gradebook.services.score_aggregator import ScoreAggregator
from gradebook.services.upstream import gather_fail_fast
from gradebook.utils.identifiers import validate_identifier

logger = logging.getLogger(__name__)


class GradeReportService(ReportServiceBase):
    """
    Read-only grade reports.

    Never raises for "no data": a learner without approved enrollments gets
    a zeroed GradeSummary.
    """

    async def get_user_grades(self, learner_id: Any) -> GradeSummary:
        learner_id = validate_identifier(learner_id, "learner_id")
        return await self._with_report_timeout(
            "get_user_grades", self._build_grade_summary(learner_id)
        )

    async def _build_grade_summary(self, learner_id: int) -> GradeSummary:
        courses = await self._approved_courses(learner_id)
        course_grades = await gather_fail_fast(
            self._grade_course(learner_id, course) for course in courses
        )

        accumulator = GpaAccumulator()
        for grade in course_grades:
            accumulator.add(grade.credits, grade.total)

        summary = GradeSummary(
            learner_id=learner_id,
            total_credits=accumulator.total_credits,
            earned_credits=accumulator.earned_credits,
            gpa=accumulator.gpa,
            courses=course_grades,
        )
        logger.info(
            f"Grades computed: learner={learner_id}, courses={len(course_grades)}, "
            f"graded={accumulator.graded_courses}, "
            f"credits={summary.earned_credits}/{summary.total_credits}, gpa={summary.gpa}"
        )
        return summary

    async def _grade_course(self, learner_id: int, course: CourseSummary) -> CourseGrade:
        assessment_ids = await self._assessment_ids(course.id)
        best_attempts = await self._best_attempts(learner_id, course.id, assessment_ids)
        score = ScoreAggregator.aggregate(assessment_ids, best_attempts)
        total = score.total

        return CourseGrade(
            course_id=course.id,
            code=course.code,
            name=course.name,
            credits=course.credits,
            quiz_score=score.quiz_score,
            practice_score=score.practice_score,
            total=total,
            letter_grade=GradeCalculator.letter_grade(total),
        )
