"""
gradebook/services/progress_report_service.py
Progress report orchestration

Exposes:
- get_user_progress_report: per-course progress cards, overall exercise
  completion, average weighted score and the daily streak
- get_course_progress: total/completed/passed breakdown for one course
- get_multiple_courses_progress / get_user_overall_progress: the same across
  a caller-supplied course list

The streak query does not depend on the per-course work and runs alongside it.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from gradebook.config import settings
from gradebook.orm.assessment import AssessmentKind
from gradebook.schemas.course import CourseSummary
from gradebook.schemas.progress import (
    CourseProgressDetail,
    CourseProgressSummary,
    OverallProgress,
    ProgressReport,
)
from gradebook.services.progress_calculator import KindCompletion, ProgressCalculator
from gradebook.services.report_base import ReportServiceBase
from gradebook.services.score_aggregator import ScoreAggregator
from gradebook.services.streak_tracker import StreakTracker
from gradebook.services.upstream import call_upstream, gather_fail_fast
from gradebook.utils.identifiers import validate_identifier
from gradebook.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CourseProgressResult:
    detail: CourseProgressDetail
    completed: int
    total: int
    weighted_percent: Optional[float]


class ProgressReportService(ReportServiceBase):

    def __init__(
        self,
        *args,
        streak_tracker: Optional[StreakTracker] = None,
        progress_calculator: Optional[ProgressCalculator] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.streak_tracker = streak_tracker or StreakTracker(
            self.submission_store, upstream_timeout=self.upstream_timeout
        )
        self.progress_calculator = progress_calculator or ProgressCalculator(
            settings.MINUTES_PER_EXERCISE
        )

    # ================= LEARNER REPORT =================

    async def get_user_progress_report(self, learner_id: Any) -> ProgressReport:
        learner_id = validate_identifier(learner_id, "learner_id")
        return await self._with_report_timeout(
            "get_user_progress_report", self._build_progress_report(learner_id)
        )

    async def _build_progress_report(self, learner_id: int) -> ProgressReport:
        course_results, streak_days = await gather_fail_fast([
            self._all_course_progress(learner_id),
            self.streak_tracker.current_streak(learner_id),
        ])

        total_exercises = sum(r.total for r in course_results)
        completed_exercises = sum(r.completed for r in course_results)

        # Courses without assessments have no score and are left out of the average
        scored = [r.weighted_percent for r in course_results if r.weighted_percent is not None]
        average_score = round_half_up(sum(scored) / len(scored)) / 10 if scored else 0.0

        report = ProgressReport(
            learner_id=learner_id,
            streak_days=streak_days,
            exercises_completed=f"{completed_exercises}/{total_exercises}",
            average_score=average_score,
            course_progress=[r.detail for r in course_results],
        )
        logger.info(
            f"Progress report: learner={learner_id}, courses={len(course_results)}, "
            f"exercises={report.exercises_completed}, streak={streak_days}"
        )
        return report

    async def _all_course_progress(self, learner_id: int) -> List[_CourseProgressResult]:
        courses = await self._approved_courses(learner_id)
        return await gather_fail_fast(
            self._course_progress(learner_id, course) for course in courses
        )

    async def _course_progress(
        self, learner_id: int, course: CourseSummary
    ) -> _CourseProgressResult:
        assessment_ids = await self._assessment_ids(course.id)
        completion, best_attempts = await gather_fail_fast([
            self._completion(learner_id, course.id, assessment_ids, include_passed=False),
            self._best_attempts(learner_id, course.id, assessment_ids),
        ])
        score = ScoreAggregator.aggregate(assessment_ids, best_attempts)
        detail = self.progress_calculator.course_detail(course, completion, score)
        completed, total = self.progress_calculator.totals(completion)
        return _CourseProgressResult(
            detail=detail,
            completed=completed,
            total=total,
            weighted_percent=score.weighted_percent,
        )

    # ================= COURSE SUMMARIES =================

    async def get_course_progress(self, course_id: Any, learner_id: Any) -> CourseProgressSummary:
        course_id = validate_identifier(course_id, "course_id")
        learner_id = validate_identifier(learner_id, "learner_id")
        return await self._with_report_timeout(
            "get_course_progress", self._course_summary(course_id, learner_id)
        )

    async def get_multiple_courses_progress(
        self, course_ids: Iterable[Any], learner_id: Any
    ) -> Dict[int, CourseProgressSummary]:
        learner_id = validate_identifier(learner_id, "learner_id")
        unique_ids = list(dict.fromkeys(
            validate_identifier(course_id, "course_id") for course_id in course_ids
        ))
        summaries = await self._with_report_timeout(
            "get_multiple_courses_progress",
            gather_fail_fast(self._course_summary(cid, learner_id) for cid in unique_ids),
        )
        return dict(zip(unique_ids, summaries))

    async def get_user_overall_progress(
        self, learner_id: Any, course_ids: Iterable[Any]
    ) -> OverallProgress:
        progress = await self.get_multiple_courses_progress(course_ids, learner_id)
        if not progress:
            return OverallProgress()

        percents = [p.progress_percent for p in progress.values()]
        return OverallProgress(
            total_courses=len(progress),
            total_exercises=sum(p.total_exercises for p in progress.values()),
            completed_exercises=sum(p.completed_exercises for p in progress.values()),
            average_progress=int(round_half_up(sum(percents) / len(percents))),
        )

    async def _course_summary(self, course_id: int, learner_id: int) -> CourseProgressSummary:
        assessment_ids = await self._assessment_ids(course_id)
        completion = await self._completion(learner_id, course_id, assessment_ids, include_passed=True)
        return self.progress_calculator.course_summary(course_id, learner_id, completion)

    # ================= HELPERS =================

    async def _completion(
        self,
        learner_id: int,
        course_id: int,
        assessment_ids: Dict[AssessmentKind, List[int]],
        include_passed: bool,
    ) -> Dict[AssessmentKind, KindCompletion]:
        kinds = list(assessment_ids)
        counts = await gather_fail_fast(
            self._kind_completion(learner_id, course_id, assessment_ids[kind], include_passed)
            for kind in kinds
        )
        return dict(zip(kinds, counts))

    async def _kind_completion(
        self,
        learner_id: int,
        course_id: int,
        ids: List[int],
        include_passed: bool,
    ) -> KindCompletion:
        if not ids:
            return KindCompletion(total=0, completed=0, passed=0)

        submitted, passed = await gather_fail_fast([
            self._distinct(
                "distinct_submitted_assessments",
                self.submission_store.distinct_submitted_assessments,
                learner_id, course_id, ids,
            ),
            self._distinct(
                "distinct_passed_assessments",
                self.submission_store.distinct_passed_assessments,
                learner_id, course_id, ids,
            ) if include_passed else _empty_set(),
        ])
        known = set(ids)
        return KindCompletion(
            total=len(ids),
            completed=len(set(submitted) & known),
            passed=len(set(passed) & known),
        )

    async def _distinct(self, operation, method, learner_id, course_id, ids) -> set:
        return await call_upstream(
            "SubmissionStore",
            operation,
            method(learner_id, ids),
            timeout=self.upstream_timeout,
            course_id=course_id,
        )


async def _empty_set() -> set:
    return set()
