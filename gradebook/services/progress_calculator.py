"""
gradebook/services/progress_calculator.py
Progress Metrics Calculator

Computes objective, measurable completion signals per course:
- completion: distinct assessments with at least one submission (score irrelevant)
- progress percent: completed / total, 0 when the course has no assessments
- category tier from the weighted 0-100 percent
- estimated study time from completed exercises

Pure: all inputs are already fetched by the report service.
"""
from dataclasses import dataclass
from typing import Mapping, Optional

from gradebook.config import settings
from gradebook.orm.assessment import AssessmentKind
from gradebook.schemas.course import CourseSummary
from gradebook.schemas.progress import CourseProgressDetail, CourseProgressSummary, KindProgress
from gradebook.services.score_aggregator import CourseScore
from gradebook.utils.rounding import round_half_up

CATEGORY_EXCELLENT = "Excellent"
CATEGORY_GOOD = "Good"
CATEGORY_AVERAGE = "Average"

EXCELLENT_THRESHOLD = 80.0
GOOD_THRESHOLD = 60.0


@dataclass(frozen=True)
class KindCompletion:
    """Container for one kind's completion counts."""
    total: int
    completed: int
    passed: int = 0

    def to_schema(self) -> KindProgress:
        return KindProgress(total=self.total, completed=self.completed, passed=self.passed)


class ProgressCalculator:

    def __init__(self, minutes_per_exercise: int = settings.MINUTES_PER_EXERCISE):
        self.minutes_per_exercise = minutes_per_exercise

    @staticmethod
    def progress_percent(completed: int, total: int) -> int:
        if total <= 0:
            return 0
        return int(round_half_up(completed / total * 100))

    @staticmethod
    def category(weighted_percent: Optional[float]) -> str:
        percent = weighted_percent or 0.0
        if percent >= EXCELLENT_THRESHOLD:
            return CATEGORY_EXCELLENT
        if percent >= GOOD_THRESHOLD:
            return CATEGORY_GOOD
        return CATEGORY_AVERAGE

    @staticmethod
    def display_score(weighted_percent: Optional[float]) -> float:
        """0-100 weighted percent -> one-decimal 0-10 display score."""
        return round_half_up(weighted_percent or 0.0) / 10

    def study_time(self, completed_exercises: int) -> str:
        minutes = completed_exercises * self.minutes_per_exercise
        hours, remaining = divmod(minutes, 60)
        return f"{hours}h {remaining}m"

    @staticmethod
    def totals(completion: Mapping[AssessmentKind, KindCompletion]) -> tuple:
        total = sum(c.total for c in completion.values())
        completed = sum(c.completed for c in completion.values())
        return completed, total

    def course_detail(
        self,
        course: CourseSummary,
        completion: Mapping[AssessmentKind, KindCompletion],
        score: CourseScore,
    ) -> CourseProgressDetail:
        completed, total = self.totals(completion)
        weighted_percent = score.weighted_percent
        return CourseProgressDetail(
            course_id=course.id,
            code=course.code,
            name=course.name,
            category=self.category(weighted_percent),
            progress_percent=self.progress_percent(completed, total),
            exercises_progress=f"{completed}/{total}",
            study_time=self.study_time(completed),
            current_score=self.display_score(weighted_percent),
        )

    def course_summary(
        self,
        course_id: int,
        learner_id: int,
        completion: Mapping[AssessmentKind, KindCompletion],
    ) -> CourseProgressSummary:
        completed, total = self.totals(completion)
        empty = KindCompletion(total=0, completed=0)
        return CourseProgressSummary(
            course_id=course_id,
            learner_id=learner_id,
            total_exercises=total,
            completed_exercises=completed,
            quiz_progress=completion.get(AssessmentKind.QUIZ, empty).to_schema(),
            practice_progress=completion.get(AssessmentKind.PRACTICE, empty).to_schema(),
            progress_percent=self.progress_percent(completed, total),
        )
