"""
Shared fixtures: in-memory fakes of the four collaborator contracts.

`world` is a tiny mutable dataset; `services` builds both report services
over it with a fixed clock (2024-03-15 12:00 UTC).
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Set

import pytest

from gradebook.orm.assessment import AssessmentKind
from gradebook.orm.enrollment import EnrollmentStatus
from gradebook.schemas.course import CourseSummary
from gradebook.services.grade_report_service import GradeReportService
from gradebook.services.progress_report_service import ProgressReportService
from gradebook.services.streak_tracker import StreakTracker

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@dataclass
class FakeSubmission:
    learner_id: int
    assessment_id: int
    percentage: float
    passed: bool
    submitted_at: datetime


@dataclass
class FakeWorld:
    courses: Dict[int, CourseSummary] = field(default_factory=dict)
    assessments: Dict[int, tuple] = field(default_factory=dict)  # id -> (course_id, kind)
    enrollments: List[tuple] = field(default_factory=list)       # (learner_id, course_id, status)
    submissions: List[FakeSubmission] = field(default_factory=list)
    calls: List[str] = field(default_factory=list)
    failures: Dict[str, Exception] = field(default_factory=dict)
    _next_assessment_id: int = 100

    def add_course(self, course_id: int, code="CS101", name="Intro", credits=3) -> CourseSummary:
        course = CourseSummary(id=course_id, code=code, name=name, credits=credits)
        self.courses[course_id] = course
        return course

    def add_assessment(self, course_id: int, kind: AssessmentKind) -> int:
        self._next_assessment_id += 1
        self.assessments[self._next_assessment_id] = (course_id, kind)
        return self._next_assessment_id

    def enroll(self, learner_id: int, course_id: int, status=EnrollmentStatus.APPROVED):
        self.enrollments.append((learner_id, course_id, status))

    def submit(self, learner_id: int, assessment_id: int, percentage: float,
               passed: Optional[bool] = None, submitted_at: datetime = NOW):
        if passed is None:
            passed = percentage >= 50
        self.submissions.append(
            FakeSubmission(learner_id, assessment_id, percentage, passed, submitted_at)
        )

    def record(self, operation: str):
        self.calls.append(operation)
        if operation in self.failures:
            raise self.failures[operation]


class FakeSubmissionStore:
    def __init__(self, world: FakeWorld):
        self.world = world

    def _mine(self, learner_id: int, assessment_ids: Sequence[int]):
        wanted = set(assessment_ids)
        return [
            s for s in self.world.submissions
            if s.learner_id == learner_id and s.assessment_id in wanted
        ]

    async def best_percentage_per_assessment(self, learner_id, assessment_ids) -> Dict[int, float]:
        self.world.record("best_percentage_per_assessment")
        best: Dict[int, float] = {}
        for s in self._mine(learner_id, assessment_ids):
            best[s.assessment_id] = max(best.get(s.assessment_id, s.percentage), s.percentage)
        return best

    async def distinct_submitted_assessments(self, learner_id, assessment_ids) -> Set[int]:
        self.world.record("distinct_submitted_assessments")
        return {s.assessment_id for s in self._mine(learner_id, assessment_ids)}

    async def distinct_passed_assessments(self, learner_id, assessment_ids) -> Set[int]:
        self.world.record("distinct_passed_assessments")
        return {s.assessment_id for s in self._mine(learner_id, assessment_ids) if s.passed}

    async def recent_submission_timestamps(self, learner_id, since) -> List[datetime]:
        self.world.record("recent_submission_timestamps")
        return [
            s.submitted_at for s in self.world.submissions
            if s.learner_id == learner_id and s.submitted_at >= since
        ]


class FakeEnrollmentProvider:
    def __init__(self, world: FakeWorld):
        self.world = world

    async def approved_course_ids_for_learner(self, learner_id) -> List[int]:
        self.world.record("approved_course_ids_for_learner")
        return [
            course_id for lid, course_id, status in self.world.enrollments
            if lid == learner_id and status == EnrollmentStatus.APPROVED
        ]


class FakeCourseCatalog:
    def __init__(self, world: FakeWorld):
        self.world = world

    async def get_course(self, course_id) -> Optional[CourseSummary]:
        self.world.record("get_course")
        return self.world.courses.get(course_id)


class FakeAssessmentCatalog:
    def __init__(self, world: FakeWorld):
        self.world = world

    async def list_assessment_ids(self, course_id, kind) -> List[int]:
        self.world.record("list_assessment_ids")
        return [
            aid for aid, (cid, k) in sorted(self.world.assessments.items())
            if cid == course_id and k == kind
        ]


@pytest.fixture
def world() -> FakeWorld:
    return FakeWorld()


@pytest.fixture
def collaborators(world):
    return dict(
        enrollment_provider=FakeEnrollmentProvider(world),
        course_catalog=FakeCourseCatalog(world),
        assessment_catalog=FakeAssessmentCatalog(world),
        submission_store=FakeSubmissionStore(world),
        upstream_timeout=1.0,
        report_timeout=2.0,
    )


@pytest.fixture
def grade_service(collaborators) -> GradeReportService:
    return GradeReportService(**collaborators)


@pytest.fixture
def progress_service(collaborators) -> ProgressReportService:
    tracker = StreakTracker(
        collaborators["submission_store"],
        tz="UTC",
        window_days=30,
        clock=lambda: NOW,
        upstream_timeout=1.0,
    )
    return ProgressReportService(**collaborators, streak_tracker=tracker)


@pytest.fixture
def now() -> datetime:
    return NOW
