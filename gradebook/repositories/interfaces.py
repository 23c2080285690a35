"""
gradebook/repositories/interfaces.py
Read-only collaborator contracts consumed by the grading and progress services.

Implementations may be SQL (see repositories/sql.py), remote services or
in-memory fakes. Every method is a coroutine; none of them mutate data.
Raising is how an implementation reports failure; returning empty results
means "no data".
"""
from datetime import datetime
from typing import Dict, List, Optional, Protocol, Sequence, Set, runtime_checkable

from gradebook.orm.assessment import AssessmentKind
from gradebook.schemas.course import CourseSummary


@runtime_checkable
class SubmissionStore(Protocol):
    """Access to quiz/practice attempt records."""

    async def best_percentage_per_assessment(
        self, learner_id: int, assessment_ids: Sequence[int]
    ) -> Dict[int, float]:
        """Highest percentage per assessment; assessments without submissions are absent."""
        ...

    async def distinct_submitted_assessments(
        self, learner_id: int, assessment_ids: Sequence[int]
    ) -> Set[int]:
        """Assessments with at least one submission by the learner."""
        ...

    async def distinct_passed_assessments(
        self, learner_id: int, assessment_ids: Sequence[int]
    ) -> Set[int]:
        """Assessments with at least one passing submission by the learner."""
        ...

    async def recent_submission_timestamps(
        self, learner_id: int, since: datetime
    ) -> List[datetime]:
        """Submission times (any kind) at or after `since`."""
        ...


@runtime_checkable
class EnrollmentProvider(Protocol):
    async def approved_course_ids_for_learner(self, learner_id: int) -> List[int]:
        ...


@runtime_checkable
class CourseCatalog(Protocol):
    async def get_course(self, course_id: int) -> Optional[CourseSummary]:
        """Course metadata, or None when the course does not exist."""
        ...


@runtime_checkable
class AssessmentCatalog(Protocol):
    async def list_assessment_ids(self, course_id: int, kind: AssessmentKind) -> List[int]:
        ...
